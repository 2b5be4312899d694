# 🚨 giftlist/shared/errors.py
"""
🚨 Єдина ієрархія доменних винятків сервісу превʼю.

🔹 `AppError` — базовий клас із `message`/`details` та `to_log_extra()`.
🔹 `UserVisibleError` → `InvalidUrlError` — помилки вводу, що повертаються клієнту (400).
🔹 `NetworkError`, `ParseError` — технічні збої, які ядро поглинає у fallback.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Dict, Optional										# 📐 Типізація


# ================================
# 🧠 БАЗОВІ ВИНЯТКИ
# ================================
class AppError(Exception):
    """🧠 Базовий виняток застосунку."""

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message											# 💬 Коротке повідомлення
        self.details = details											# 🧾 Технічні подробиці для логів

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для `logger.extra`."""
        extra: Dict[str, object] = {"error": type(self).__name__}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, текст якої можна показати клієнту."""


class InvalidUrlError(UserVisibleError, ValueError):
    """🔗 Некоректний або не-http(s) URL."""

    def __init__(self, message: str, *, url: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.url = url													# 🔗 Сирий ввід

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url is not None:
            extra["url"] = self.url
        return extra


# ================================
# 🌐 ТЕХНІЧНІ ВИНЯТКИ
# ================================
class NetworkError(AppError):
    """🌐 Збій HTTP-запиту (неуспішний статус, обрив тощо)."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.url = url													# 🔗 Адреса запиту
        self.status_code = status_code									# 🔢 HTTP-код відповіді

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        return extra


class ParseError(AppError):
    """🧾 Відповідь отримано, але її вміст непридатний."""

    def __init__(self, message: str, *, url: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.url = url

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        return extra


__all__ = [
    "AppError",
    "UserVisibleError",
    "InvalidUrlError",
    "NetworkError",
    "ParseError",
]																		# 📤 Публічний API
