# 🛠️ giftlist/errors/error_handler.py
"""
🛠️ Фабрика декораторів для безпечного виконання async-хендлерів FastAPI.

🔹 Не змінює сигнатуру функції (FastAPI читає її через `__wrapped__`).
🔹 Коректно пропускає `asyncio.CancelledError`, щоб не ламати зупинку задач.
🔹 Будь-який інший виняток → лог із `ReasonCode` та загальна відповідь 500.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from fastapi.responses import JSONResponse								# 📤 JSON-відповідь

# 🔠 Системні імпорти
import asyncio															# ⏱️ CancelledError
import functools														# 🧱 wraps для збереження метаданих
import logging															# 🧾 Логи обробки помилок
from typing import Any, Callable, Coroutine, Dict						# 📐 Типи для сигнатур

# 🧩 Внутрішні модулі проєкту
from giftlist.shared.utils.logger import LOG_NAME						# 🏷️ Імʼя базового логера
from .reason_mapper import map_error_to_reason							# 🧭 Класифікація збою

logger = logging.getLogger(f"{LOG_NAME}.errors.error_handler")


# ================================
# 🔧 ТИПИ ТА КОНСТАНТИ
# ================================
AsyncHandler = Callable[..., Coroutine[Any, Any, Any]]

GENERIC_ERROR_MESSAGE = "Could not build preview."						# 💬 Текст для 500
NO_STORE_HEADERS: Dict[str, str] = {"Cache-Control": "no-store, max-age=0"}	# 🚫 Жодного кешування превʼю


# ================================
# 🏭 ФАБРИКА ДЕКОРАТОРІВ
# ================================
def make_error_handler(message: str = GENERIC_ERROR_MESSAGE) -> Callable[[AsyncHandler], AsyncHandler]:
    """
    Створює декоратор для async-ендпоінтів.

    Args:
        message: Текст, що повертається клієнту у тілі 500-відповіді.

    Returns:
        Callable, що обгортає хендлер централізованою обробкою винятків.
    """

    def decorator(func: AsyncHandler) -> AsyncHandler:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                logger.info("⏹️ error_handler.cancelled", extra={"handler": func.__name__})
                raise													# ⚠️ Ніколи не глотаємо cancel
            except Exception as exc:									# noqa: BLE001
                reason, ctx = map_error_to_reason(exc)
                logger.error(
                    "🔥 error_handler.exception",
                    extra={"handler": func.__name__, "reason": reason.value, **ctx},
                    exc_info=True,
                )
                return JSONResponse({"message": message}, status_code=500, headers=NO_STORE_HEADERS)

        return wrapper

    return decorator


__all__ = ["GENERIC_ERROR_MESSAGE", "NO_STORE_HEADERS", "make_error_handler"]
