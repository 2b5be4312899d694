# 🌐 giftlist/infrastructure/web/page_fetcher.py
"""
🌐 Обмежене асинхронне завантаження сторінок через `httpx`.

🔹 Один GET без ретраїв, редіректи дозволені, фіксовані заголовки з опцій.
🔹 Тіло стримиться й обрізається на `max_html_bytes`.
🔹 Не-2xx → `NetworkError(status_code=…)`; транспортні винятки httpx летять далі.
🔹 `fetch_json` — для публічних API маркетплейсів (None на будь-якому збої).
🔹 `fetch_binary` — для завантаження зображень товарів.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт

# 🔠 Системні імпорти
import logging															# 🧾 Логування запитів
from dataclasses import dataclass										# 🧱 DTO результатів
from typing import Any, Dict, Mapping, Optional, Tuple					# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from giftlist.infrastructure.parsers._infra_options import (			# ⚙️ Опції інфраструктури
    DEFAULT_PREVIEW_INFRA_OPTIONS,
    PreviewInfraOptions,
)
from giftlist.shared.errors import NetworkError						# ⚠️ Доменна мережна помилка
from giftlist.shared.utils.logger import LOG_NAME						# 🏷️ Імʼя базового логера

logger = logging.getLogger(f"{LOG_NAME}.web.fetcher")					# 🧾 Локальний логер модуля

_CHUNK_SIZE = 64 * 1024													# 📦 Розмір шматка при стримінгу


# ================================
# 📚 DTO РЕЗУЛЬТАТІВ
# ================================
@dataclass(frozen=True, slots=True)
class FetchedPage:
    """📚 Завантажена сторінка."""

    url: str															# 🌐 Фінальна адреса після редіректів
    html: str															# 📄 Декодоване (можливо обрізане) тіло
    status_code: int													# 🔢 HTTP-статус


@dataclass(frozen=True, slots=True)
class FetchedBinary:
    """📚 Завантажений бінарний ресурс (зображення)."""

    url: str
    content: bytes
    content_type: Optional[str]


# ================================
# 📥 ОСНОВНИЙ ЗАВАНТАЖУВАЧ
# ================================
class HtmlPageFetcher:
    """📥 Завантажує HTML/JSON/байти з контролем розміру та статусу."""

    def __init__(
        self,
        options: PreviewInfraOptions = DEFAULT_PREVIEW_INFRA_OPTIONS,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.options = options											# ⚙️ Таймаути, заголовки, ліміти
        self._transport = transport										# 🧪 Підміна транспорту (тести)

    def _client(self, headers: Optional[Mapping[str, str]] = None) -> httpx.AsyncClient:
        """🌐 Новий клієнт на кожен виклик; закривається через `async with`."""
        return httpx.AsyncClient(
            headers=dict(headers) if headers is not None else self.options.request_headers(),
            timeout=httpx.Timeout(self.options.fetch_timeout_sec),
            follow_redirects=True,
            transport=self._transport,
        )

    @staticmethod
    def _ensure_ok(response: httpx.Response, url: str) -> None:
        if not response.is_success:
            logger.info("🚫 HTTP %s для %s", response.status_code, url)
            raise NetworkError(
                f"Unexpected HTTP status {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

    @staticmethod
    async def _read_capped(response: httpx.Response, max_bytes: int) -> Tuple[bytes, bool]:
        """📏 Читає тіло до `max_bytes`; повертає (байти, чи обрізано)."""
        buffer = bytearray()
        async for chunk in response.aiter_bytes(_CHUNK_SIZE):
            if not chunk:												# 🪹 Порожні шматки пропускаємо
                continue
            room = max_bytes - len(buffer)
            if len(chunk) > room:										# ✂️ Обрізано лише коли байти відкинуто
                buffer.extend(chunk[:room])
                return bytes(buffer), True
            buffer.extend(chunk)
        return bytes(buffer), False

    # ================================
    # 📄 HTML
    # ================================
    async def fetch(self, url: str) -> FetchedPage:
        """📄 GET сторінки; не-2xx → `NetworkError`."""
        logger.debug("📥 fetch start: %s", url)
        async with self._client() as client:
            async with client.stream("GET", url) as response:
                self._ensure_ok(response, url)
                body, truncated = await self._read_capped(response, self.options.max_html_bytes)
                encoding = response.charset_encoding or "utf-8"
                final_url = str(response.url)
                status_code = response.status_code

        if truncated:
            logger.info("✂️ Тіло %s обрізано до %d байт.", url, self.options.max_html_bytes)
        try:
            html = body.decode(encoding, errors="replace")
        except LookupError:												# ❓ Невідомий charset у заголовку
            html = body.decode("utf-8", errors="replace")
        logger.debug("✅ fetch ok: %s → %s (%d байт)", url, final_url, len(body))
        return FetchedPage(url=final_url, html=html, status_code=status_code)

    # ================================
    # 🧾 JSON
    # ================================
    async def fetch_json(self, url: str, headers: Optional[Mapping[str, str]] = None) -> Optional[Any]:
        """🧾 GET JSON; будь-який збій (статус, мережа, декодування) → None."""
        request_headers: Dict[str, str] = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        try:
            async with self._client(request_headers) as client:
                response = await client.get(url)
            if not response.is_success:
                logger.debug("🚫 JSON %s → HTTP %s", url, response.status_code)
                return None
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("⚠️ JSON %s не отримано: %s", url, exc)
            return None

    # ================================
    # 🖼️ БАЙТИ
    # ================================
    async def fetch_binary(
        self,
        url: str,
        *,
        max_bytes: int,
        headers: Optional[Mapping[str, str]] = None,
    ) -> FetchedBinary:
        """🖼️ GET бінарного ресурсу; не-2xx → `NetworkError`, понад `max_bytes` → обрізання."""
        async with self._client(headers or {"User-Agent": self.options.user_agent}) as client:
            async with client.stream("GET", url) as response:
                self._ensure_ok(response, url)
                content, truncated = await self._read_capped(response, max_bytes)
                content_type = response.headers.get("content-type")
        if truncated:
            raise NetworkError("Remote file is too large", url=url, details=f"max_bytes={max_bytes}")
        return FetchedBinary(url=url, content=content, content_type=content_type)


__all__ = ["FetchedBinary", "FetchedPage", "HtmlPageFetcher"]
