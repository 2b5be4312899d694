# 🌐 giftlist/api/preview_routes.py
"""
🌐 HTTP-ендпоінт `GET /api/preview?url=…`.

🔹 400 — відсутній / порожній / некоректний / не-http(s) URL.
🔹 200 — превʼю (успіх або м'який fallback).
🔹 500 — лише якщо виняток вирвався з сервісу (див. `make_error_handler`).
🔹 Кожна відповідь: `Cache-Control: no-store, max-age=0`.
"""

# 🌐 Зовнішні бібліотеки
from fastapi import APIRouter, Query, Request								# 🚏 Маршрутизація
from fastapi.responses import JSONResponse								# 📤 JSON-відповідь

# 🔠 Системні імпорти
import logging															# 🧾 Логування
from typing import Optional											# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from giftlist.infrastructure.previews.url_preview_service import UrlPreviewService	# 🔗 Сервіс превʼю
from giftlist.errors.error_handler import NO_STORE_HEADERS, make_error_handler	# 🛡️ Обробка збоїв
from giftlist.shared.errors import InvalidUrlError						# ⚠️ Помилка вводу
from giftlist.shared.utils.logger import LOG_NAME						# 🏷️ Імʼя базового логера
from giftlist.shared.utils.url_tools import validate_http_url			# ✅ Валідація URL

router = APIRouter(prefix="/api", tags=["preview"])
logger = logging.getLogger(f"{LOG_NAME}.api.preview")

MISSING_URL_MESSAGE = "Missing url parameter."


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=400, headers=NO_STORE_HEADERS)


@router.get("/preview")
@make_error_handler()
async def get_preview(request: Request, url: Optional[str] = Query(default=None)) -> JSONResponse:
    """🔗 Превʼю посилання для форми «додати бажання»."""
    if url is None or not url.strip():
        return _bad_request(MISSING_URL_MESSAGE)
    try:
        target = validate_http_url(url)
    except InvalidUrlError as exc:
        logger.info("🚫 Некоректний URL: %r (%s)", url, exc.message)
        return _bad_request(exc.message)

    service: UrlPreviewService = request.app.state.preview_service
    result = await service.preview_with_deadline(target)
    return JSONResponse(result.to_dict(), status_code=200, headers=NO_STORE_HEADERS)


__all__ = ["router", "get_preview", "MISSING_URL_MESSAGE"]
