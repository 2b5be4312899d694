"""🔗 Сервіс превʼю посилань."""

from .url_preview_service import UrlPreviewService

__all__ = ["UrlPreviewService"]
