# 🗄️ giftlist/domain/storage/__init__.py
"""🗄️ Контракт бінарного сховища зображень."""

from .interfaces import IObjectStorage

__all__ = ["IObjectStorage"]
