# 🗄️ giftlist/domain/storage/interfaces.py
"""
🗄️ Контракт зовнішнього обʼєктного сховища (хмарний bucket).
"""

from __future__ import annotations

from typing import Protocol


class IObjectStorage(Protocol):
    """Зберігає байти за шляхом і повертає публічний URL."""

    async def put(self, path: str, data: bytes, content_type: str) -> str:
        """Завантажує (з перезаписом) та повертає публічне посилання."""
        ...
