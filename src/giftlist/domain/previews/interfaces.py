# 🧩 giftlist/domain/previews/interfaces.py
"""
🧩 Контракти для побудови превʼю посилань.
"""
from abc import ABC, abstractmethod
from typing import Optional

from .entities import UrlPreviewResult

# ================================
# 🏛️ ІНТЕРФЕЙСИ
# ================================

class IUrlPreviewProvider(ABC):
    """Контракт для будь-якого джерела превʼю за URL."""
    @abstractmethod
    async def fetch_preview(self, raw_url: str) -> UrlPreviewResult:
        """Повертає превʼю; ніколи не кидає винятків (окрім скасування)."""
        pass

class IMarketplacePreviewStrategy(ABC):
    """Контракт для маркетплейсу, який дає дані через API замість HTML."""
    @abstractmethod
    def supports(self, url: str) -> bool:
        """True, якщо URL належить маркетплейсу."""
        pass

    @abstractmethod
    async def fetch(self, raw_url: str, cleaned_url: str) -> Optional[UrlPreviewResult]:
        """Превʼю з API або None, якщо даних недостатньо."""
        pass
