"""🛒 Стратегії превʼю для маркетплейсів із публічним API."""

from .mercadolibre_strategy import MercadoLibrePreviewStrategy, pick_mercadolibre_ids

__all__ = ["MercadoLibrePreviewStrategy", "pick_mercadolibre_ids"]
