# 🧾 giftlist/infrastructure/parsers/extractors/__init__.py
"""
🧾 Міксини/екстрактори для витягування даних із meta-тегів та JSON-LD.

🔹 `CascadeTier` — рівень каскаду «екстрактор → тег походження».
🔹 `MetaTagsMixin`, `JsonLdMixin` — спеціалізовані екстрактори.
"""

from __future__ import annotations

from .base import CascadeTier																# 🪜 Рівень каскаду
from .json_ld import JsonLdMixin															# 📄 Витяг із JSON-LD
from .meta import MetaTagsMixin															# 🏷️ Витяг із meta

__all__ = [
    "CascadeTier",																		# 🪜 Рівень каскаду
    "JsonLdMixin",																		# 📄 Екстрактор JSON-LD
    "MetaTagsMixin",																		# 🏷️ Екстрактор meta
]
