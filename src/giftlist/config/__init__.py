# ⚙️ giftlist/config/__init__.py
"""
⚙️ Пакет Config — централізована конфігурація сервісу.

Відповідає за злиття `config.yaml`, `config.json` та змінних середовища (.env).
"""

from .config_service import ConfigService

__all__ = ["ConfigService"]
