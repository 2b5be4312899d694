# 🎁 giftlist/__init__.py
"""
🎁 giftlist — сервіс превʼю посилань для сімейних списків побажань.

🔹 `infrastructure.previews` — ядро: URL → назва/зображення/ціна.
🔹 `api` — HTTP-межа (`GET /api/preview`).
🔹 `config`, `shared`, `errors` — конфігурація, логування, винятки.
"""

__version__ = "0.1.0"
