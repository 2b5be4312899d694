# 🧰 giftlist/shared/__init__.py
"""🧰 Спільні утиліти та ієрархія винятків."""
