# 🧩 giftlist/domain/__init__.py
"""🧩 Доменний шар: сутності превʼю та контракти зовнішніх колабораторів."""
