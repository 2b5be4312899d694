"""🏗️ Інфраструктурний шар: мережа, парсинг, сервіси превʼю та сховища."""
