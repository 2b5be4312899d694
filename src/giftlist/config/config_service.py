# ⚙️ config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з config.yaml, config.json та .env.
- Надає єдиний метод .get() для доступу до будь-якого параметра.
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import json                                 # 📄 Робота з JSON-файлами
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Callable, Dict, Optional  # 🧩 Типізація

# 🧩 Внутрішні модулі проєкту
from giftlist.shared.utils.logger import LOG_NAME  # 🏷️ Імʼя базового логера

logger = logging.getLogger(f"{LOG_NAME}.config")

# 🔐 ENV-змінна → крапковий ключ конфігурації
ENV_KEYS: Dict[str, str] = {
    "APP_HOST": "server.host",
    "APP_PORT": "server.port",
    "LOG_LEVEL": "logging.level",
    "STORAGE_PUBLIC_URL": "storage.public_base_url",
    "STORAGE_BUCKET": "storage.bucket",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних параметрів сервісу.
    Працює як Singleton — конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None      # 🧩 Singleton-екземпляр
    _config: Dict[str, Any]                          # 📦 Обʼєднана конфігурація

    def __new__(cls) -> "ConfigService":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = {}
            cls._instance._load_all_configs()
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """♻️ Скидає синглтон (наступний виклик перечитає файли й ENV)."""
        cls._instance = None

    def _load_all_configs(self) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет (останній перемагає): config.yaml → config.json → ENV.
        """
        base_dir = Path(__file__).parent

        # --- 1. YAML-файл ---
        try:
            with open(base_dir / "config.yaml", "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("⚠️ Не вдалося завантажити config.yaml: %s", e)

        # --- 2. JSON-файл (опційні локальні перекриття) ---
        json_path = base_dir / "config.json"
        if json_path.exists():
            try:
                with open(json_path, "r", encoding="utf-8") as f:
                    self._deep_update(self._config, json.load(f))
            except json.JSONDecodeError as e:
                logger.warning("⚠️ Не вдалося завантажити config.json: %s", e)

        # --- 3. .env / змінні середовища ---
        load_dotenv()
        env_vars = {key: os.getenv(name) for name, key in ENV_KEYS.items()}
        env_vars = {key: value for key, value in env_vars.items() if value not in (None, "")}
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.info("✅ Конфігурацію успішно завантажено.")

    def get(self, key: str, default: Any = None, cast: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'preview.fetch_timeout_ms').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.
            cast: Опційне перетворення (int, float…); при помилці повертається default.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        if cast is not None and value is not None:
            try:
                return cast(value)
            except (TypeError, ValueError):
                logger.warning("⚠️ Ключ '%s': не вдалося привести %r → default", key, value)
                return default
        return value

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================

    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'storage.bucket' → {'storage': {'bucket': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """🔁 Рекурсивно обʼєднує два словники."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value
