# 🚀 giftlist/api/main.py
"""
🚀 Entry-point HTTP-сервісу превʼю посилань.

🔹 `create_app()` — ConfigService → логування → опції → стратегії → `UrlPreviewService` → FastAPI.
🔹 `run()` — запуск через uvicorn (host/port з конфігу або ENV).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import uvicorn															# 🦄 ASGI-сервер
from fastapi import FastAPI											# 🚀 Застосунок

# 🔠 Системні імпорти
import logging															# 🧾 Логування запуску
from typing import Any, Dict, List, Optional							# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from giftlist import __version__										# 🏷️ Версія
from giftlist.config.config_service import ConfigService				# ⚙️ Конфіги
from giftlist.domain.previews.interfaces import IMarketplacePreviewStrategy	# 🧩 Контракт стратегій
from giftlist.infrastructure.parsers._infra_options import (			# ⚙️ Опції інфраструктури
    DEFAULT_PREVIEW_INFRA_OPTIONS,
    PreviewInfraOptions,
)
from giftlist.infrastructure.previews.url_preview_service import UrlPreviewService	# 🔗 Сервіс
from giftlist.infrastructure.url.mercadolibre_strategy import MercadoLibrePreviewStrategy	# 🛒 MercadoLibre
from giftlist.infrastructure.web.page_fetcher import HtmlPageFetcher	# 🌐 Завантаження
from giftlist.shared.utils.logger import LOG_NAME, init_logging_from_config	# 🧾 Логування
from .preview_routes import router as preview_router					# 🚏 Маршрути

logger = logging.getLogger(f"{LOG_NAME}.api")


# ================================
# 🧩 ЗБІРКА ЗАЛЕЖНОСТЕЙ
# ================================
def build_options(config: ConfigService) -> PreviewInfraOptions:
    """⚙️ YAML/JSON-секція `preview` → поверх неї ENV з префіксом `PREVIEW_`."""
    base = PreviewInfraOptions.from_dict(config.get("preview"), fallback=DEFAULT_PREVIEW_INFRA_OPTIONS)
    return PreviewInfraOptions.from_env(base=base)


def build_logging_section(config: ConfigService, options: PreviewInfraOptions) -> Dict[str, Any]:
    """🎚️ Секція `logging`; `PREVIEW_LOG_LEVEL` перекриває її рівень."""
    section = dict(config.get("logging") or {})
    if options.log_level is not None:
        section["level"] = logging.getLevelName(options.effective_log_level())
    return section


def build_preview_service(config: ConfigService, options: Optional[PreviewInfraOptions] = None) -> UrlPreviewService:
    """🔗 Сервіс превʼю з увімкненими стратегіями маркетплейсів."""
    options = options or build_options(config)
    fetcher = HtmlPageFetcher(options)
    strategies: List[IMarketplacePreviewStrategy] = []

    meli_section = config.get("preview.marketplaces.mercadolibre") or {}
    if meli_section.get("enabled", True):
        strategies.append(MercadoLibrePreviewStrategy.from_config(meli_section, fetcher))

    logger.info(
        "🔧 Сервіс превʼю: timeout=%dms deadline=%dms marketplaces=%s",
        options.fetch_timeout_ms,
        options.deadline_ms,
        [type(s).__name__ for s in strategies] if options.marketplace_enabled else "off",
    )
    return UrlPreviewService(options, fetcher=fetcher, strategies=strategies)


# ================================
# 🏗️ APPLICATION FACTORY
# ================================
def create_app(
    config: Optional[ConfigService] = None,
    preview_service: Optional[UrlPreviewService] = None,
    *,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Створює FastAPI-застосунок.

    Args:
        config: Готовий ConfigService (за замовчуванням — синглтон).
        preview_service: Підміна сервісу (тести).
        configure_logging: Чи піднімати handlers логування з конфігу.
    """
    config = config or ConfigService()
    options = build_options(config)
    if configure_logging:
        init_logging_from_config(build_logging_section(config, options))

    app = FastAPI(title="Giftlist link preview", version=__version__)
    app.state.preview_service = preview_service or build_preview_service(config, options)
    app.include_router(preview_router)
    logger.info("✅ FastAPI застосунок готовий")
    return app


def run() -> None:
    """🦄 Запускає сервіс через uvicorn."""
    config = ConfigService()
    app = create_app(config)
    host = config.get("server.host", "0.0.0.0")
    port = config.get("server.port", 8000, cast=int)
    logger.info("🚀 Старт на %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    run()
