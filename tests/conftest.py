# tests/conftest.py
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Добавляем src в sys.path, чтобы работал импорт "giftlist.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from giftlist.infrastructure.parsers._infra_options import PreviewInfraOptions  # noqa: E402
from giftlist.infrastructure.web.page_fetcher import HtmlPageFetcher  # noqa: E402


# ──────────────────────────────────────────────────────────────────────────────
#                               🧪 Общие фикстуры
# ──────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def fast_options() -> PreviewInfraOptions:
    """Короткие таймауты, чтобы тесты на fallback не ждали секундами."""
    return PreviewInfraOptions(fetch_timeout_ms=200, deadline_ms=400, max_html_bytes=50_000)


@pytest.fixture
def make_fetcher(fast_options) -> Callable[..., HtmlPageFetcher]:
    """Фабрика HtmlPageFetcher поверх httpx.MockTransport."""
    def _factory(handler, options: PreviewInfraOptions = None) -> HtmlPageFetcher:
        return HtmlPageFetcher(options or fast_options, transport=httpx.MockTransport(handler))
    return _factory
