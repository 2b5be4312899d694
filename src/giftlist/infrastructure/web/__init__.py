"""🌐 Мережевий шар: обмежене завантаження сторінок, JSON та зображень."""

from .page_fetcher import FetchedBinary, FetchedPage, HtmlPageFetcher

__all__ = ["FetchedBinary", "FetchedPage", "HtmlPageFetcher"]
