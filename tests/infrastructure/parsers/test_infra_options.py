# tests/infrastructure/parsers/test_infra_options.py
import logging

import pytest

from giftlist.infrastructure.parsers._infra_options import (
    DEFAULT_PREVIEW_INFRA_OPTIONS,
    PreviewInfraOptions,
)


def test_defaults_match_service_contract():
    opts = PreviewInfraOptions.default()
    assert opts.fetch_timeout_ms == 8000
    assert opts.deadline_ms == 9000
    assert opts.fetch_timeout_sec == pytest.approx(8.0)
    headers = opts.request_headers()
    assert headers["Accept"] == "text/html,application/xhtml+xml"
    assert "Mozilla/5.0" in headers["User-Agent"]


def test_invariants_validated_in_post_init():
    with pytest.raises(ValueError):
        PreviewInfraOptions(fetch_timeout_ms=0)
    with pytest.raises(ValueError):
        PreviewInfraOptions(fetch_timeout_ms=5000, deadline_ms=1000)
    with pytest.raises(ValueError):
        PreviewInfraOptions(html_parser="regex")


def test_from_env_overrides_and_ignores_garbage(monkeypatch):
    monkeypatch.setenv("PREVIEW_FETCH_TIMEOUT_MS", "3000")
    monkeypatch.setenv("PREVIEW_DEADLINE_MS", "not-a-number")
    monkeypatch.setenv("PREVIEW_MARKETPLACE_ENABLED", "off")
    monkeypatch.setenv("PREVIEW_LOG_LEVEL", "debug")

    opts = PreviewInfraOptions.from_env()

    assert opts.fetch_timeout_ms == 3000
    assert opts.deadline_ms == DEFAULT_PREVIEW_INFRA_OPTIONS.deadline_ms
    assert opts.marketplace_enabled is False
    assert opts.effective_log_level() == logging.DEBUG


def test_from_env_invalid_combination_falls_back_to_base(monkeypatch):
    monkeypatch.setenv("PREVIEW_FETCH_TIMEOUT_MS", "20000")  # > deadline
    base = PreviewInfraOptions(fetch_timeout_ms=1000, deadline_ms=2000)
    assert PreviewInfraOptions.from_env(base=base) == base


def test_from_dict_ignores_unknown_keys_and_merge_is_immutable():
    opts = PreviewInfraOptions.from_dict({"fetch_timeout_ms": 1500, "deadline_ms": 2000, "marketplaces": {}})
    assert opts.fetch_timeout_ms == 1500

    merged = opts.merge(max_html_bytes=1024)
    assert merged.max_html_bytes == 1024
    assert opts.max_html_bytes == DEFAULT_PREVIEW_INFRA_OPTIONS.max_html_bytes
