"""Pytest configuration for dojo tests."""

import logging

import pytest

try:
    import instrukt_ai_logging

    def _noop_configure_logging(*_args, **_kwargs):  # type: ignore[no-untyped-def]
        return None

    instrukt_ai_logging.configure_logging = _noop_configure_logging  # type: ignore[assignment]
    logging.getLogger("dojo").handlers.clear()
    logging.getLogger().handlers.clear()
except Exception:
    pass


def pytest_collection_modifyitems(config, items):
    """Set per-directory timeouts: unit=5s, integration=60s."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(5))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(60))
