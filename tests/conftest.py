"""Shared pytest fixtures."""

import pytest
from loguru import logger


@pytest.fixture
def log_capture():
    """Collect loguru records emitted during a test."""
    captured_logs: list[dict] = []

    def sink(message):
        record = message.record
        captured_logs.append({
            "level": record["level"].name,
            "message": record["message"],
            "extra": dict(record["extra"]),
        })

    handler_id = logger.add(sink, level="DEBUG", format="{message}")
    yield captured_logs
    logger.remove(handler_id)
