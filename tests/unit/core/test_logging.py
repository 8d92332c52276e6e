import logging

import pytest
import structlog

from jobboard_client.core.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.mark.parametrize("json_logs, renderer", [(True, structlog.processors.JSONRenderer), (False, structlog.dev.ConsoleRenderer)])
def test_configure_logging_picks_renderer(json_logs, renderer):
    configure_logging("debug", json_logs=json_logs)

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], renderer)
    assert structlog.processors.format_exc_info in processors


def test_configure_logging_quiets_httpx():
    configure_logging("debug", json_logs=True)
    assert logging.getLogger("httpx").level == logging.WARNING
