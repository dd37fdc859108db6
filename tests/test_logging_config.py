import logging

import pytest

from shiritori_search.utils import logging_config


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, logging.INFO),
        (logging.DEBUG, logging.DEBUG),
        ("debug", logging.DEBUG),
        (" Warning ", logging.WARNING),
        ("40", logging.ERROR),
        ("chatty", logging.INFO),
    ],
)
def test_resolve_level(value, expected):
    assert logging_config.resolve_level(value) == expected


@pytest.fixture
def fresh_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config, "_configured", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    names = (logging_config.PACKAGE_LOGGER, *logging_config.NOISY_LOGGERS)
    levels = {name: logging.getLogger(name).level for name in names}
    yield calls
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def test_level_comes_from_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv("SHIRITORI_LOG_LEVEL", "debug")

    assert logging_config.configure_logging() == logging.DEBUG
    assert fresh_logging == [
        {"level": logging.DEBUG, "format": logging_config.LOG_FORMAT, "force": False}
    ]
    assert logging.getLogger("shiritori_search").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_configuration_happens_once_unless_forced(fresh_logging, monkeypatch):
    monkeypatch.delenv("SHIRITORI_LOG_LEVEL", raising=False)

    assert logging_config.configure_logging() == logging.INFO
    assert logging_config.configure_logging("error") == logging.INFO
    assert len(fresh_logging) == 1

    assert logging_config.configure_logging("error", force=True) == logging.ERROR
    assert fresh_logging[-1]["force"] is True
    assert logging.getLogger("gradio").level == logging.ERROR
