"""Environment configuration and engine selection."""

import logging

import pytest

from indextank.clients.search.SearchClientManager import SearchClientManager
from indextank.clients.search.indextank.SearchClientIndextank import SearchClientIndextank
from indextank.helper.HelperConfig import HelperConfig
from indextank.logging.logging_setup import ColorLogger, setup_logging


def test_string_values_and_defaults(monkeypatch, helper_config) -> None:
    monkeypatch.setenv("SOME_KEY", "  value ")
    monkeypatch.setenv("EMPTY_KEY", "")

    assert helper_config.get_string_val("some_key") == "value"
    assert helper_config.get_string_val("EMPTY_KEY", default="fallback") == "fallback"
    with pytest.raises(ValueError):
        helper_config.get_string_val("UNSET_KEY_FOR_TESTS")


def test_number_values(monkeypatch, helper_config) -> None:
    monkeypatch.setenv("INT_KEY", "12")
    monkeypatch.setenv("FLOAT_KEY", "2.5")
    monkeypatch.setenv("BAD_KEY", "twelve")

    assert helper_config.get_number_val("INT_KEY") == 12
    assert helper_config.get_number_val("FLOAT_KEY") == 2.5
    assert helper_config.get_number_val("UNSET_KEY_FOR_TESTS", default=3) == 3
    with pytest.raises(ValueError):
        helper_config.get_number_val("BAD_KEY")


def test_bool_values(monkeypatch, helper_config) -> None:
    monkeypatch.setenv("YES_KEY", "Yes")
    monkeypatch.setenv("NO_KEY", "off")

    assert helper_config.get_bool_val("YES_KEY") is True
    assert helper_config.get_bool_val("NO_KEY") is False
    assert helper_config.get_bool_val("UNSET_KEY_FOR_TESTS", default=False) is False


def test_list_values(monkeypatch, helper_config) -> None:
    monkeypatch.setenv("LIST_KEY", "[1, 2, ,3]")
    monkeypatch.setenv("BARE_KEY", "1,2")

    assert helper_config.get_list_val("LIST_KEY", element_type=int) == [1, 2, 3]
    assert helper_config.get_list_val("UNSET_KEY_FOR_TESTS", default=[]) == []
    with pytest.raises(ValueError):
        helper_config.get_list_val("BARE_KEY")


def test_manager_instantiates_the_configured_engine(helper_config) -> None:
    client = SearchClientManager(helper_config).get_client()

    assert isinstance(client, SearchClientIndextank)
    assert client.get_client_type() == "search"
    assert client.get_engine_name() == "indextank"
    assert client.timeout == 30.0


def test_manager_reads_the_timeout(monkeypatch, helper_config) -> None:
    monkeypatch.setenv("SEARCH_TIMEOUT", "5")

    assert SearchClientManager(helper_config).get_client().timeout == 5


def test_manager_rejects_unknown_engines(monkeypatch, helper_config) -> None:
    monkeypatch.setenv("SEARCH_ENGINE", "elastic")

    with pytest.raises(ValueError):
        SearchClientManager(helper_config)


def test_manager_requires_an_engine(monkeypatch, helper_config) -> None:
    monkeypatch.delenv("SEARCH_ENGINE")

    with pytest.raises(ValueError):
        SearchClientManager(helper_config)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_writes_plain_lines_to_the_log_file(monkeypatch, tmp_path, restore_root_logger) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "info")
    monkeypatch.setenv("TIMEZONE", "UTC")

    logger = setup_logging()
    logger.info("index %s created", "books", color="green")
    logger.warning("quota almost reached")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert isinstance(logger, ColorLogger)
    content = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert "index books created" in content
    assert "⚠️ quota almost reached" in content
    assert "\033[" not in content
    assert logging.getLogger("httpx").level == logging.WARNING


def test_helper_config_hands_out_its_logger(logger) -> None:
    assert HelperConfig(logger=logger).get_logger() is logger
