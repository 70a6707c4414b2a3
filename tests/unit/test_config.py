"""
Unit Tests for zitadel_client.config
"""
import logging
from unittest.mock import patch

import pytest

from zitadel_client import config as client_config
from zitadel_client.config import ClientConfig, LoggingConfig, setup_logging
from zitadel_client.endpoint import Endpoint
from zitadel_client.errors import InvalidEndpointError

pytestmark = pytest.mark.unit


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("ZITADEL_DOMAIN", "ZITADEL_PORT", "ZITADEL_INSECURE", "ZITADEL_PAT",
                 "ZITADEL_TIMEOUT", "ZITADEL_ENV_FILE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestClientConfig:

    def test_defaults(self, clean_env):
        config = ClientConfig.from_env()
        assert config.domain == ""
        assert config.port == "443"
        assert config.insecure is False
        assert config.pat == ""
        assert config.timeout is None

    def test_reads_environment(self, clean_env):
        clean_env.setenv("ZITADEL_DOMAIN", "localhost")
        clean_env.setenv("ZITADEL_PORT", "8080")
        clean_env.setenv("ZITADEL_INSECURE", "true")
        clean_env.setenv("ZITADEL_PAT", "tok123")
        clean_env.setenv("ZITADEL_TIMEOUT", "2.5")

        config = ClientConfig.from_env()

        assert config == ClientConfig(domain="localhost", port="8080", insecure=True,
                                      pat="tok123", timeout=2.5)

    def test_invalid_timeout_is_ignored(self, clean_env):
        clean_env.setenv("ZITADEL_TIMEOUT", "soon")
        assert ClientConfig.from_env().timeout is None

    def test_repr_hides_pat(self):
        assert "tok123" not in repr(ClientConfig(domain="example.com", pat="tok123"))


class TestSettings:

    def test_reload_loads_dotenv_without_override(self, clean_env):
        clean_env.setenv("ZITADEL_ENV_FILE", "/tmp/zitadel-test.env")
        clean_env.setenv("ZITADEL_DOMAIN", "example.com")

        with patch('zitadel_client.config.load_dotenv') as load_dotenv:
            settings = client_config.reload_settings()

        load_dotenv.assert_called_once_with("/tmp/zitadel-test.env", override=False)
        assert settings.domain == "example.com"
        assert client_config.get_settings() is settings


class TestEndpointFromEnv:

    def test_tls_endpoint(self):
        endpoint = Endpoint.from_env(ClientConfig(domain="example.com", port="8443"))
        assert endpoint.host == "example.com:8443"
        assert endpoint.is_tls is True

    def test_insecure_endpoint(self):
        endpoint = Endpoint.from_env(ClientConfig(domain="localhost", port="8080", insecure=True))
        assert endpoint.origin == "http://localhost:8080"

    def test_missing_domain(self):
        with pytest.raises(InvalidEndpointError):
            Endpoint.from_env(ClientConfig())


class TestLogging:

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_FILE", "")
        config = LoggingConfig.from_env()
        assert config.log_level == "DEBUG"
        assert config.log_file == ""

    def test_setup_logging_adds_file_handler(self, tmp_path):
        log_file = tmp_path / "client.log"
        logger = setup_logging(LoggingConfig(log_level="debug", log_file=str(log_file), enable_console=False))
        added = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        try:
            assert logger.name == "zitadel_client"
            assert logger.level == logging.DEBUG
            assert len(added) == 1
            logging.getLogger("zitadel_client.client").debug("channel ready")
            added[0].flush()
            assert "zitadel_client.client - DEBUG - channel ready" in log_file.read_text()
        finally:
            for handler in added:
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)

    def test_setup_logging_twice_keeps_one_set_of_handlers(self, tmp_path):
        log_file = tmp_path / "client.log"
        config = LoggingConfig(log_level="info", log_file=str(log_file), enable_console=True)
        foreign = logging.NullHandler()
        logger = logging.getLogger("zitadel_client")
        logger.addHandler(foreign)
        try:
            setup_logging(config)
            logger = setup_logging(config)

            ours = [h for h in logger.handlers if h is not foreign]
            assert len(ours) == 2
            assert foreign in logger.handlers

            logging.getLogger("zitadel_client.dial").info("dialing")
            for handler in ours:
                handler.flush()
            assert log_file.read_text().count("dialing") == 1
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)
