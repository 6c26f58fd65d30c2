import logging
import pytest
from tests.fixtures.configs.credential import (
    static_credential,
    client_credentials,
    azure_client_secret,
    static_settings,
    debug_settings,
)


@pytest.fixture
def debug_logger(caplog):
    caplog.set_level(logging.INFO, logger="tests.token_debug")
    return logging.getLogger("tests.token_debug")


__all__ = [
    'static_credential',
    'client_credentials',
    'azure_client_secret',
    'static_settings',
    'debug_settings',
]
