"""Unit tests for TypeAbstractFactory registry behavior"""

import pytest

from core.abstract_factory import TypeAbstractFactory
from core.exceptions import InvalidConfigurationError


class Grant:
    def __init__(self, scope: str = "default"):
        self.scope = scope


class GrantFactory(TypeAbstractFactory[str, Grant]):
    pass


@GrantFactory.register("client_credentials")
class ClientCredentialsGrant(Grant):
    pass


@GrantFactory.register("device_code")
class DeviceCodeGrant(Grant):
    pass


@pytest.mark.unit
class TestTypeAbstractFactory:

    def test_register_keeps_class_and_records_key(self):
        """
        GIVEN classes decorated with @GrantFactory.register(key)
        WHEN the registry is listed
        THEN both keys should be present and the classes unchanged
        """
        assert set(GrantFactory.list_keys()) == {"client_credentials", "device_code"}
        assert ClientCredentialsGrant.__name__ == "ClientCredentialsGrant"

    def test_create_passes_kwargs(self):
        grant = GrantFactory.create("device_code", scope="offline_access")

        assert isinstance(grant, DeviceCodeGrant)
        assert grant.scope == "offline_access"

    def test_unregistered_key_is_invalid_configuration(self):
        """
        GIVEN an unregistered key
        WHEN create is called
        THEN InvalidConfigurationError naming the factory should be raised
        """
        with pytest.raises(InvalidConfigurationError, match="GrantFactory"):
            GrantFactory.create("implicit")

    def test_registries_are_isolated_per_subclass(self):
        class OtherFactory(TypeAbstractFactory[str, Grant]):
            pass

        OtherFactory.register("password")(Grant)

        assert "password" not in GrantFactory.list_keys()
        assert OtherFactory.list_keys() == ["password"]
