import pytest
from pydantic import ValidationError

from auth.credential import CredentialType
from auth.token.models import TokenRequest
from config.models.credential import (
    CredentialSettings,
    StaticCredentialConfig,
    ClientCredentialsConfig,
    AzureClientSecretConfig,
    TokenDebugConfig,
)


@pytest.mark.unit
@pytest.mark.config
def test_static_runtime_args(static_credential):
    assert static_credential.to_runtime_args() == {
        "token": "static-token-value",
        "expires_in": 3600,
    }


@pytest.mark.unit
@pytest.mark.config
def test_client_credentials_runtime_args(client_credentials):
    args = client_credentials.to_runtime_args()

    assert args["token_url"] == "https://auth/token"
    assert args["client_id"] == "client"
    assert args["default_expiration"] == 300


@pytest.mark.unit
@pytest.mark.config
def test_azure_runtime_args_omit_unset_authority(azure_client_secret):
    args = azure_client_secret.to_runtime_args()

    assert "authority" not in args
    assert args["tenant_id"] == "00000000-0000-0000-0000-000000000000"


@pytest.mark.unit
@pytest.mark.config
def test_azure_runtime_args_include_authority():
    cfg = AzureClientSecretConfig(
        tenant_id="t", client_id="c", client_secret="s", authority="login.microsoftonline.us"
    )

    assert cfg.to_runtime_args()["authority"] == "login.microsoftonline.us"


@pytest.mark.unit
@pytest.mark.config
def test_credential_discriminated_by_type():
    settings = CredentialSettings.model_validate(
        {
            "credential": {
                "type": "oauth2_client_credentials",
                "token_url": "https://auth/token",
                "client_id": "c",
                "client_secret": "s",
            }
        }
    )

    assert isinstance(settings.credential, ClientCredentialsConfig)
    assert settings.credential.type == CredentialType.OAUTH2_CLIENT_CREDENTIALS


@pytest.mark.unit
@pytest.mark.config
def test_unknown_credential_type_rejected():
    with pytest.raises(ValidationError):
        CredentialSettings.model_validate({"credential": {"type": "kerberos"}})


@pytest.mark.unit
@pytest.mark.config
def test_credential_config_is_frozen(static_credential):
    with pytest.raises(ValidationError):
        static_credential.token = "other"


@pytest.mark.unit
@pytest.mark.config
def test_token_debug_defaults_off():
    """
    GIVEN settings without a token_debug block
    WHEN they are validated
    THEN debug mode should be disabled with the 2 minute default override
    """
    settings = CredentialSettings(credential=StaticCredentialConfig(token="t"))

    assert settings.token_debug.enabled is False
    assert settings.token_debug.expiry_minutes == 2


@pytest.mark.unit
@pytest.mark.config
def test_token_debug_accepts_dashed_alias():
    cfg = TokenDebugConfig.model_validate({"enabled": True, "expiry-minutes": 5})

    assert cfg.expiry_minutes == 5


@pytest.mark.unit
@pytest.mark.config
def test_token_debug_accepts_field_name():
    cfg = TokenDebugConfig.model_validate({"enabled": "true", "expiry_minutes": "7"})

    assert cfg.enabled is True
    assert cfg.expiry_minutes == 7


@pytest.mark.unit
@pytest.mark.config
def test_disabled_debug_block_never_validates_override():
    cfg = TokenDebugConfig(enabled=False, expiry_minutes=0)

    assert cfg.expiry_minutes == 0


@pytest.mark.unit
@pytest.mark.config
def test_token_request_from_settings(static_settings):
    request = static_settings.token_request()

    assert request == TokenRequest(scopes=("https://database.windows.net/.default",))
