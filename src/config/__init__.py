from config.factories import (
    CredentialRuntimeFactory,
    TokenManagerRuntimeFactory,
    RuntimeFactory,
    build_debug_interceptor,
)
from config.loader import ConfigLoader
from config.preprocessor import (
    ConfigPreprocessor,
    ConfigValue,
    EnvVarPreprocessor,
)
from config.models.credential import (
    CredentialSettings,
    StaticCredentialConfig,
    ClientCredentialsConfig,
    AzureClientSecretConfig,
    TokenDebugConfig,
)

__all__ = [
    "CredentialRuntimeFactory",
    "TokenManagerRuntimeFactory",
    "RuntimeFactory",
    "build_debug_interceptor",
    "ConfigLoader",
    "ConfigPreprocessor",
    "ConfigValue",
    "EnvVarPreprocessor",
    "CredentialSettings",
    "StaticCredentialConfig",
    "ClientCredentialsConfig",
    "AzureClientSecretConfig",
    "TokenDebugConfig",
]
