from enum import Enum

from auth.token.token_provider import (
    TokenProvider,
    StaticTokenProvider,
    OAuth2ClientCredentialsTokenProvider,
)
from auth.token.azure import AzureClientSecretTokenProvider
from core.abstract_factory import TypeAbstractFactory


class CredentialType(str, Enum):
    STATIC = "static"
    OAUTH2_CLIENT_CREDENTIALS = "oauth2_client_credentials"
    AZURE_CLIENT_SECRET = "azure_client_secret"


class CredentialProviderFactory(TypeAbstractFactory[CredentialType, TokenProvider]):
    """Builds base token providers from a CredentialType and its runtime args."""

    pass


CredentialProviderFactory.register(CredentialType.STATIC)(StaticTokenProvider)
CredentialProviderFactory.register(CredentialType.OAUTH2_CLIENT_CREDENTIALS)(
    OAuth2ClientCredentialsTokenProvider
)
CredentialProviderFactory.register(CredentialType.AZURE_CLIENT_SECRET)(
    AzureClientSecretTokenProvider
)
