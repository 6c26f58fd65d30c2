class InvalidConfigurationError(ValueError):
    """Raised when a component is configured with values it cannot operate on"""

    pass


class TokenAcquisitionError(Exception):
    """Raised when a token endpoint answers without a usable access token"""

    pass
