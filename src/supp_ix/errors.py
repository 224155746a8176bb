"""
Error taxonomy for provider access.

Only faults on required calls (compound search, interaction lookup) leave
the synthesis layer; optional lookups map every VaultError to absence.
"""


class VaultError(Exception):
    """Base class for compound data provider failures."""


class ConfigError(VaultError):
    """Client cannot be built from the current settings."""


class VaultAPIError(VaultError):
    """Provider answered with a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Vault API error {status_code}: {body}")


class NotFoundError(VaultAPIError):
    """Provider has no record for the requested id."""


class VaultTransportError(VaultError):
    """Provider could not be reached."""


class SchemaError(VaultError):
    """Provider payload did not match the expected shape."""
