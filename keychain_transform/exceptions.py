"""
Keychain Transform errors.

Two tiers:
- ``ConfigurationError`` is fatal and always reaches the caller.
- ``RecoverableError`` (store access and codec failures) is contained by the
  transform passes: logged through the sink, never re-raised.
"""
from typing import Any, Optional


class KeychainTransformError(Exception):
    """Base class for every error raised by keychain_transform."""


class ConfigurationError(KeychainTransformError):
    """Missing or invalid configuration, or an empty resolved path set."""


class RecoverableError(KeychainTransformError):
    """Runtime failure that degrades a pass instead of aborting it."""


class StoreAccessError(RecoverableError):
    """The secret store refused or failed an operation."""

    def __init__(
        self,
        operation: str,
        service: str,
        account: str,
        reason: Optional[Any] = None
    ) -> None:
        self.operation = operation
        self.service = service
        self.account = account
        self.reason = reason
        message = f"Unable to {operation} {service}/{account} on the secret store"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class CodecError(RecoverableError):
    """A value could not be converted to or from its stored form."""


class EncodeError(CodecError):
    """Value cannot be represented as a stored string."""


class DecodeError(CodecError):
    """Stored payload is not valid JSON."""
