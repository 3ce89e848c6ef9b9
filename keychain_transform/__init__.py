"""Keychain Transform — keep secrets of a persisted state in the OS keychain.

Security Note (Threat Model):
    Secrets leave the persisted state but still live in process memory while
    the application runs, and are only as safe as the keychain backend that
    stores them. This package performs no encryption of its own.
"""

from .version import __version__
from .config import TransformConfig
from .editor import MISSING, delete_at, get_at, set_at
from .exceptions import (
    CodecError,
    ConfigurationError,
    DecodeError,
    EncodeError,
    KeychainTransformError,
    RecoverableError,
    StoreAccessError,
)
from .paths import resolve_paths
from .probe import access_keychain, clear_keychain
from .sinks import logging_sink, null_sink
from .store import KeyringSecretStore, MemorySecretStore, SecretStore
from .transform import PasswordTransform, create_password_transform

__all__ = [
    "__version__",
    "PasswordTransform",
    "create_password_transform",
    "TransformConfig",
    "access_keychain",
    "clear_keychain",
    "SecretStore",
    "KeyringSecretStore",
    "MemorySecretStore",
    "get_at",
    "set_at",
    "delete_at",
    "MISSING",
    "resolve_paths",
    "logging_sink",
    "null_sink",
    "KeychainTransformError",
    "ConfigurationError",
    "RecoverableError",
    "StoreAccessError",
    "CodecError",
    "EncodeError",
    "DecodeError",
]
