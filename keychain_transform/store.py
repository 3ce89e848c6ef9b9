"""
Secret stores — backends addressed by ``(service, account)``.

- ``SecretStore``: the asynchronous contract used by the transform and probe.
- ``KeyringSecretStore``: the operating system keychain through ``keyring``.
- ``MemorySecretStore``: in-process dict, for development and tests.

Security Note:
    Never log secret values. Only log service and account names.
"""
import abc
import asyncio
import logging
from typing import Optional

import keyring
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

logger = logging.getLogger("keychain.store")


class SecretStore(abc.ABC):
    """Port: string secrets addressed by service and account."""

    @abc.abstractmethod
    async def get(self, service: str, account: str) -> Optional[str]:
        """Return the stored secret, or None when there is none."""

    @abc.abstractmethod
    async def set(self, service: str, account: str, value: str) -> None:
        """Create or replace a secret."""

    @abc.abstractmethod
    async def delete(self, service: str, account: str) -> bool:
        """Remove a secret; return whether an entry was removed."""


class KeyringSecretStore(SecretStore):
    """Secret store backed by the system keyring.

    Keyring backends are synchronous and may block (D-Bus, Keychain
    prompts), so every call runs in a worker thread. Backend errors
    (``keyring.errors.KeyringError`` and friends) propagate to the caller.

    Args:
        backend: Explicit keyring backend; the platform default when omitted.
    """

    def __init__(self, backend: Optional[KeyringBackend] = None):
        self._backend = backend

    @property
    def backend(self) -> KeyringBackend:
        if self._backend is None:
            self._backend = keyring.get_keyring()
            logger.debug("Using keyring backend %s", type(self._backend).__name__)
        return self._backend

    async def get(self, service: str, account: str) -> Optional[str]:
        return await asyncio.to_thread(self.backend.get_password, service, account)

    async def set(self, service: str, account: str, value: str) -> None:
        await asyncio.to_thread(self.backend.set_password, service, account, value)
        logger.debug("Keyring set: service=%s account=%s", service, account)

    async def delete(self, service: str, account: str) -> bool:
        try:
            await asyncio.to_thread(
                self.backend.delete_password, service, account
            )
        except PasswordDeleteError:
            # keyring signals a missing entry with PasswordDeleteError
            return False
        logger.debug("Keyring delete: service=%s account=%s", service, account)
        return True


class MemorySecretStore(SecretStore):
    """In-memory :class:`SecretStore` backed by a plain ``dict``.

    Usage::

        store = MemorySecretStore().seed("MyApp", "token", "s3cr3t")
        assert await store.get("MyApp", "token") == "s3cr3t"
    """

    def __init__(self) -> None:
        self._secrets: dict[tuple[str, str], str] = {}

    async def get(self, service: str, account: str) -> Optional[str]:
        return self._secrets.get((service, account))

    async def set(self, service: str, account: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(
                f"Secret store only accepts strings, got {type(value).__name__}"
            )
        self._secrets[(service, account)] = value

    async def delete(self, service: str, account: str) -> bool:
        return self._secrets.pop((service, account), None) is not None

    def seed(self, service: str, account: str, value: str) -> "MemorySecretStore":
        """Pre-populate a secret."""
        self._secrets[(service, account)] = value
        return self

    def reset(self) -> None:
        """Drop every stored secret."""
        self._secrets.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._secrets

    def __len__(self) -> int:
        return len(self._secrets)
