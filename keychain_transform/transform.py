"""
PasswordTransform — moves secret fields of a state into the keychain.

Provides the two directional hooks called by a persistence layer:
- ``outbound(state)`` — before the state is written: store the secrets in
  the keychain and strip them from the persisted copy.
- ``inbound(state)`` — after the state is read back: fetch the secrets from
  the keychain and put them back in place.

Per-path mode stores every resolved path under its own account (the path
itself unless ``account_name`` is set). Whole-object mode (no
``password_paths``) stores the entire state as JSON under ``account_name``.

Only :class:`ConfigurationError` leaves the hooks. Store and codec failures
are reported through the configured sink and degrade the result.

Security Note:
    Never log secret values. Only log service, account and path names.
"""
import logging
from typing import Any, Optional

from .codec import decode, encode
from .config import TransformConfig
from .editor import MISSING, delete_at, get_at, set_at, shallow_copy
from .exceptions import RecoverableError, StoreAccessError
from .paths import resolve_paths
from .store import KeyringSecretStore, SecretStore

logger = logging.getLogger("keychain.transform")


def _is_blank(value: Any) -> bool:
    """True for values with nothing worth storing.

    Absent, None, False, zero, NaN and the empty string are blank. Empty
    lists and dicts are not: they replace whatever was stored before.
    """
    if value is MISSING or value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False


class PasswordTransform:
    """Keychain-backed transform for a persisted state.

    Each call works on its own copy of the state; the instance holds nothing
    but its configuration and the secret store, so hooks may be awaited
    concurrently. Within one call, secret store operations run one after
    another, in path order.

    Args:
        config: Validated transform configuration.
        store: Secret store; the system keyring is used when omitted.
    """

    def __init__(
        self,
        config: TransformConfig,
        store: Optional[SecretStore] = None,
    ):
        self._config = config
        self._store = store

    def __repr__(self) -> str:
        mode = 'whole-object' if self._config.whole_object else 'per-path'
        return (
            f'<PasswordTransform [{mode}] service={self._config.service_name!r}>'
        )

    @property
    def config(self) -> TransformConfig:
        return self._config

    @property
    def store(self) -> SecretStore:
        # created on first use
        if self._store is None:
            self._store = KeyringSecretStore()
        return self._store

    def applies_to(self, key: str) -> bool:
        return self._config.applies_to(key)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _log(self, message: str, *context: Any) -> None:
        self._config.logger(message, *context)

    def _account(self, path: str) -> str:
        return self._config.account_name or path

    async def _read(self, account: str) -> Optional[str]:
        service = self._config.service_name
        try:
            return await self.store.get(service, account)
        except Exception as err:
            raise StoreAccessError("read", service, account, err) from err

    async def _write(self, account: str, payload: str) -> None:
        service = self._config.service_name
        try:
            await self.store.set(service, account, payload)
        except Exception as err:
            raise StoreAccessError("write", service, account, err) from err

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def outbound(self, state: Any) -> Any:
        """Store the secrets of ``state`` and return the copy to persist.

        Raises:
            ConfigurationError: If the password paths resolve to nothing.
        """
        if self._config.whole_object:
            return await self._outbound_whole(state)
        return await self._outbound_paths(state)

    async def inbound(self, state: Any) -> Any:
        """Return ``state`` with its secrets restored from the keychain.

        Raises:
            ConfigurationError: If the password paths resolve to nothing.
        """
        if self._config.whole_object:
            return await self._inbound_whole()
        return await self._inbound_paths(state)

    async def _outbound_whole(self, state: Any) -> dict:
        account = self._config.account_name
        try:
            await self._write(account, encode(state, serialize=True))
        except RecoverableError as err:
            self._log(f"Unable to write {account} to the keychain", err)
        else:
            logger.debug(
                "Outbound: state stored under service=%s account=%s",
                self._config.service_name, account,
            )
        # the whole state lives in the keychain, nothing is persisted
        return {}

    async def _outbound_paths(self, state: Any) -> Any:
        paths = resolve_paths(self._config.password_paths, state)
        outbound_state = shallow_copy(state)
        stored = 0
        for path in paths:
            # always read from the original state
            secret = get_at(state, path)
            if _is_blank(secret):
                self._log(f"No secret found at {path}, skipping")
                continue
            try:
                await self._write(
                    self._account(path),
                    encode(secret, self._config.serialize),
                )
            except RecoverableError as err:
                self._log(f"Unable to write {path} to the keychain", err)
                continue
            stored += 1
            if self._config.clear_passwords:
                outbound_state = delete_at(outbound_state, path)
        logger.debug(
            "Outbound: stored %d of %d path(s) for service=%s",
            stored, len(paths), self._config.service_name,
        )
        return outbound_state

    async def _inbound_whole(self) -> Any:
        account = self._config.account_name
        try:
            stored = await self._read(account)
            if stored is None:
                logger.debug(
                    "Inbound: nothing stored under service=%s account=%s",
                    self._config.service_name, account,
                )
                return {}
            return decode(stored, serialize=True)
        except RecoverableError as err:
            self._log(f"Unable to read {account} from the keychain", err)
            return {}

    async def _inbound_paths(self, state: Any) -> Any:
        paths = resolve_paths(self._config.password_paths, state)
        inbound_state = shallow_copy(state)
        restored = 0
        for path in paths:
            try:
                secret = await self._read(self._account(path))
                if not secret:
                    continue
                value = decode(secret, self._config.serialize)
            except RecoverableError as err:
                self._log(f"Unable to read {path} from the keychain", err)
                continue
            inbound_state = set_at(inbound_state, path, value)
            restored += 1
        logger.debug(
            "Inbound: restored %d of %d path(s) for service=%s",
            restored, len(paths), self._config.service_name,
        )
        return inbound_state


def create_password_transform(
    service_name: Optional[str] = None,
    *,
    store: Optional[SecretStore] = None,
    **options: Any,
) -> PasswordTransform:
    """Build a :class:`PasswordTransform` from keyword options.

    Args:
        service_name: Keychain service namespace.
        store: Secret store; the system keyring is used when omitted.
        **options: ``account_name``, ``password_paths``, ``clear_passwords``,
            ``serialize``, ``logger``, ``whitelist``, ``blacklist``.

    Raises:
        ConfigurationError: If the configuration is incomplete or invalid.
    """
    config = TransformConfig(service_name=service_name, **options)
    return PasswordTransform(config, store=store)
