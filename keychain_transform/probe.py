"""
Keychain Probe — access checks and cleanup run by the host application.

These helpers are independent of the transform. They never raise: every
failure is reported through the sink as a :class:`StoreAccessError` and
returned as ``False``.
"""
import logging
from typing import Optional

from .exceptions import StoreAccessError
from .sinks import Sink, null_sink
from .store import KeyringSecretStore, SecretStore

logger = logging.getLogger("keychain.probe")

ACCESS_SUFFIX = "-access"
_ACCESS_CHECK_VALUE = "keychain-access-check"


async def _write(store: SecretStore, service: str, account: str, value: str) -> None:
    try:
        await store.set(service, account, value)
    except Exception as err:
        raise StoreAccessError("write", service, account, err) from err


async def _delete(store: SecretStore, service: str, account: str) -> bool:
    try:
        return await store.delete(service, account)
    except Exception as err:
        raise StoreAccessError("delete", service, account, err) from err


async def access_keychain(
    service_name: str,
    account_name: str,
    store: Optional[SecretStore] = None,
    sink: Optional[Sink] = None,
) -> bool:
    """Check that secrets can be written to and deleted from the keychain.

    Some platforms allow reads but silently refuse writes, so the probe does
    a full write/delete round trip on ``account_name + "-access"``, leaving
    the real account untouched.

    Args:
        service_name: Keychain service namespace.
        account_name: Account the application intends to use.
        store: Secret store; the system keyring is used when omitted.
        sink: Diagnostic sink.

    Returns:
        True only when the write succeeds and the delete removes the entry.
    """
    if store is None:
        store = KeyringSecretStore()
    if sink is None:
        sink = null_sink
    account = f"{account_name}{ACCESS_SUFFIX}"
    try:
        await _write(store, service_name, account, _ACCESS_CHECK_VALUE)
        deleted = await _delete(store, service_name, account)
    except StoreAccessError as err:
        sink(f"Unable to access the keychain for {service_name}/{account}", err)
        return False
    if not deleted:
        sink(f"Keychain entry {service_name}/{account} could not be deleted")
        return False
    logger.debug("Keychain access granted for service=%s", service_name)
    return True


async def clear_keychain(
    service_name: str,
    account_name: str,
    store: Optional[SecretStore] = None,
    sink: Optional[Sink] = None,
) -> bool:
    """Delete a stored secret, e.g. when the user signs out or uninstalls.

    Returns:
        True when an entry was removed.
    """
    if store is None:
        store = KeyringSecretStore()
    if sink is None:
        sink = null_sink
    try:
        deleted = await _delete(store, service_name, account_name)
    except StoreAccessError as err:
        sink(f"Unable to clear {service_name}/{account_name} from the keychain", err)
        return False
    if not deleted:
        logger.debug(
            "Nothing to clear for service=%s account=%s",
            service_name, account_name,
        )
    return deleted
