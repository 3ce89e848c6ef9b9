"""Shared pytest fixtures for keychain_transform tests."""
from typing import Any, Optional

import pytest

from keychain_transform.store import MemorySecretStore


class RecordingStore(MemorySecretStore):
    """MemorySecretStore that records every call and can be told to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple] = []
        self.delete_results: list[bool] = []
        self._failures: list[list[Any]] = []

    def fail(
        self,
        operation: str,
        account: Optional[str] = None,
        error: Optional[Exception] = None,
        once: bool = True,
    ) -> "RecordingStore":
        """Make the next matching ``operation`` raise ``error``."""
        self._failures.append(
            [operation, account, error or RuntimeError("Not permitted"), once]
        )
        return self

    def _check(self, operation: str, account: str) -> None:
        for failure in list(self._failures):
            op, acc, error, once = failure
            if op == operation and acc in (None, account):
                if once:
                    self._failures.remove(failure)
                raise error

    def calls_for(self, operation: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == operation]

    async def get(self, service, account):
        self.calls.append(("get", service, account))
        self._check("get", account)
        return await super().get(service, account)

    async def set(self, service, account, value):
        self.calls.append(("set", service, account, value))
        self._check("set", account)
        await super().set(service, account, value)

    async def delete(self, service, account):
        self.calls.append(("delete", service, account))
        self._check("delete", account)
        removed = await super().delete(service, account)
        if self.delete_results:
            return self.delete_results.pop(0)
        return removed


class SinkRecorder:
    """Diagnostic sink that keeps every message."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, tuple]] = []

    def __call__(self, message: str, *context: Any) -> None:
        self.messages.append((message, context))

    def __len__(self) -> int:
        return len(self.messages)


@pytest.fixture
def store():
    """A fresh recording secret store."""
    return RecordingStore()


@pytest.fixture
def sink():
    """A fresh recording diagnostic sink."""
    return SinkRecorder()
