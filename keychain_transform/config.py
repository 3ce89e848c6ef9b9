"""
Transform Configuration — validated, immutable settings of a transform.

Can be built explicitly or from environment variables:
    KEYCHAIN_SERVICE_NAME = <service namespace in the keychain>
    KEYCHAIN_ACCOUNT_NAME = <fixed account, enables whole-object mode>
    KEYCHAIN_PASSWORD_PATHS = <comma separated state paths>
    KEYCHAIN_CLEAR_PASSWORDS = true | false
    KEYCHAIN_SERIALIZE = true | false
"""
import os
from typing import Any, Callable, Optional
from collections.abc import Iterable

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator
)

from .exceptions import ConfigurationError
from .sinks import null_sink

_ENV_VARS = {
    "service_name": "KEYCHAIN_SERVICE_NAME",
    "account_name": "KEYCHAIN_ACCOUNT_NAME",
    "clear_passwords": "KEYCHAIN_CLEAR_PASSWORDS",
    "serialize": "KEYCHAIN_SERIALIZE",
}


class TransformConfig(BaseModel):
    """Validated transform configuration.

    Any invalid combination raises :class:`ConfigurationError`.
    """

    service_name: str = Field(min_length=1)
    account_name: Optional[str] = None
    password_paths: Any = None
    clear_passwords: bool = True
    serialize: bool = False
    logger: Callable[..., Any] = null_sink
    whitelist: Optional[tuple[str, ...]] = None
    blacklist: Optional[tuple[str, ...]] = None

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "arbitrary_types_allowed": True,
    }

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as err:
            raise ConfigurationError(
                f"Invalid transform configuration: {err}"
            ) from err

    @model_validator(mode="before")
    @classmethod
    def default_serialize(cls, data: Any) -> Any:
        """Serialize by default only when the whole state is stored."""
        if isinstance(data, dict) and data.get("serialize") is None:
            data = dict(data)
            paths = data.get("password_paths")
            data["serialize"] = paths is None or paths == ""
        return data

    @field_validator("account_name", mode="before")
    @classmethod
    def blank_account(cls, v: Any) -> Any:
        return v or None

    @field_validator("logger", mode="before")
    @classmethod
    def default_logger(cls, v: Any) -> Any:
        return null_sink if v is None else v

    @field_validator("password_paths", mode="before")
    @classmethod
    def validate_paths(cls, v: Any) -> Any:
        """Accept a path, a sequence of paths or a selector callable."""
        if v is None or v == "":
            return None
        if callable(v) or isinstance(v, str):
            return v
        if isinstance(v, bytes) or not isinstance(v, Iterable):
            raise ValueError(
                "password_paths must be a string, a sequence of strings "
                f"or a callable, got {type(v).__name__}"
            )
        paths = tuple(v)
        if not paths:
            raise ValueError("password_paths cannot be an empty sequence")
        if not all(isinstance(path, str) for path in paths):
            raise ValueError("password_paths must only contain strings")
        return paths

    @model_validator(mode="after")
    def validate_mode(self) -> "TransformConfig":
        """Ensure there is something to address in the secret store."""
        if self.account_name is None and self.password_paths is None:
            raise ValueError(
                "Either account_name or password_paths is required"
            )
        return self

    @property
    def whole_object(self) -> bool:
        """True when the entire state is stored under ``account_name``."""
        return self.password_paths is None

    def applies_to(self, key: str) -> bool:
        """Whether the host should run this transform for a state slice."""
        if self.whitelist is not None and key not in self.whitelist:
            return False
        if self.blacklist is not None and key in self.blacklist:
            return False
        return True

    @classmethod
    def from_env(cls, **overrides: Any) -> "TransformConfig":
        """Create a TransformConfig from ``KEYCHAIN_*`` environment variables.

        Keyword arguments take precedence over the environment.

        Returns:
            Populated TransformConfig instance.
        """
        values: dict[str, Any] = {}
        for field, var in _ENV_VARS.items():
            raw = os.environ.get(var)
            if raw is not None:
                values[field] = raw
        paths = os.environ.get("KEYCHAIN_PASSWORD_PATHS")
        if paths:
            values["password_paths"] = [
                path.strip() for path in paths.split(",") if path.strip()
            ]
        values.update(overrides)
        return cls(**values)
