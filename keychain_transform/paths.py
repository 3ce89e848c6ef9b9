"""
Path handling — parsing of state paths and resolution of path specs.

A path addresses a location inside a nested state using dotted keys and
bracketed indexes::

    "regular.ole[0].stuff"      -> Key(regular), Key(ole), Index(0), Key(stuff)
    'servers["db.main"].token'  -> Key(servers), Key(db.main), Key(token)

A path spec is a single path, a sequence of paths, or a selector callable
``selector(state)`` returning one of the former two.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Union
from collections.abc import Iterable

from .exceptions import ConfigurationError

PathSelector = Callable[[Any], Union[str, Iterable[str]]]
PathSpec = Union[str, Iterable[str], PathSelector]


@dataclass(frozen=True)
class Key:
    """Mapping key segment."""
    name: str


@dataclass(frozen=True)
class Index:
    """Sequence index segment."""
    position: int


Segment = Union[Key, Index]


def _bracket_segment(path: str, start: int) -> tuple[Segment, int]:
    """Parse the bracket beginning at ``path[start]``.

    Returns:
        The parsed segment and the position right after the closing bracket.
    """
    quote = path[start + 1:start + 2]
    if quote in ('"', "'"):
        close = path.find(quote + ']', start + 2)
        if close == -1:
            raise ConfigurationError(f"Unterminated quoted key in path {path!r}")
        return Key(path[start + 2:close]), close + 2
    close = path.find(']', start)
    if close == -1:
        raise ConfigurationError(f"Unbalanced bracket in path {path!r}")
    inner = path[start + 1:close].strip()
    if not inner:
        raise ConfigurationError(f"Empty brackets in path {path!r}")
    if inner.isdigit():
        return Index(int(inner)), close + 1
    return Key(inner), close + 1


@lru_cache(maxsize=512)
def parse_path(path: str) -> tuple[Segment, ...]:
    """Split a path string into its segments.

    An empty path yields no segments (the root).

    Raises:
        ConfigurationError: On unbalanced brackets or unterminated quotes.
    """
    segments: list[Segment] = []
    buffer = ''
    pos = 0
    while pos < len(path):
        char = path[pos]
        if char == '.':
            if buffer:
                segments.append(Key(buffer))
                buffer = ''
            pos += 1
        elif char == '[':
            if buffer:
                segments.append(Key(buffer))
                buffer = ''
            segment, pos = _bracket_segment(path, pos)
            segments.append(segment)
        else:
            buffer += char
            pos += 1
    if buffer:
        segments.append(Key(buffer))
    return tuple(segments)


def resolve_paths(spec: PathSpec, state: Any) -> tuple[str, ...]:
    """Turn a path spec into the ordered paths to act on for ``state``.

    A selector is called once with ``state``; its result must be a path or
    a sequence of paths, never another selector.

    Raises:
        ConfigurationError: If the resolution is empty or has the wrong type.
    """
    if callable(spec):
        spec = spec(state)
        if callable(spec):
            raise ConfigurationError(
                "A path selector must return a path or a sequence of paths, "
                "not another selector"
            )
    if not spec:
        raise ConfigurationError("Empty password paths")
    if isinstance(spec, str):
        return (spec,)
    if isinstance(spec, bytes) or not isinstance(spec, Iterable):
        raise ConfigurationError(
            f"Password paths must be a string or a sequence of strings, "
            f"got {type(spec).__name__}"
        )
    paths = tuple(spec)
    if not paths:
        raise ConfigurationError("Empty password paths")
    for path in paths:
        if not isinstance(path, str):
            raise ConfigurationError(
                f"Password path {path!r} is not a string"
            )
    return paths
