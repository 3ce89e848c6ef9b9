"""
Immutable Object Editor — read, write and remove values at a path.

None of these functions mutate their input. Writes and removals copy only
the containers along the edited path (the spine); every other branch is
shared with the input state.
"""
from typing import Any, Optional
from collections.abc import Mapping, Sequence

from .paths import Index, Key, Segment, parse_path


class _Missing:
    """Marker for a location that holds no value at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<MISSING>'

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def _is_sequence(node: Any) -> bool:
    return isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray))


def _as_index(segment: Segment) -> Optional[int]:
    if isinstance(segment, Index):
        return segment.position
    if segment.name.isdigit():
        return int(segment.name)
    return None


def _mapping_key(node: Mapping, segment: Segment) -> Any:
    if isinstance(segment, Key):
        return segment.name
    # JSON objects only have string keys, but native dicts may use ints.
    if segment.position in node:
        return segment.position
    return str(segment.position)


def _child(node: Any, segment: Segment) -> Any:
    """Return the value under ``segment`` in ``node``, or MISSING."""
    if isinstance(node, Mapping):
        return node.get(_mapping_key(node, segment), MISSING)
    if _is_sequence(node):
        index = _as_index(segment)
        if index is None or index >= len(node):
            return MISSING
        return node[index]
    return MISSING


def _empty_container(segment: Segment) -> Any:
    return [] if isinstance(segment, Index) else {}


def _with_child(node: Any, segment: Segment, value: Any) -> Any:
    """Return a copy of ``node`` holding ``value`` under ``segment``.

    Nodes that cannot hold ``segment`` (scalars, MISSING, a sequence
    addressed by a non-numeric key) are replaced by a fresh container.
    """
    if _is_sequence(node) and _as_index(segment) is None:
        node = MISSING
    if not isinstance(node, Mapping) and not _is_sequence(node):
        node = _empty_container(segment)
    if isinstance(node, Mapping):
        copy = dict(node)
        copy[_mapping_key(node, segment)] = value
        return copy
    copy = list(node)
    index = _as_index(segment)
    if index >= len(copy):
        copy.extend([None] * (index + 1 - len(copy)))
    copy[index] = value
    return copy


def shallow_copy(node: Any) -> Any:
    """Copy the root container of ``node``; scalars are returned as is."""
    if isinstance(node, Mapping):
        return dict(node)
    if _is_sequence(node):
        return list(node)
    return node


def get_at(state: Any, path: str) -> Any:
    """Return the value stored at ``path``, or ``MISSING`` when absent.

    A stored ``None`` is returned as ``None``; only a location that does not
    exist yields ``MISSING``. The empty path addresses ``state`` itself.
    """
    node = state
    for segment in parse_path(path):
        node = _child(node, segment)
        if node is MISSING:
            break
    return node


def _assign(node: Any, segments: tuple[Segment, ...], value: Any) -> Any:
    head, rest = segments[0], segments[1:]
    if rest:
        child = _child(node, head)
        value = _assign(child, rest, value)
    return _with_child(node, head, value)


def set_at(state: Any, path: str, value: Any) -> Any:
    """Return a new state with ``value`` placed at ``path``.

    Missing intermediate containers are created: a list when the next
    segment is a bracketed index, a dict otherwise. Lists are padded with
    ``None`` up to the target index. The empty path replaces the root.
    """
    segments = parse_path(path)
    if not segments:
        return value
    return _assign(state, segments, value)


def _remove(node: Any, segments: tuple[Segment, ...]) -> Any:
    head, rest = segments[0], segments[1:]
    child = _child(node, head)
    if child is MISSING:
        return node
    if rest:
        updated = _remove(child, rest)
        if updated is child:
            return node
        return _with_child(node, head, updated)
    if isinstance(node, Mapping):
        copy = dict(node)
        del copy[_mapping_key(node, head)]
        return copy
    # sequence slots are blanked so sibling indexes stay addressable
    copy = list(node)
    copy[_as_index(head)] = None
    return copy


def delete_at(state: Any, path: str) -> Any:
    """Return a new state without the value at ``path``.

    Mapping keys are removed; sequence elements are replaced by ``None``.
    The empty path clears everything and yields an empty dict. A path that
    does not exist leaves the content unchanged.
    """
    segments = parse_path(path)
    if not segments:
        return {}
    updated = _remove(state, segments)
    if updated is state:
        return shallow_copy(state)
    return updated
