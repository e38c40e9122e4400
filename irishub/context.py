"""Execution context: in-memory key-value stores, events and pagination."""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, Iterator, Mapping

DEFAULT_LIMIT = 100


def _check_key(key: bytes) -> bytes:
    if key is None or len(key) == 0:
        raise ValueError("key is nil")
    return bytes(key)


class KVStore:
    """An ordered in-memory store of byte keys to byte values."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}
        self._keys: list[bytes] = []

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(_check_key(key))

    def set(self, key: bytes, value: bytes) -> None:
        key = _check_key(key)
        if value is None:
            raise ValueError("value is nil")
        if key not in self._data:
            bisect.insort(self._keys, key)
        self._data[key] = bytes(value)

    def delete(self, key: bytes) -> None:
        key = _check_key(key)
        if key in self._data:
            del self._data[key]
            del self._keys[bisect.bisect_left(self._keys, key)]

    def has(self, key: bytes) -> bool:
        return _check_key(key) in self._data

    def iterate_prefix(self, prefix: bytes = b"", reverse: bool = False) -> Iterator[tuple[bytes, bytes]]:
        """Yield ``(key, value)`` pairs whose key starts with ``prefix``, in key order."""
        prefix = bytes(prefix)
        start = bisect.bisect_left(self._keys, prefix)
        matched = []
        for key in self._keys[start:]:
            if not key.startswith(prefix):
                break
            matched.append(key)
        if reverse:
            matched.reverse()
        for key in matched:
            value = self._data.get(key)
            if value is not None:
                yield key, value

    def __len__(self) -> int:
        return len(self._data)


@dataclass(frozen=True)
class Event:
    """A typed event with ordered string attributes."""

    type: str
    attributes: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        pairs = self.attributes.items() if isinstance(self.attributes, Mapping) else self.attributes
        object.__setattr__(self, "attributes", tuple((str(k), str(v)) for k, v in pairs))


@dataclass
class Context:
    """Block state handed to keepers: stores, block header and event log."""

    stores: dict[str, KVStore] = field(default_factory=dict)
    block_height: int = 0
    block_time: datetime = field(default_factory=lambda: datetime.fromtimestamp(0, timezone.utc))
    events: list[Event] = field(default_factory=list)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("irishub"))

    def kv_store(self, name: str) -> KVStore:
        """Return the store mounted under ``name``, creating it on first use."""
        return self.stores.setdefault(name, KVStore())

    def emit_event(self, event: Event) -> None:
        self.events.append(event)

    def emit_events(self, events) -> None:
        self.events.extend(events)

    def with_block(self, height: int, time: datetime | None = None) -> "Context":
        """Return a context for another block sharing the same stores and events."""
        return replace(self, block_height=height, block_time=time or self.block_time)


@dataclass(frozen=True)
class PageRequest:
    """Selects one page of a prefix scan, by key or by offset."""

    key: bytes | None = None
    offset: int = 0
    limit: int = 0
    count_total: bool = False
    reverse: bool = False

    def __post_init__(self) -> None:
        if self.offset < 0 or self.limit < 0:
            raise ValueError("offset and limit must not be negative")


@dataclass(frozen=True)
class PageResponse:
    """The key where the next page starts, and the total when counted."""

    next_key: bytes | None = None
    total: int = 0


def paginate(
    store: KVStore,
    prefix: bytes,
    page_request: PageRequest | None,
    on_result: Callable[[bytes, bytes], None],
) -> PageResponse:
    """Feed one page of the entries under ``prefix`` to ``on_result``.

    Keys are handed over and returned with ``prefix`` removed.
    """
    request = page_request or PageRequest()
    offset, key, limit = request.offset, request.key, request.limit
    count_total, reverse = request.count_total, request.reverse
    if offset > 0 and key:
        raise ValueError("invalid request, either offset or key is expected, got both")
    if limit == 0:
        limit = DEFAULT_LIMIT
        count_total = True

    prefix = bytes(prefix)
    cut = len(prefix)
    entries = store.iterate_prefix(prefix, reverse)

    if key:
        start = prefix + bytes(key)
        count = 0
        for full_key, value in entries:
            if (full_key > start) if reverse else (full_key < start):
                continue
            count += 1
            if count > limit:
                return PageResponse(next_key=full_key[cut:])
            on_result(full_key[cut:], value)
        return PageResponse()

    end = offset + limit
    count = 0
    next_key = None
    for full_key, value in entries:
        count += 1
        if count <= offset:
            continue
        if count <= end:
            on_result(full_key[cut:], value)
        elif count == end + 1:
            next_key = full_key[cut:]
            if not count_total:
                break
    return PageResponse(next_key=next_key, total=count if count_total else 0)