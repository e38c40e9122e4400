"""Guardian keeper: storage of supers, queries and message handling."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

from irishub.address import AccAddress, AddressError, acc_address_from_bech32
from irishub.context import Context, Event, PageRequest, PageResponse, paginate
from irishub.errors import ERR_UNKNOWN_REQUEST
from irishub.guardian.msgs import MsgAddSuper, MsgDeleteSuper
from irishub.guardian.types import (
    ATTRIBUTE_KEY_ADDED_BY,
    ATTRIBUTE_KEY_DELETED_BY,
    ATTRIBUTE_KEY_SUPER_ADDRESS,
    ATTRIBUTE_VALUE_CATEGORY,
    ERR_DELETE_GENESIS_SUPER,
    ERR_SUPER_EXISTS,
    ERR_UNKNOWN_OPERATOR,
    ERR_UNKNOWN_SUPER,
    EVENT_TYPE_ADD_SUPER,
    EVENT_TYPE_DELETE_SUPER,
    QUERY_SUPERS,
    STORE_KEY,
    AccountType,
    Super,
    get_super_key,
    get_supers_subspace_key,
    new_super,
    super_from_dict,
)

EVENT_TYPE_MESSAGE = "message"
ATTRIBUTE_KEY_MODULE = "module"
ATTRIBUTE_KEY_SENDER = "sender"


def _encode(super_: Super) -> bytes:
    return json.dumps(super_.to_dict(), sort_keys=True, separators=(",", ":")).encode("utf-8")


def _decode(raw: bytes) -> Super:
    return super_from_dict(json.loads(raw))


@dataclass
class QuerySupersResponse:
    """One page of stored supers."""

    supers: list[Super] = field(default_factory=list)
    pagination: PageResponse = field(default_factory=PageResponse)


class Keeper:
    """Reads and writes supers in the guardian store."""

    def __init__(self, store_key: str = STORE_KEY) -> None:
        self.store_key = store_key

    def _store(self, ctx: Context):
        return ctx.kv_store(self.store_key)

    def add_super(self, ctx: Context, super_: Super) -> None:
        """Store ``super_`` under its address, replacing any earlier entry."""
        try:
            address = acc_address_from_bech32(super_.address)
        except AddressError:
            address = AccAddress()
        self._store(ctx).set(get_super_key(address), _encode(super_))

    def delete_super(self, ctx: Context, address: AccAddress) -> None:
        self._store(ctx).delete(get_super_key(address))

    def get_super(self, ctx: Context, address: AccAddress) -> Super | None:
        """Return the super held by ``address``, or None when there is none."""
        raw = self._store(ctx).get(get_super_key(address))
        return None if raw is None else _decode(raw)

    def iterate_supers(self, ctx: Context) -> Iterator[Super]:
        """Yield every stored super in key order."""
        for _key, value in self._store(ctx).iterate_prefix(get_supers_subspace_key()):
            yield _decode(value)

    def authorized(self, ctx: Context, address: AccAddress) -> bool:
        return self.get_super(ctx, address) is not None

    def supers(self, ctx: Context, request: PageRequest | None = None) -> QuerySupersResponse:
        """Return one page of the stored supers."""
        collected: list[Super] = []
        try:
            page = paginate(
                self._store(ctx), b"", request, lambda _key, value: collected.append(_decode(value))
            )
        except ValueError as exc:
            raise ValueError(f"paginate: {exc}") from exc
        return QuerySupersResponse(supers=collected, pagination=page)


class MsgServer:
    """Executes guardian messages against a keeper."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def _require_genesis_operator(self, ctx: Context, operator: AccAddress, text: str) -> None:
        found = self.keeper.get_super(ctx, operator)
        if found is None or found.account_type is not AccountType.GENESIS:
            raise ERR_UNKNOWN_OPERATOR.wrap(text)

    def add_super(self, ctx: Context, msg: MsgAddSuper) -> None:
        """Add an ordinary super on behalf of a genesis super."""
        added_by = acc_address_from_bech32(msg.added_by)
        address = acc_address_from_bech32(msg.address)
        self._require_genesis_operator(ctx, added_by, msg.added_by)
        if self.keeper.get_super(ctx, address) is not None:
            raise ERR_SUPER_EXISTS.wrap(msg.address)
        self.keeper.add_super(
            ctx, new_super(msg.description, AccountType.ORDINARY, address, added_by)
        )
        ctx.emit_events(
            [
                Event(
                    EVENT_TYPE_MESSAGE,
                    (
                        (ATTRIBUTE_KEY_MODULE, ATTRIBUTE_VALUE_CATEGORY),
                        (ATTRIBUTE_KEY_SENDER, msg.added_by),
                    ),
                ),
                Event(
                    EVENT_TYPE_ADD_SUPER,
                    (
                        (ATTRIBUTE_KEY_SUPER_ADDRESS, msg.address),
                        (ATTRIBUTE_KEY_ADDED_BY, msg.added_by),
                    ),
                ),
            ]
        )

    def delete_super(self, ctx: Context, msg: MsgDeleteSuper) -> None:
        """Delete an ordinary super on behalf of a genesis super."""
        deleted_by = acc_address_from_bech32(msg.deleted_by)
        address = acc_address_from_bech32(msg.address)
        self._require_genesis_operator(ctx, deleted_by, msg.deleted_by)
        target = self.keeper.get_super(ctx, address)
        if target is None:
            raise ERR_UNKNOWN_SUPER.wrap(msg.address)
        if target.account_type is AccountType.GENESIS:
            raise ERR_DELETE_GENESIS_SUPER.wrap(msg.address)
        self.keeper.delete_super(ctx, address)
        ctx.emit_events(
            [
                Event(
                    EVENT_TYPE_MESSAGE,
                    (
                        (ATTRIBUTE_KEY_MODULE, ATTRIBUTE_VALUE_CATEGORY),
                        (ATTRIBUTE_KEY_SENDER, msg.deleted_by),
                    ),
                ),
                Event(
                    EVENT_TYPE_DELETE_SUPER,
                    (
                        (ATTRIBUTE_KEY_SUPER_ADDRESS, msg.address),
                        (ATTRIBUTE_KEY_DELETED_BY, msg.deleted_by),
                    ),
                ),
            ]
        )


def new_querier(keeper: Keeper) -> Callable[[Context, Sequence[str]], bytes]:
    """Return a querier answering path-based guardian queries with JSON bytes."""

    def querier(ctx: Context, path: Sequence[str]) -> bytes:
        if path and path[0] == QUERY_SUPERS:
            supers = [super_.to_dict() for super_ in keeper.iterate_supers(ctx)]
            if not supers:
                return b"null"
            return json.dumps(supers, indent=2).encode("utf-8")
        name = path[0] if path else ""
        raise ERR_UNKNOWN_REQUEST.wrap(f"unknown query path: {name}")

    return querier