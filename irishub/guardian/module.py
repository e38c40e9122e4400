"""Guardian module wiring: genesis handling, message routing and block hooks."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Callable

from irishub.address import acc_address_from_bech32
from irishub.context import Context, Event
from irishub.errors import ERR_UNKNOWN_REQUEST
from irishub.guardian.keeper import Keeper, MsgServer
from irishub.guardian.msgs import MsgAddSuper, MsgDeleteSuper
from irishub.guardian.types import (
    MODULE_NAME,
    ROUTER_KEY,
    GenesisState,
    default_genesis_state,
    genesis_state_from_dict,
    new_genesis_state,
)

CONSENSUS_VERSION = 1


def validate_genesis(data: GenesisState) -> None:
    """Raise AddressError if any super carries a malformed address."""
    for super_ in data.supers:
        acc_address_from_bech32(super_.address)
        acc_address_from_bech32(super_.added_by)


def init_genesis(ctx: Context, keeper: Keeper, data: GenesisState) -> None:
    """Store the genesis supers after validating them."""
    try:
        validate_genesis(data)
    except ValueError as exc:
        raise ValueError(f"failed to initialize guardian genesis state: {exc}") from exc
    for super_ in data.supers:
        keeper.add_super(ctx, super_)


def export_genesis(ctx: Context, keeper: Keeper) -> GenesisState:
    return new_genesis_state(keeper.iterate_supers(ctx))


def new_handler(keeper: Keeper) -> Callable[[Context, Any], list[Event]]:
    """Return a handler executing guardian messages and returning their events."""
    server = MsgServer(keeper)

    def handler(ctx: Context, msg: Any) -> list[Event]:
        ctx = replace(ctx, events=[])
        if isinstance(msg, MsgAddSuper):
            server.add_super(ctx, msg)
        elif isinstance(msg, MsgDeleteSuper):
            server.delete_super(ctx, msg)
        else:
            raise ERR_UNKNOWN_REQUEST.wrap(
                f"unrecognized bank message type: {type(msg).__name__}"
            )
        return list(ctx.events)

    return handler


def _parse_genesis(raw: bytes | str) -> GenesisState:
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("genesis state must be a JSON object")
        return genesis_state_from_dict(data)
    except (ValueError, TypeError, AttributeError) as exc:
        raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc


class AppModule:
    """The guardian module as seen by the application."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def name(self) -> str:
        return MODULE_NAME

    def default_genesis(self) -> bytes:
        return json.dumps(default_genesis_state().to_dict()).encode("utf-8")

    def validate_genesis(self, raw: bytes | str) -> None:
        """Check that ``raw`` decodes as a guardian genesis state."""
        _parse_genesis(raw)

    def init_genesis(self, ctx: Context, raw: bytes | str) -> list:
        init_genesis(ctx, self.keeper, _parse_genesis(raw))
        return []

    def export_genesis(self, ctx: Context) -> bytes:
        return json.dumps(export_genesis(ctx, self.keeper).to_dict()).encode("utf-8")

    def route(self) -> tuple[str, Callable[[Context, Any], list[Event]]]:
        return ROUTER_KEY, new_handler(self.keeper)

    def querier_route(self) -> str:
        return ROUTER_KEY

    def consensus_version(self) -> int:
        return CONSENSUS_VERSION

    def begin_block(self, ctx: Context) -> None:
        return None

    def end_block(self, ctx: Context) -> list:
        return []