"""Mint module wiring: block-start minting, genesis handling and simulation hooks."""

from __future__ import annotations

import json
import random
from dataclasses import replace

from irishub.coins import Coins
from irishub.context import Context, Event
from irishub.errors import SdkError
from irishub.mint.keeper import Keeper
from irishub.mint.simulation import ParamChange, param_changes
from irishub.mint.types import (
    ATTRIBUTE_KEY_INFLATION_TIME,
    ATTRIBUTE_KEY_LAST_INFLATION_TIME,
    ATTRIBUTE_KEY_MINT_COIN,
    EVENT_TYPE_MINT,
    MODULE_NAME,
    ROUTER_KEY,
    GenesisState,
    default_genesis_state,
    genesis_state_from_dict,
    new_genesis_state,
)

CONSENSUS_VERSION = 1


def begin_blocker(ctx: Context, keeper: Keeper) -> None:
    """Mint this block's provision and hand it to the fee collector."""
    logger = ctx.logger.getChild(MODULE_NAME)
    block_time = ctx.block_time
    minter = keeper.get_minter(ctx)
    if ctx.block_height <= 1:
        keeper.set_minter(ctx, replace(minter, last_update=block_time))
        return

    params = keeper.get_param_set(ctx)
    logger.info("Mint parameters: inflation_rate=%s mint_denom=%s", params.inflation, params.mint_denom)

    minted = minter.block_provision(params)
    logger.info("Mint result: block_provisions=%s time=%s", minted, block_time)

    minted_coins = Coins(minted)
    keeper.mint_coins(ctx, minted_coins)
    keeper.add_collected_fees(ctx, minted_coins)

    last_inflation_time = minter.last_update
    keeper.set_minter(ctx, replace(minter, last_update=block_time))

    ctx.emit_event(
        Event(
            EVENT_TYPE_MINT,
            (
                (ATTRIBUTE_KEY_LAST_INFLATION_TIME, str(last_inflation_time)),
                (ATTRIBUTE_KEY_INFLATION_TIME, str(block_time)),
                (ATTRIBUTE_KEY_MINT_COIN, str(minted.amount)),
            ),
        )
    )


def validate_genesis(data: GenesisState) -> None:
    """Raise if the inflation base is not positive or the parameters are invalid."""
    if not data.minter.inflation_base > 0:
        raise ValueError("base inflation must be positive")
    data.params.validate()


def init_genesis(ctx: Context, keeper: Keeper, data: GenesisState) -> None:
    """Store the genesis minter and parameters after validating them."""
    try:
        validate_genesis(data)
    except (ValueError, SdkError) as exc:
        raise ValueError(f"failed to initialize mint genesis state: {exc}") from exc
    keeper.set_minter(ctx, data.minter)
    keeper.set_param_set(ctx, data.params)


def export_genesis(ctx: Context, keeper: Keeper) -> GenesisState:
    return new_genesis_state(keeper.get_minter(ctx), keeper.get_param_set(ctx))


def _parse_genesis(raw: bytes | str) -> GenesisState:
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("genesis state must be a JSON object")
        return genesis_state_from_dict(data)
    except (ValueError, TypeError, AttributeError) as exc:
        raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc


class AppModule:
    """The mint module as seen by the application."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def name(self) -> str:
        return MODULE_NAME

    def default_genesis(self) -> bytes:
        return json.dumps(default_genesis_state().to_dict()).encode("utf-8")

    def validate_genesis(self, raw: bytes | str) -> None:
        validate_genesis(_parse_genesis(raw))

    def init_genesis(self, ctx: Context, raw: bytes | str) -> list:
        init_genesis(ctx, self.keeper, _parse_genesis(raw))
        return []

    def export_genesis(self, ctx: Context) -> bytes:
        return json.dumps(export_genesis(ctx, self.keeper).to_dict()).encode("utf-8")

    def querier_route(self) -> str:
        return ROUTER_KEY

    def consensus_version(self) -> int:
        return CONSENSUS_VERSION

    def begin_block(self, ctx: Context) -> None:
        begin_blocker(ctx, self.keeper)

    def end_block(self, ctx: Context) -> list:
        return []

    def randomized_params(self, rng: random.Random) -> list[ParamChange]:
        return param_changes(rng)