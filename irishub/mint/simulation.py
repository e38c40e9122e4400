"""Mint simulation helpers: random genesis, parameter changes and store decoding."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass
from typing import Any, Callable, Mapping, MutableMapping

from irishub.dec import Dec, new_dec_with_prec, parse_dec
from irishub.mint.types import (
    KEY_INFLATION,
    MINT_DENOM,
    MINTER_KEY,
    MODULE_NAME,
    GenesisState,
    Minter,
    Params,
    default_minter,
    minter_from_dict,
    new_genesis_state,
)

INFLATION = "inflation"


def gen_inflation(rng: random.Random) -> Dec:
    """Return a random inflation between 0.00 and 0.98."""
    return new_dec_with_prec(rng.randrange(99), 2)


def randomized_gen_state(
    rng: random.Random,
    gen_state: MutableMapping[str, bytes],
    app_params: Mapping[str, Any] | None = None,
) -> GenesisState:
    """Store a random mint genesis in ``gen_state`` and return it.

    An inflation given in ``app_params`` (as JSON) is used instead of a random one.
    """
    raw = (app_params or {}).get(INFLATION)
    if raw is not None:
        inflation = parse_dec(json.loads(raw))
    else:
        inflation = gen_inflation(rng)

    params = Params(inflation=inflation, mint_denom=MINT_DENOM)
    genesis = new_genesis_state(default_minter(), params)
    print(
        f"Selected randomly generated {MODULE_NAME} parameters:\n"
        f"{json.dumps(genesis.to_dict(), indent=1)}"
    )
    gen_state[MODULE_NAME] = json.dumps(genesis.to_dict()).encode("utf-8")
    return genesis


@dataclass(frozen=True)
class ParamChange:
    """A parameter that simulated governance proposals may change."""

    subspace: str
    key: str
    simulation_value: Callable[[random.Random], str]

    def compose_key(self) -> str:
        return f"{self.subspace}/{self.key}"


def param_changes(rng: random.Random) -> list[ParamChange]:
    """Return the mint parameters that simulated proposals may change."""
    return [
        ParamChange(
            MODULE_NAME,
            KEY_INFLATION.decode("ascii"),
            lambda r: f'"{gen_inflation(r)}"',
        )
    ]


def _decode_minter(value: bytes) -> Minter:
    return minter_from_dict(json.loads(value))


def new_decode_store() -> Callable[[tuple[bytes, bytes], tuple[bytes, bytes]], str]:
    """Return a function describing two ``(key, value)`` store entries side by side."""

    def decode(kv_a: tuple[bytes, bytes], kv_b: tuple[bytes, bytes]) -> str:
        key_a, value_a = kv_a
        _key_b, value_b = kv_b
        if bytes(key_a) == MINTER_KEY:
            return f"{_decode_minter(value_a)}\n{_decode_minter(value_b)}"
        raise ValueError(f"invalid mint key {bytes(key_a).hex().upper()}")

    return decode