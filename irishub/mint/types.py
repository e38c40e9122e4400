"""Mint state types: the minter, its parameters, store keys, events and genesis."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from irishub.coins import DEFAULT_BOND_DENOM, Coin, validate_denom
from irishub.dec import Dec, ZERO_DEC, int_with_decimal, new_dec_with_prec, parse_dec
from irishub.errors import register

MODULE_NAME = "mint"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME
QUERY_PARAMETERS = "parameters"
QUERY_INFLATION = "inflation"

MINTER_KEY = b"\x00"

EVENT_TYPE_MINT = "mint"
ATTRIBUTE_KEY_LAST_INFLATION_TIME = "last_inflation_time"
ATTRIBUTE_KEY_INFLATION_TIME = "inflation_time"
ATTRIBUTE_KEY_MINT_COIN = "mint_coin"

ERR_INVALID_MINT_INFLATION = register(MODULE_NAME, 2, "invalid mint inflation")
ERR_INVALID_MINT_DENOM = register(MODULE_NAME, 3, "invalid mint denom")

DEFAULT_PARAM_SPACE = "mint"
MINT_DENOM = DEFAULT_BOND_DENOM

KEY_INFLATION = b"Inflation"
KEY_MINT_DENOM = b"MintDenom"

# 5 seconds a block, 8766 hours = 365.25 days a year
BLOCKS_PER_YEAR = 60 * 60 * 8766 // 5

INITIAL_ISSUE = int_with_decimal(20, 8)
MAX_INFLATION = new_dec_with_prec(2, 1)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_TIME_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


def _to_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _format_time(moment: datetime) -> str:
    moment = _to_utc(moment)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    return text + "Z"


def _parse_time(text: str) -> datetime:
    match = _TIME_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    base, fraction, zone = match.groups()
    micros = ((fraction or "") + "000000")[:6]
    offset = "+00:00" if zone == "Z" else zone
    return datetime.fromisoformat(f"{base}.{micros}{offset}").astimezone(timezone.utc)


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    return data[key]


@dataclass(frozen=True)
class Params:
    """Inflation rate and the denomination that is minted."""

    inflation: Dec = ZERO_DEC
    mint_denom: str = ""

    def validate(self) -> None:
        """Raise an SdkError when the parameters are out of bounds."""
        if self.inflation > MAX_INFLATION or self.inflation < ZERO_DEC:
            raise ERR_INVALID_MINT_INFLATION.wrap(
                f"Mint inflation [{self.inflation}] should be between [0, 0.2] "
            )
        if not self.mint_denom:
            raise ERR_INVALID_MINT_DENOM.wrap(
                f"Mint denom [{self.mint_denom}] should not be empty"
            )

    def to_dict(self) -> dict[str, str]:
        return {"inflation": str(self.inflation), "mint_denom": self.mint_denom}

    def __str__(self) -> str:
        return f'inflation: "{self.inflation}"\nmint_denom: {self.mint_denom}\n'


@dataclass(frozen=True)
class Minter:
    """The time of the last mint and the base that inflation applies to."""

    last_update: datetime = EPOCH
    inflation_base: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "last_update", _to_utc(self.last_update))
        if isinstance(self.inflation_base, bool) or not isinstance(self.inflation_base, int):
            raise TypeError(
                f"inflation base must be an integer, got {type(self.inflation_base).__name__}"
            )

    def next_annual_provisions(self, params: Params) -> Dec:
        """Return the amount minted over a year at the given inflation."""
        return params.inflation.mul_int(self.inflation_base)

    def block_provision(self, params: Params) -> Coin:
        """Return the coin minted in one block."""
        provisions = self.next_annual_provisions(params)
        amount = provisions.quo_int(BLOCKS_PER_YEAR).truncate_int()
        return Coin(params.mint_denom, amount)

    def to_dict(self) -> dict[str, str]:
        return {
            "last_update": _format_time(self.last_update),
            "inflation_base": str(self.inflation_base),
        }

    def __str__(self) -> str:
        return (
            f"last_update: {_format_time(self.last_update)}\n"
            f"inflation_base: \"{self.inflation_base}\""
        )


def new_minter(last_update: datetime, inflation_base: int) -> Minter:
    return Minter(last_update=last_update, inflation_base=inflation_base)


def default_minter() -> Minter:
    """Return the minter of a new chain: 20*10^8 iris expressed in micro units."""
    return new_minter(EPOCH, INITIAL_ISSUE * int_with_decimal(1, 6))


def validate_minter(minter: Minter) -> None:
    """Raise ValueError if the minter predates the epoch or has no positive base."""
    if minter.last_update < EPOCH:
        raise ValueError(
            f"minter last update time({minter.last_update}) should not be a time "
            "before January 1, 1970 UTC"
        )
    if not minter.inflation_base > 0:
        raise ValueError(
            f"minter inflation basement ({minter.inflation_base}) should be positive"
        )


def minter_from_dict(data: Mapping[str, Any]) -> Minter:
    try:
        return Minter(
            last_update=_parse_time(str(_require(data, "last_update"))),
            inflation_base=int(str(_require(data, "inflation_base"))),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid minter: {exc}") from exc


def new_params(mint_denom: str, inflation: Dec) -> Params:
    return Params(inflation=inflation, mint_denom=mint_denom)


def default_params() -> Params:
    return Params(inflation=new_dec_with_prec(4, 2), mint_denom=MINT_DENOM)


def params_from_dict(data: Mapping[str, Any]) -> Params:
    inflation = _require(data, "inflation")
    mint_denom = _require(data, "mint_denom")
    if not isinstance(inflation, str) or not isinstance(mint_denom, str):
        raise ValueError("params fields must be strings")
    return Params(inflation=parse_dec(inflation), mint_denom=mint_denom)


def validate_inflation(value: Any) -> None:
    """Check a parameter-store inflation value."""
    if not isinstance(value, Dec):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")
    if value > MAX_INFLATION or value < ZERO_DEC:
        raise ValueError(f"Mint inflation [{value}] should be between [0, 0.2] ")


def validate_mint_denom(value: Any) -> None:
    """Check a parameter-store mint denomination."""
    if not isinstance(value, str):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")
    if not value.strip():
        raise ValueError("mint denom cannot be blank")
    validate_denom(value)


@dataclass(frozen=True)
class GenesisState:
    """The mint module's genesis: its minter and parameters."""

    minter: Minter = field(default_factory=default_minter)
    params: Params = field(default_factory=default_params)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {"minter": self.minter.to_dict(), "params": self.params.to_dict()}


def new_genesis_state(minter: Minter, params: Params) -> GenesisState:
    return GenesisState(minter=minter, params=params)


def default_genesis_state() -> GenesisState:
    return GenesisState(minter=default_minter(), params=default_params())


def genesis_state_from_dict(data: Mapping[str, Any]) -> GenesisState:
    return GenesisState(
        minter=minter_from_dict(_require(data, "minter")),
        params=params_from_dict(_require(data, "params")),
    )


def validate_genesis(data: GenesisState) -> None:
    """Raise if the parameters or the minter are invalid."""
    data.params.validate()
    validate_minter(data.minter)