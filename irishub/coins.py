"""Coins: amounts of named denominations, and sorted sets of them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Union

DEFAULT_BOND_DENOM = "stake"

_DENOM_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")


def validate_denom(denom: str) -> None:
    """Raise ValueError unless ``denom`` is a well-formed denomination."""
    if not isinstance(denom, str) or not _DENOM_RE.fullmatch(denom):
        raise ValueError(f"invalid denom: {denom}")


@dataclass(frozen=True)
class Coin:
    """A non-negative amount of one denomination."""

    denom: str
    amount: int

    def __post_init__(self) -> None:
        validate_denom(self.denom)
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"coin amount must be an integer, got {type(self.amount).__name__}")
        if self.amount < 0:
            raise ValueError(f"negative coin amount: {self.amount}")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


CoinLike = Union[Coin, "Coins"]


def _flatten(items: Iterable[CoinLike]) -> Iterator[Coin]:
    for item in items:
        if isinstance(item, Coins):
            yield from item
        else:
            yield item


class Coins:
    """An immutable set of coins, sorted by denomination, with no zero amounts."""

    __slots__ = ("_coins",)

    def __init__(self, *coins: Coin) -> None:
        kept = [coin for coin in coins if coin.amount != 0]
        seen: set[str] = set()
        for coin in kept:
            if coin.denom in seen:
                raise ValueError(f"duplicate denomination {coin.denom}")
            seen.add(coin.denom)
        self._coins = tuple(sorted(kept, key=lambda coin: coin.denom))

    def _totals(self) -> dict[str, int]:
        return {coin.denom: coin.amount for coin in self._coins}

    def add(self, *args: CoinLike) -> "Coins":
        """Return the sum of these coins and the given ones."""
        totals = self._totals()
        for coin in _flatten(args):
            totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
        return Coins(*(Coin(denom, amount) for denom, amount in totals.items()))

    def sub(self, *args: CoinLike) -> "Coins":
        """Return these coins less the given ones; a negative result raises."""
        totals = self._totals()
        for coin in _flatten(args):
            totals[coin.denom] = totals.get(coin.denom, 0) - coin.amount
        negative = [f"{amount}{denom}" for denom, amount in sorted(totals.items()) if amount < 0]
        if negative:
            raise ValueError(f"negative coin amount: {','.join(negative)}")
        return Coins(*(Coin(denom, amount) for denom, amount in totals.items()))

    def is_empty(self) -> bool:
        return not self._coins

    def amount_of(self, denom: str) -> int:
        """Return the amount held of ``denom``, zero when absent."""
        validate_denom(denom)
        return self._totals().get(denom, 0)

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._coins)

    def __len__(self) -> int:
        return len(self._coins)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coins):
            return NotImplemented
        return self._coins == other._coins

    def __hash__(self) -> int:
        return hash(self._coins)

    def __str__(self) -> str:
        return ",".join(str(coin) for coin in self._coins)

    def __repr__(self) -> str:
        return f"Coins({', '.join(repr(coin) for coin in self._coins)})"