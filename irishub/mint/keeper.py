"""Mint keeper: minter and parameter storage, minting and fee collection."""

from __future__ import annotations

import json
from typing import Callable, Iterable, Sequence

from irishub.address import AccAddress, address_hash
from irishub.coins import Coin, Coins
from irishub.context import Context, KVStore
from irishub.dec import parse_dec
from irishub.errors import ERR_INSUFFICIENT_FUNDS, ERR_UNKNOWN_REQUEST
from irishub.mint.types import (
    DEFAULT_PARAM_SPACE,
    KEY_INFLATION,
    KEY_MINT_DENOM,
    MINTER_KEY,
    MODULE_NAME,
    QUERY_PARAMETERS,
    STORE_KEY,
    Minter,
    Params,
    minter_from_dict,
    validate_inflation,
    validate_mint_denom,
)

FEE_COLLECTOR_NAME = "fee_collector"
PARAMS_STORE_KEY = "params"
BANK_STORE_KEY = "bank"


def module_address(name: str) -> AccAddress:
    """Return the address derived from a module account's name."""
    return AccAddress(address_hash(name.encode("utf-8")))


class AccountKeeper:
    """Knows which module accounts exist and where they live."""

    def __init__(self, module_names: Iterable[str] = (MODULE_NAME, FEE_COLLECTOR_NAME)) -> None:
        self._modules = {name: module_address(name) for name in module_names}

    def get_module_address(self, name: str) -> AccAddress | None:
        """Return the module account's address, or None if there is no such module."""
        return self._modules.get(name)


class BankKeeper:
    """Holds account balances in the context's bank store."""

    def __init__(self, account_keeper: AccountKeeper, store_key: str = BANK_STORE_KEY) -> None:
        self.account_keeper = account_keeper
        self.store_key = store_key

    def _store(self, ctx: Context) -> KVStore:
        return ctx.kv_store(self.store_key)

    def _module(self, name: str) -> AccAddress:
        address = self.account_keeper.get_module_address(name)
        if address is None:
            raise LookupError(f"module account {name} does not exist")
        return address

    def get_all_balances(self, ctx: Context, address: AccAddress) -> Coins:
        raw = self._store(ctx).get(bytes(address))
        if raw is None:
            return Coins()
        return Coins(*(Coin(denom, int(amount)) for denom, amount in json.loads(raw).items()))

    def _set_balance(self, ctx: Context, address: AccAddress, coins: Coins) -> None:
        store = self._store(ctx)
        if coins.is_empty():
            store.delete(bytes(address))
            return
        encoded = {coin.denom: str(coin.amount) for coin in coins}
        store.set(bytes(address), json.dumps(encoded, sort_keys=True).encode("utf-8"))

    def _send(self, ctx: Context, sender: AccAddress, recipient: AccAddress, coins: Coins) -> None:
        balance = self.get_all_balances(ctx, sender)
        try:
            remaining = balance.sub(coins)
        except ValueError:
            raise ERR_INSUFFICIENT_FUNDS.wrap(f"{balance} is smaller than {coins}") from None
        self._set_balance(ctx, sender, remaining)
        self._set_balance(ctx, recipient, self.get_all_balances(ctx, recipient).add(coins))

    def mint_coins(self, ctx: Context, module_name: str, coins: Coins) -> None:
        """Create ``coins`` in the named module account."""
        address = self._module(module_name)
        self._set_balance(ctx, address, self.get_all_balances(ctx, address).add(coins))

    def send_coins_from_module_to_module(
        self, ctx: Context, sender_module: str, recipient_module: str, coins: Coins
    ) -> None:
        self._send(ctx, self._module(sender_module), self._module(recipient_module), coins)

    def send_coins_from_module_to_account(
        self, ctx: Context, sender_module: str, recipient: AccAddress, coins: Coins
    ) -> None:
        self._send(ctx, self._module(sender_module), recipient, coins)


def _encode_minter(minter: Minter) -> bytes:
    return json.dumps(minter.to_dict(), sort_keys=True).encode("utf-8")


class Keeper:
    """Reads and writes the minter and mint parameters, and mints coins."""

    def __init__(
        self,
        account_keeper: AccountKeeper,
        bank_keeper: BankKeeper,
        store_key: str = STORE_KEY,
        fee_collector_name: str = FEE_COLLECTOR_NAME,
        param_space: str = DEFAULT_PARAM_SPACE,
    ) -> None:
        if account_keeper.get_module_address(MODULE_NAME) is None:
            raise ValueError("the mint module account has not been set")
        self.bank_keeper = bank_keeper
        self.store_key = store_key
        self.fee_collector_name = fee_collector_name
        self.param_space = param_space

    def _param_key(self, key: bytes) -> bytes:
        return self.param_space.encode("utf-8") + b"/" + key

    def get_minter(self, ctx: Context) -> Minter:
        """Return the stored minter; a missing minter is an error."""
        raw = ctx.kv_store(self.store_key).get(MINTER_KEY)
        if raw is None:
            raise LookupError("Stored minter should not have been nil")
        return minter_from_dict(json.loads(raw))

    def set_minter(self, ctx: Context, minter: Minter) -> None:
        ctx.kv_store(self.store_key).set(MINTER_KEY, _encode_minter(minter))

    def mint_coins(self, ctx: Context, coins: Coins) -> None:
        """Mint ``coins`` into the mint module account; nothing happens for no coins."""
        if coins.is_empty():
            return
        self.bank_keeper.mint_coins(ctx, MODULE_NAME, coins)

    def add_collected_fees(self, ctx: Context, coins: Coins) -> None:
        """Move ``coins`` from the mint module account to the fee collector."""
        self.bank_keeper.send_coins_from_module_to_module(
            ctx, MODULE_NAME, self.fee_collector_name, coins
        )

    def get_param_set(self, ctx: Context) -> Params:
        """Return the stored parameters; a missing parameter is an error."""
        store = ctx.kv_store(PARAMS_STORE_KEY)
        values = {}
        for key in (KEY_INFLATION, KEY_MINT_DENOM):
            raw = store.get(self._param_key(key))
            if raw is None:
                raise LookupError(f"parameter {key.decode('ascii')} not set")
            values[key] = json.loads(raw)
        return Params(inflation=parse_dec(values[KEY_INFLATION]), mint_denom=values[KEY_MINT_DENOM])

    def set_param_set(self, ctx: Context, params: Params) -> None:
        """Validate and store every parameter."""
        validate_inflation(params.inflation)
        validate_mint_denom(params.mint_denom)
        store = ctx.kv_store(PARAMS_STORE_KEY)
        store.set(self._param_key(KEY_INFLATION), json.dumps(str(params.inflation)).encode("utf-8"))
        store.set(self._param_key(KEY_MINT_DENOM), json.dumps(params.mint_denom).encode("utf-8"))

    def params(self, ctx: Context) -> Params:
        """Answer the parameters query."""
        return self.get_param_set(ctx)


def new_querier(keeper: Keeper) -> Callable[[Context, Sequence[str]], bytes]:
    """Return a querier answering path-based mint queries with JSON bytes."""

    def querier(ctx: Context, path: Sequence[str]) -> bytes:
        if path and path[0] == QUERY_PARAMETERS:
            params = keeper.get_param_set(ctx)
            return json.dumps(params.to_dict(), indent=2).encode("utf-8")
        name = path[0] if path else ""
        raise ERR_UNKNOWN_REQUEST.wrap(f"unknown query path: {name}")

    return querier