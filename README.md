# irishub

Two chain modules, guardian and mint, together with the pieces they rely on.
These pieces are bech32 account addresses, fixed-point decimals, coins, and a
block context. The block context holds in-memory key-value stores and an event
log.

The package needs only the standard library.

## Building blocks

- `irishub.address`: `AccAddress`, `bech32_encode` / `bech32_decode`,
  `acc_address_from_bech32`, `acc_address_from_hex` and `address_hash`.
  Errors are raised as `AddressError`. The default prefix is `iaa`.
- `irishub.dec`: `Dec`, a signed decimal with 18 digits of precision.
  It comes with `new_dec_with_prec`, `parse_dec` and `int_with_decimal`.
- `irishub.coins`: `Coin`, `Coins` and `validate_denom`.
  - `Coins` is immutable and sorted by denomination, and drops zero amounts.
  - `Coins.sub` raises `ValueError` if any amount would go negative.
- `irishub.context`: holds the state-side types.
  - `KVStore` is an ordered in-memory store with prefix iteration.
  - `Context` holds named stores, block height and time, and the emitted `Event`s.
  - `paginate` works with `PageRequest` / `PageResponse` to scan a prefix page by page.
- `irishub.errors`: `register` creates a codespace-scoped `ErrorCode`.
  `ErrorCode.wrap` builds an `SdkError`, and `SdkError.matches` compares it with a code.

## Guardian

The guardian module keeps a set of *super* accounts. Each super is either
`AccountType.GENESIS` or `AccountType.ORDINARY`.

- Only a genesis super may add or delete supers.
- Every super added through a message is ordinary.
- Genesis supers cannot be deleted.

The module is split across four files:

- `irishub.guardian.types`: `Super`, `GenesisState`, `account_type_from_string`,
  `get_super_key`, and the module's error codes and event names.
- `irishub.guardian.msgs`: `MsgAddSuper` and `MsgDeleteSuper`, with
  `validate_basic`, `get_signers` and sorted JSON `get_sign_bytes`.
  A description is required and may be at most 70 bytes.
- `irishub.guardian.keeper`: stores and answers for supers.
  - `Keeper` stores supers and pages through them with `supers`.
  - `MsgServer` executes the messages and emits events.
  - `new_querier` answers the `supers` path with JSON.
- `irishub.guardian.module`: genesis handling, routing and `AppModule`.
  - `init_genesis` / `export_genesis` load and dump the supers.
  - `validate_genesis` checks every address.
  - `new_handler` routes messages and returns their events.

```python
from irishub.address import AccAddress, address_hash
from irishub.context import Context
from irishub.guardian.keeper import Keeper, MsgServer
from irishub.guardian.msgs import new_msg_add_super
from irishub.guardian.types import AccountType, new_super

root = AccAddress(address_hash(b"root"))
other = AccAddress(address_hash(b"other"))

ctx = Context()
keeper = Keeper()
keeper.add_super(ctx, new_super("root", AccountType.GENESIS, root, root))

msg = new_msg_add_super("operator", other, root)
msg.validate_basic()
MsgServer(keeper).add_super(ctx, msg)
print([s.address for s in keeper.iterate_supers(ctx)])
```

## Mint

The mint module creates new tokens at the start of every block. The yearly
provision is the inflation rate times the minter's inflation base. It is split
evenly over the blocks of a year (`BLOCKS_PER_YEAR`, one block every five
seconds), and the per-block amount is truncated.

At block height 1 or below, `begin_blocker` only records the block time.
From height 2 on, it mints the block's provision into the `mint` module account.
It then moves those coins to `fee_collector` and emits a `mint` event.

- `irishub.mint.types`: `Minter`, `Params` and `GenesisState`, with their
  defaults and validation.
  - By default the minter has an inflation base of 2·10^15 and the parameters
    have inflation `0.04` in `stake`.
  - Inflation must lie between 0 and 0.2.
- `irishub.mint.keeper`: `Keeper`, which stores the minter and parameters
  (`set_param_set` validates them).
  - `AccountKeeper` and `BankKeeper` keep module-account balances in the
    context's `bank` store.
  - `new_querier` answers the `parameters` path with JSON.
- `irishub.mint.module`: `begin_blocker`, genesis handling and `AppModule`.
- `irishub.mint.simulation`: `gen_inflation`, `randomized_gen_state`,
  `param_changes` and `new_decode_store`.

```python
from irishub.context import Context
from irishub.mint.keeper import AccountKeeper, BankKeeper, Keeper, module_address
from irishub.mint.module import begin_blocker
from irishub.mint.types import default_minter, default_params

accounts = AccountKeeper()
bank = BankKeeper(accounts)
keeper = Keeper(accounts, bank)

ctx = Context(block_height=2)
keeper.set_minter(ctx, default_minter())
keeper.set_param_set(ctx, default_params())
begin_blocker(ctx, keeper)

print(bank.get_all_balances(ctx, module_address("fee_collector")))
print(ctx.events)
```

## What this package does not do

The package is a library only.

- It has no command-line tool.
- It has no node, network, gRPC or REST server.
- It has no transaction signing or key management.
- It does no consensus.

All state lives in the in-memory `KVStore`s of a `Context`, so nothing is
persisted to disk.

## Tests

```
pip install -e ".[test]"
pytest
```