"""Guardian state types: super accounts, store keys, events, errors and genesis."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from irishub.address import AccAddress
from irishub.errors import register

MODULE_NAME = "guardian"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = STORE_KEY
QUERY_SUPERS = "supers"

SUPER_KEY = b"\x00"

EVENT_TYPE_ADD_SUPER = "add_super"
EVENT_TYPE_DELETE_SUPER = "delete_super"
ATTRIBUTE_KEY_SUPER_ADDRESS = "address"
ATTRIBUTE_KEY_ADDED_BY = "added_by"
ATTRIBUTE_KEY_DELETED_BY = "deleted_by"
ATTRIBUTE_VALUE_CATEGORY = MODULE_NAME

ERR_UNKNOWN_OPERATOR = register(MODULE_NAME, 2, "unknown operator")
ERR_UNKNOWN_SUPER = register(MODULE_NAME, 3, "unknown super")
ERR_SUPER_EXISTS = register(MODULE_NAME, 4, "super already exists")
ERR_DELETE_GENESIS_SUPER = register(MODULE_NAME, 5, "can't delete genesis super")


class AccountType(enum.IntEnum):
    """How a super account came to exist."""

    GENESIS = 0
    ORDINARY = 1

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label

    def __format__(self, spec: str) -> str:
        if spec == "s":
            return self.label
        return format(int(self), spec)


def account_type_from_string(text: str) -> AccountType:
    """Parse ``"Genesis"`` or ``"Ordinary"``; anything else raises ValueError."""
    for option in AccountType:
        if option.label == text:
            return option
    raise ValueError(f"'{text}' is not a valid account type")


def valid_account_type(option: Any) -> bool:
    """Tell whether ``option`` is one of the known account types."""
    return option in (AccountType.GENESIS, AccountType.ORDINARY)


def _coerce_account_type(value: Any) -> AccountType:
    if isinstance(value, AccountType):
        return value
    if isinstance(value, str):
        return account_type_from_string(value)
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return AccountType(value)
        except ValueError:
            raise ValueError(f"'{value}' is not a valid account type") from None
    raise ValueError(f"'{value}' is not a valid account type")


@dataclass(frozen=True)
class Super:
    """A privileged account allowed to manage other supers."""

    description: str = ""
    account_type: AccountType = AccountType.GENESIS
    address: str = ""
    added_by: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "account_type", _coerce_account_type(self.account_type))

    def to_dict(self) -> dict[str, str]:
        return {
            "description": self.description,
            "account_type": self.account_type.label,
            "address": self.address,
            "added_by": self.added_by,
        }


def new_super(
    description: str, account_type: AccountType, address: AccAddress, added_by: AccAddress
) -> Super:
    """Build a super from raw addresses, storing them in bech32 form."""
    return Super(
        description=description,
        account_type=account_type,
        address=str(address),
        added_by=str(added_by),
    )


def super_from_dict(data: Mapping[str, Any]) -> Super:
    """Build a super from its JSON mapping; a missing type means Genesis."""
    return Super(
        description=data.get("description", "") or "",
        account_type=data.get("account_type", AccountType.GENESIS),
        address=data.get("address", "") or "",
        added_by=data.get("added_by", "") or "",
    )


def get_super_key(address: AccAddress) -> bytes:
    """Return the store key of the super held by ``address``."""
    return SUPER_KEY + bytes(address)


def get_supers_subspace_key() -> bytes:
    """Return the key prefix shared by every stored super."""
    return SUPER_KEY


@dataclass
class GenesisState:
    """The guardian module's genesis: the initial supers."""

    supers: list[Super] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        return {"supers": [super_.to_dict() for super_ in self.supers]}


def new_genesis_state(supers: Iterable[Super] | None) -> GenesisState:
    return GenesisState(supers=list(supers or []))


def default_genesis_state() -> GenesisState:
    return GenesisState()


def genesis_state_from_dict(data: Mapping[str, Any]) -> GenesisState:
    return GenesisState(supers=[super_from_dict(item) for item in data.get("supers") or []])