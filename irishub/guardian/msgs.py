"""Guardian messages: adding and deleting super accounts."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from irishub.address import AccAddress, AddressError, acc_address_from_bech32
from irishub.errors import ERR_INVALID_ADDRESS, ERR_INVALID_REQUEST
from irishub.guardian.types import ROUTER_KEY

TYPE_MSG_ADD_SUPER = "add_super"
TYPE_MSG_DELETE_SUPER = "delete_super"

AMINO_NAME_ADD_SUPER = "irishub/guardian/MsgAddSuper"
AMINO_NAME_DELETE_SUPER = "irishub/guardian/MsgDeleteSuper"

MAX_DESCRIPTION_LENGTH = 70

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _sign_bytes(amino_name: str, fields: dict[str, Any]) -> bytes:
    value = {key: item for key, item in fields.items() if item}
    text = json.dumps(
        {"type": amino_name, "value": value},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    for char, escaped in _JSON_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def _check_address(text: str, what: str) -> None:
    try:
        acc_address_from_bech32(text)
    except AddressError as exc:
        raise ERR_INVALID_ADDRESS.wrap(f"invalid {what} ({exc})") from exc


@dataclass(frozen=True)
class MsgAddSuper:
    """Request by a genesis super to add an ordinary super."""

    description: str
    address: str
    added_by: str

    def route(self) -> str:
        return ROUTER_KEY

    def msg_type(self) -> str:
        return TYPE_MSG_ADD_SUPER

    def get_sign_bytes(self) -> bytes:
        return _sign_bytes(
            AMINO_NAME_ADD_SUPER,
            {
                "description": self.description,
                "address": self.address,
                "added_by": self.added_by,
            },
        )

    def validate_basic(self) -> None:
        """Raise an SdkError when the message is malformed."""
        if not self.description:
            raise ERR_INVALID_REQUEST.wrap("description missing")
        _check_address(self.address, "address")
        _check_address(self.added_by, "operator address")
        self.ensure_length()

    def get_signers(self) -> list[AccAddress]:
        return [acc_address_from_bech32(self.added_by)]

    def ensure_length(self) -> None:
        length = len(self.description.encode("utf-8"))
        if length > MAX_DESCRIPTION_LENGTH:
            raise ERR_INVALID_REQUEST.wrap(
                f"invalid website length; got: {length}, max: {MAX_DESCRIPTION_LENGTH}"
            )


@dataclass(frozen=True)
class MsgDeleteSuper:
    """Request by a genesis super to delete an ordinary super."""

    address: str
    deleted_by: str

    def route(self) -> str:
        return ROUTER_KEY

    def msg_type(self) -> str:
        return TYPE_MSG_DELETE_SUPER

    def get_sign_bytes(self) -> bytes:
        return _sign_bytes(
            AMINO_NAME_DELETE_SUPER,
            {"address": self.address, "deleted_by": self.deleted_by},
        )

    def validate_basic(self) -> None:
        """Raise an SdkError when the message is malformed."""
        _check_address(self.address, "address")
        _check_address(self.deleted_by, "operator address")

    def get_signers(self) -> list[AccAddress]:
        return [acc_address_from_bech32(self.deleted_by)]


def new_msg_add_super(description: str, address: AccAddress, added_by: AccAddress) -> MsgAddSuper:
    return MsgAddSuper(description=description, address=str(address), added_by=str(added_by))


def new_msg_delete_super(address: AccAddress, deleted_by: AccAddress) -> MsgDeleteSuper:
    return MsgDeleteSuper(address=str(address), deleted_by=str(deleted_by))