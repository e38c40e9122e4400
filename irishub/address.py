"""Account addresses and their bech32 text form."""

from __future__ import annotations

import binascii
import hashlib
from dataclasses import dataclass

BECH32_PREFIX_ACC_ADDR = "iaa"
ADDRESS_LENGTH = 20
MAX_ADDRESS_LENGTH = 255
_MAX_BECH32_LENGTH = 1023

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


class AddressError(ValueError):
    """An address could not be encoded, decoded or accepted."""


def _polymod(values: list[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i, gen in enumerate(_GENERATOR):
            if (top >> i) & 1:
                chk ^= gen
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _convert_bits(data: bytes | list[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    out: list[int] = []
    max_value = (1 << to_bits) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise AddressError(f"invalid data range: {value}")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)
    if pad:
        if bits:
            out.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise AddressError("invalid incomplete group")
    return out


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode raw bytes as bech32 text with the human-readable part ``hrp``."""
    if not hrp or any(not 33 <= ord(c) <= 126 for c in hrp):
        raise AddressError(f"invalid human-readable part: {hrp!r}")
    hrp = hrp.lower()
    values = _convert_bits(bytes(data), 8, 5, True)
    polymod = _polymod(_hrp_expand(hrp) + values + [0] * 6) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    return hrp + "1" + "".join(_CHARSET[v] for v in values + checksum)


def bech32_decode(text: str) -> tuple[str, bytes]:
    """Decode bech32 text into its human-readable part and raw bytes."""
    if len(text) > _MAX_BECH32_LENGTH:
        raise AddressError(f"string length {len(text)} exceeds {_MAX_BECH32_LENGTH}")
    if any(not 33 <= ord(c) <= 126 for c in text):
        raise AddressError("invalid character in string")
    if text.lower() != text and text.upper() != text:
        raise AddressError("string not all lowercase or all uppercase")
    text = text.lower()
    pos = text.rfind("1")
    if pos < 1 or pos + 7 > len(text):
        raise AddressError("invalid separator index")
    hrp = text[:pos]
    try:
        values = [_CHARSET.index(c) for c in text[pos + 1:]]
    except ValueError:
        raise AddressError("invalid character not part of charset") from None
    if _polymod(_hrp_expand(hrp) + values) != 1:
        raise AddressError("invalid checksum")
    return hrp, bytes(_convert_bits(values[:-6], 5, 8, False))


def address_hash(data: bytes) -> bytes:
    """Return the 20-byte address of ``data``: its SHA-256 digest, truncated."""
    return hashlib.sha256(data).digest()[:ADDRESS_LENGTH]


@dataclass(frozen=True)
class AccAddress:
    """An account address held as raw bytes."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def to_bech32(self, prefix: str = BECH32_PREFIX_ACC_ADDR) -> str:
        """Return the bech32 text form; an empty address gives an empty string."""
        if not self.data:
            return ""
        return bech32_encode(prefix, self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __str__(self) -> str:
        return self.to_bech32()


def acc_address_from_hex(text: str) -> AccAddress:
    """Build an address from hexadecimal text without checking its length."""
    if not text:
        raise AddressError("decoding Bech32 address failed: must provide an address")
    try:
        return AccAddress(binascii.unhexlify(text))
    except (binascii.Error, ValueError) as exc:
        raise AddressError(f"invalid hex address {text!r}: {exc}") from None


def acc_address_from_bech32(text: str, prefix: str = BECH32_PREFIX_ACC_ADDR) -> AccAddress:
    """Parse and verify a bech32 account address carrying ``prefix``."""
    if not text.strip():
        raise AddressError("empty address string is not allowed")
    hrp, data = bech32_decode(text)
    if hrp != prefix:
        raise AddressError(f"invalid Bech32 prefix; expected {prefix}, got {hrp}")
    if not data:
        raise AddressError("addresses cannot be empty: unknown address")
    if len(data) > MAX_ADDRESS_LENGTH:
        raise AddressError(
            f"address max length is {MAX_ADDRESS_LENGTH}, got {len(data)}: unknown address"
        )
    return AccAddress(data)