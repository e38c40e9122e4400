import pytest
from hypothesis import given
from hypothesis import strategies as st

from irishub.address import (
    AccAddress,
    AddressError,
    acc_address_from_bech32,
    acc_address_from_hex,
    address_hash,
    bech32_decode,
    bech32_encode,
)

SENDER_HEX = "0A367B92CF0B037DFD89960EE832D56F7FC15168"
SENDER_BECH32 = "iaa1pgm8hyk0pvphmlvfjc8wsvk4daluz5tgwp4wlf"
TEST_BECH32 = "iaa1n7rdpqvgf37ktx30a2sv2kkszk3m7ncmakdj4g"


def test_address_hash_of_sender():
    assert address_hash(b"sender").hex().upper() == SENDER_HEX


def test_sender_bech32_form():
    addr = acc_address_from_hex(address_hash(b"sender").hex())
    assert addr.to_bech32() == SENDER_BECH32
    assert str(addr) == SENDER_BECH32


def test_test_address_bech32_form():
    addr = AccAddress(address_hash(b"test"))
    assert str(addr) == TEST_BECH32


def test_parse_bech32_gives_back_bytes():
    addr = acc_address_from_bech32(SENDER_BECH32)
    assert bytes(addr).hex().upper() == SENDER_HEX


def test_parse_uppercase_bech32():
    addr = acc_address_from_bech32(SENDER_BECH32.upper())
    assert str(addr) == SENDER_BECH32


def test_empty_address_string_is_empty():
    assert str(AccAddress()) == ""


@pytest.mark.parametrize("text", ["", "   "])
def test_empty_text_rejected(text):
    with pytest.raises(AddressError):
        acc_address_from_bech32(text)


def test_wrong_prefix_rejected():
    other = AccAddress(address_hash(b"sender")).to_bech32("cosmos")
    with pytest.raises(AddressError, match="invalid Bech32 prefix"):
        acc_address_from_bech32(other)


def test_bad_checksum_rejected():
    broken = SENDER_BECH32[:-1] + ("q" if SENDER_BECH32[-1] != "q" else "p")
    with pytest.raises(AddressError):
        acc_address_from_bech32(broken)


def test_mixed_case_rejected():
    with pytest.raises(AddressError):
        bech32_decode("iaa1PGm8hyk0pvphmlvfjc8wsvk4daluz5tgwp4wlf")


@pytest.mark.parametrize("text", ["", "zz", "0g"])
def test_bad_hex_rejected(text):
    with pytest.raises(AddressError):
        acc_address_from_hex(text)


@given(st.binary(min_size=1, max_size=60))
def test_bech32_round_trip(data):
    assert bech32_decode(bech32_encode("iaa", data)) == ("iaa", data)


@given(st.binary(min_size=1, max_size=40))
def test_address_round_trip(data):
    addr = AccAddress(data)
    assert acc_address_from_bech32(str(addr)) == addr