import pytest

from irishub.address import AccAddress, AddressError, acc_address_from_hex, address_hash
from irishub.errors import ERR_INVALID_ADDRESS, ERR_INVALID_REQUEST, SdkError
from irishub.guardian.msgs import (
    TYPE_MSG_ADD_SUPER,
    TYPE_MSG_DELETE_SUPER,
    new_msg_add_super,
    new_msg_delete_super,
)
from irishub.guardian.types import ROUTER_KEY

SENDER = acc_address_from_hex(address_hash(b"sender").hex())
TEST_ADDR = acc_address_from_hex(address_hash(b"test").hex())
NIL_ADDR = AccAddress()
DESCRIPTION = "description"
NIL_DESCRIPTION = ""


def test_new_msg_add_super():
    msg = new_msg_add_super(DESCRIPTION, TEST_ADDR, SENDER)
    assert msg.description == DESCRIPTION
    assert msg.address == str(TEST_ADDR)
    assert msg.added_by == str(SENDER)


def test_msg_add_super_route():
    assert new_msg_add_super(DESCRIPTION, TEST_ADDR, SENDER).route() == ROUTER_KEY


def test_msg_add_super_type():
    assert new_msg_add_super(DESCRIPTION, TEST_ADDR, SENDER).msg_type() == TYPE_MSG_ADD_SUPER


def test_msg_add_super_get_sign_bytes():
    res = new_msg_add_super(DESCRIPTION, TEST_ADDR, SENDER).get_sign_bytes()
    expected = (
        '{"type":"irishub/guardian/MsgAddSuper","value":'
        '{"added_by":"iaa1pgm8hyk0pvphmlvfjc8wsvk4daluz5tgwp4wlf",'
        '"address":"iaa1n7rdpqvgf37ktx30a2sv2kkszk3m7ncmakdj4g",'
        '"description":"description"}}'
    )
    assert res.decode() == expected


def test_msg_add_super_get_signers():
    signers = new_msg_add_super(DESCRIPTION, TEST_ADDR, SENDER).get_signers()
    assert [bytes(s).hex().upper() for s in signers] == ["0A367B92CF0B037DFD89960EE832D56F7FC15168"]


@pytest.mark.parametrize(
    "msg, expect_pass, error",
    [
        (new_msg_add_super(DESCRIPTION, TEST_ADDR, SENDER), True, None),
        (new_msg_add_super(NIL_DESCRIPTION, TEST_ADDR, SENDER), False, ERR_INVALID_REQUEST),
        (new_msg_add_super(DESCRIPTION, NIL_ADDR, SENDER), False, ERR_INVALID_ADDRESS),
        (new_msg_add_super(DESCRIPTION, TEST_ADDR, NIL_ADDR), False, ERR_INVALID_ADDRESS),
    ],
    ids=["pass", "invalid Description", "invalid Address", "invalid AddedBy"],
)
def test_msg_add_super_validation(msg, expect_pass, error):
    if expect_pass:
        assert msg.validate_basic() is None
    else:
        with pytest.raises(SdkError) as info:
            msg.validate_basic()
        assert info.value.matches(error)


def test_msg_add_super_description_too_long():
    msg = new_msg_add_super("x" * 71, TEST_ADDR, SENDER)
    with pytest.raises(SdkError) as info:
        msg.validate_basic()
    assert info.value.matches(ERR_INVALID_REQUEST)
    assert new_msg_add_super("x" * 70, TEST_ADDR, SENDER).ensure_length() is None


def test_new_msg_delete_super():
    msg = new_msg_delete_super(TEST_ADDR, SENDER)
    assert msg.address == str(TEST_ADDR)
    assert msg.deleted_by == str(SENDER)


def test_msg_delete_super_route():
    assert new_msg_delete_super(TEST_ADDR, SENDER).route() == ROUTER_KEY


def test_msg_delete_super_type():
    assert new_msg_delete_super(TEST_ADDR, SENDER).msg_type() == TYPE_MSG_DELETE_SUPER


def test_msg_delete_super_get_sign_bytes():
    res = new_msg_delete_super(TEST_ADDR, SENDER).get_sign_bytes()
    expected = (
        '{"type":"irishub/guardian/MsgDeleteSuper","value":'
        '{"address":"iaa1n7rdpqvgf37ktx30a2sv2kkszk3m7ncmakdj4g",'
        '"deleted_by":"iaa1pgm8hyk0pvphmlvfjc8wsvk4daluz5tgwp4wlf"}}'
    )
    assert res.decode() == expected


def test_msg_delete_super_get_signers():
    signers = new_msg_delete_super(TEST_ADDR, SENDER).get_signers()
    assert [bytes(s).hex().upper() for s in signers] == ["0A367B92CF0B037DFD89960EE832D56F7FC15168"]


@pytest.mark.parametrize(
    "msg, expect_pass",
    [
        (new_msg_delete_super(TEST_ADDR, SENDER), True),
        (new_msg_delete_super(NIL_ADDR, SENDER), False),
        (new_msg_delete_super(TEST_ADDR, NIL_ADDR), False),
    ],
    ids=["pass", "invalid Address", "invalid DeletedBy"],
)
def test_msg_delete_super_validation(msg, expect_pass):
    if expect_pass:
        assert msg.validate_basic() is None
    else:
        with pytest.raises(SdkError) as info:
            msg.validate_basic()
        assert info.value.matches(ERR_INVALID_ADDRESS)


def test_get_signers_with_empty_address_raises():
    with pytest.raises(AddressError):
        new_msg_delete_super(TEST_ADDR, NIL_ADDR).get_signers()


def test_sign_bytes_escape_html_characters():
    res = new_msg_add_super("a<b>&c", TEST_ADDR, SENDER).get_sign_bytes().decode()
    assert "\\u003c" in res and "\\u003e" in res and "\\u0026" in res
    assert "<" not in res