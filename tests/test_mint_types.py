from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from irishub.coins import DEFAULT_BOND_DENOM
from irishub.dec import Dec, int_with_decimal, new_dec_with_prec
from irishub.errors import SdkError
from irishub.mint.types import (
    BLOCKS_PER_YEAR,
    EPOCH,
    ERR_INVALID_MINT_DENOM,
    ERR_INVALID_MINT_INFLATION,
    INITIAL_ISSUE,
    GenesisState,
    Minter,
    Params,
    default_genesis_state,
    default_minter,
    default_params,
    genesis_state_from_dict,
    minter_from_dict,
    new_genesis_state,
    new_minter,
    new_params,
    params_from_dict,
    validate_genesis,
    validate_inflation,
    validate_mint_denom,
    validate_minter,
)


@pytest.mark.parametrize("prec_value", [20, 10, 5])
def test_next_inflation(prec_value):
    minter = new_minter(datetime.now(timezone.utc), int_with_decimal(100, 18))
    params = Params(inflation=new_dec_with_prec(prec_value, 2), mint_denom=DEFAULT_BOND_DENOM)
    annual = minter.next_annual_provisions(params)
    coin = minter.block_provision(params)
    block_provision = annual.quo_int(12 * 60 * 8766)
    assert coin.amount == block_provision.truncate_int()
    assert coin.denom == DEFAULT_BOND_DENOM


def test_block_provision_divides_by_blocks_per_year():
    minter = new_minter(EPOCH, 6311520 * 100)
    params = Params(inflation=new_dec_with_prec(20, 2), mint_denom="stake")
    assert minter.block_provision(params).amount == 20
    assert BLOCKS_PER_YEAR == 6311520


def test_default_minter():
    minter = default_minter()
    assert validate_minter(minter) is None
    assert minter.inflation_base == 2 * 10**15
    assert minter.last_update == EPOCH


@pytest.mark.parametrize(
    "expect_pass,last_update,base",
    [
        (False, EPOCH - timedelta(seconds=1, microseconds=1), INITIAL_ISSUE * int_with_decimal(1, 18)),
        (False, EPOCH, INITIAL_ISSUE * int_with_decimal(0, 0)),
        (True, EPOCH, INITIAL_ISSUE * int_with_decimal(1, 18)),
    ],
)
def test_minter_validate(expect_pass, last_update, base):
    minter = new_minter(last_update, base)
    if expect_pass:
        assert validate_minter(minter) is None
        assert minter.inflation_base == base
    else:
        with pytest.raises(ValueError):
            validate_minter(minter)


def test_minter_rejects_non_integer_base():
    with pytest.raises(TypeError):
        Minter(EPOCH, "100")


def test_naive_time_is_taken_as_utc():
    minter = new_minter(datetime(2020, 5, 1, 12, 0, 0), 1)
    assert minter.last_update == datetime(2020, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_minter_dict_round_trip():
    minter = new_minter(datetime(2022, 3, 4, 5, 6, 7, 123456, tzinfo=timezone.utc), 2 * 10**9)
    data = minter.to_dict()
    assert data["inflation_base"] == "2000000000"
    assert data["last_update"] == "2022-03-04T05:06:07.123456Z"
    assert minter_from_dict(data) == minter


def test_default_minter_dict():
    assert default_minter().to_dict() == {
        "last_update": "1970-01-01T00:00:00Z",
        "inflation_base": "2000000000000000",
    }


def test_minter_from_dict_rejects_garbage():
    with pytest.raises(ValueError):
        minter_from_dict({"last_update": "yesterday", "inflation_base": "1"})
    with pytest.raises(ValueError):
        minter_from_dict({"inflation_base": "1"})


def test_default_params():
    params = default_params()
    assert str(params.inflation) == "0.040000000000000000"
    assert params.mint_denom == "stake"
    assert params.validate() is None


def test_new_params():
    params = new_params("uiris", new_dec_with_prec(1, 1))
    assert params == Params(inflation=new_dec_with_prec(1, 1), mint_denom="uiris")


def test_params_str():
    assert str(default_params()) == 'inflation: "0.040000000000000000"\nmint_denom: stake\n'


@pytest.mark.parametrize("inflation", [new_dec_with_prec(21, 2), new_dec_with_prec(-1, 2)])
def test_params_validate_inflation_bounds(inflation):
    with pytest.raises(SdkError) as info:
        Params(inflation=inflation, mint_denom="stake").validate()
    assert info.value.matches(ERR_INVALID_MINT_INFLATION)


def test_params_validate_upper_bound_is_inclusive():
    assert Params(inflation=new_dec_with_prec(2, 1), mint_denom="stake").validate() is None


def test_params_validate_empty_denom():
    with pytest.raises(SdkError) as info:
        Params(inflation=new_dec_with_prec(4, 2), mint_denom="").validate()
    assert info.value.matches(ERR_INVALID_MINT_DENOM)


def test_params_dict_round_trip():
    params = default_params()
    assert params.to_dict() == {"inflation": "0.040000000000000000", "mint_denom": "stake"}
    assert params_from_dict(params.to_dict()) == params


def test_validate_inflation():
    assert validate_inflation(new_dec_with_prec(5, 2)) is None
    with pytest.raises(TypeError):
        validate_inflation("0.05")
    with pytest.raises(ValueError):
        validate_inflation(new_dec_with_prec(3, 1))


def test_validate_mint_denom():
    assert validate_mint_denom("stake") is None
    with pytest.raises(TypeError):
        validate_mint_denom(5)
    with pytest.raises(ValueError, match="blank"):
        validate_mint_denom("   ")
    with pytest.raises(ValueError):
        validate_mint_denom("1abc")


def test_genesis_defaults_and_validation():
    genesis = default_genesis_state()
    assert genesis == GenesisState()
    assert genesis.minter == default_minter()
    assert validate_genesis(genesis) is None


def test_validate_genesis_rejects_bad_minter():
    genesis = new_genesis_state(new_minter(EPOCH, 0), default_params())
    with pytest.raises(ValueError):
        validate_genesis(genesis)


def test_validate_genesis_rejects_bad_params():
    genesis = new_genesis_state(default_minter(), new_params("stake", new_dec_with_prec(5, 1)))
    with pytest.raises(SdkError):
        validate_genesis(genesis)


def test_genesis_dict_round_trip():
    genesis = new_genesis_state(
        new_minter(datetime(2021, 1, 1, tzinfo=timezone.utc), 42), default_params()
    )
    assert genesis_state_from_dict(genesis.to_dict()) == genesis


@given(st.integers(min_value=0, max_value=20), st.integers(min_value=1, max_value=10**30))
def test_block_provision_never_exceeds_annual(percent, base):
    minter = new_minter(EPOCH, base)
    params = Params(inflation=new_dec_with_prec(percent, 2), mint_denom="stake")
    coin = minter.block_provision(params)
    assert 0 <= coin.amount <= minter.next_annual_provisions(params).truncate_int()
    assert coin.amount * BLOCKS_PER_YEAR <= minter.next_annual_provisions(params).truncate_int()


def test_zero_inflation_mints_nothing():
    coin = default_minter().block_provision(Params(inflation=Dec(0), mint_denom="stake"))
    assert coin.amount == 0