import json
import random
from datetime import datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from irishub.dec import int_with_decimal, new_dec_with_prec, parse_dec
from irishub.mint.simulation import (
    gen_inflation,
    new_decode_store,
    param_changes,
    randomized_gen_state,
)
from irishub.mint.types import (
    MINTER_KEY,
    default_minter,
    genesis_state_from_dict,
    new_minter,
)


def _encode(minter):
    return json.dumps(minter.to_dict()).encode("utf-8")


def test_decode_store_minter():
    minter = new_minter(datetime.now(timezone.utc), int_with_decimal(2, 9))
    decode = new_decode_store()
    pair = (MINTER_KEY, _encode(minter))
    assert decode(pair, pair) == f"{minter}\n{minter}"


def test_decode_store_other_key_raises():
    decode = new_decode_store()
    pair = (b"\x99", b"\x99")
    with pytest.raises(ValueError, match="99"):
        decode(pair, pair)


@given(st.integers(min_value=0, max_value=2**32))
def test_gen_inflation_range_and_determinism(seed):
    value = gen_inflation(random.Random(seed))
    assert new_dec_with_prec(0, 2) <= value <= new_dec_with_prec(98, 2)
    assert value.raw % 10**16 == 0
    assert gen_inflation(random.Random(seed)) == value


def test_randomized_gen_state_random(capsys):
    gen_state = {}
    genesis = randomized_gen_state(random.Random(3), gen_state, {})
    stored = genesis_state_from_dict(json.loads(gen_state["mint"]))
    assert stored == genesis
    assert stored.minter == default_minter()
    assert stored.params.mint_denom == "stake"
    assert new_dec_with_prec(0, 2) <= stored.params.inflation <= new_dec_with_prec(98, 2)
    assert "Selected randomly generated mint parameters:" in capsys.readouterr().out


def test_randomized_gen_state_uses_app_params():
    gen_state = {}
    genesis = randomized_gen_state(random.Random(1), gen_state, {"inflation": b'"0.05"'})
    assert genesis.params.inflation == new_dec_with_prec(5, 2)
    stored = json.loads(gen_state["mint"])
    assert stored["params"]["inflation"] == "0.050000000000000000"


def test_param_changes():
    changes = param_changes(random.Random(0))
    assert len(changes) == 1
    change = changes[0]
    assert change.compose_key() == "mint/Inflation"
    value = change.simulation_value(random.Random(11))
    assert value.startswith('"') and value.endswith('"')
    assert parse_dec(value.strip('"')) == gen_inflation(random.Random(11))