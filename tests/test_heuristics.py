from decimal import InvalidOperation

import pytest

from heuristics import derive_tips
from models import Balance, TipSource
from prompts import TIP_COLD_STORAGE, TIP_CONSOLIDATE, TIP_MIXER


def eth(amount: str) -> Balance:
    return Balance(name="Ethereum", symbol="ETH", amount=amount)


def token(symbol: str, amount: str) -> Balance:
    return Balance(name=symbol, symbol=symbol, amount=amount)


COLD = TIP_COLD_STORAGE.format(symbol="ETH")
CONSOLIDATE = TIP_CONSOLIDATE.format(symbol="ETH")


@pytest.mark.parametrize("amount", ["1.0000001", "2.5", "1000.0"])
def test_cold_storage_above_one(amount: str) -> None:
    tips = derive_tips([eth(amount)])
    assert tips[0].text == COLD
    assert CONSOLIDATE not in [t.text for t in tips]


@pytest.mark.parametrize("amount", ["0.0", "0.5", "1.0"])
def test_consolidate_at_or_below_one(amount: str) -> None:
    tips = derive_tips([eth(amount)])
    assert tips[0].text == CONSOLIDATE
    assert COLD not in [t.text for t in tips]


def test_native_only_gives_two_tips() -> None:
    tips = derive_tips([eth("0.2")])
    assert [t.text for t in tips] == [CONSOLIDATE, TIP_MIXER]
    assert all(t.source is TipSource.HEURISTIC for t in tips)


def test_privacy_token_gets_follow_up_tip() -> None:
    tips = derive_tips([eth("2.5"), token("PRVX", "12.0000")])

    assert [t.text for t in tips] == [
        COLD,
        "🔎 PRVX detected: 12.0000 - avoid reusing this address.",
        "🧬 Use PRVX staking or mixer to enhance your privacy.",
        TIP_MIXER,
    ]


def test_tokens_follow_input_order() -> None:
    tips = derive_tips([eth("0.1"), token("USDT", "5.0000"), token("DAI", "1.0000")])

    assert [t.text for t in tips] == [
        CONSOLIDATE,
        "🔎 USDT detected: 5.0000 - avoid reusing this address.",
        "🔎 DAI detected: 1.0000 - avoid reusing this address.",
        TIP_MIXER,
    ]


def test_zero_token_is_skipped() -> None:
    tips = derive_tips([eth("0.1"), token("DAI", "0.0000")])
    assert len(tips) == 2


def test_deterministic() -> None:
    balances = [eth("3.0"), token("PRVX", "1.0000"), token("USDT", "2.0000")]
    assert derive_tips(balances) == derive_tips(balances)


def test_never_empty_without_native_entry() -> None:
    tips = derive_tips([])
    assert [t.text for t in tips] == [CONSOLIDATE, TIP_MIXER]


def test_unparsable_amount_raises() -> None:
    with pytest.raises(InvalidOperation):
        derive_tips([eth("not-a-number")])
