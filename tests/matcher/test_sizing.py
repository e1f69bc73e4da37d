# tests/matcher/test_sizing.py
import pytest

from twinarb.exceptions import ZeroTradable
from twinarb.market.order import Order
from twinarb.matcher.arbitrage import crosses, plan_twin, quote_as_base, size_sides


BID = Order(buy_token="A", sell_token="B", buy_amount=100, sell_amount=50)
ASK = Order(buy_token="B", sell_token="A", buy_amount=30, sell_amount=80)


def test_crosses_is_strict():
    assert crosses(BID, ASK) is True
    same = Order(buy_token="B", sell_token="A", buy_amount=50, sell_amount=100)
    assert crosses(BID, same) is False


def test_ask_selling_nothing_never_crosses():
    empty = Order(buy_token="B", sell_token="A", buy_amount=30, sell_amount=0)
    assert crosses(BID, empty) is False


def test_size_sides_max_picks_greatest():
    assert size_sides("max", 0, 0, BID, ASK) == (100, 50)
    assert size_sides("max", 10**6, 7, BID, ASK) == (10**6, 50)


def test_size_sides_min_picks_smallest():
    assert size_sides("min", 10**6, 10**6, BID, ASK) == (80, 30)
    assert size_sides("min", 5, 7, BID, ASK) == (5, 7)


def test_quote_as_base_truncates():
    assert quote_as_base(50, ASK) == 133
    assert quote_as_base(1, ASK) == 2


def test_plan_both_zero_raises():
    with pytest.raises(ZeroTradable):
        plan_twin(BID, ASK, 0, 0)


def test_plan_zero_after_truncation_raises():
    cheap = Order(buy_token="B", sell_token="A", buy_amount=1000, sell_amount=1)
    with pytest.raises(ZeroTradable):
        plan_twin(BID, cheap, 0, 5)


def test_plan_base_first_buys_back_at_least_what_it_sold():
    plan = plan_twin(BID, ASK, base_amount=80, quote_amount=7)
    assert plan.first_order is BID and plan.first_selling == 80
    assert plan.second_order is ASK and plan.second_selling == 30
    assert plan.first.token == "A" and plan.first.amount >= 0
    assert plan.second.token == "B"
    assert plan.margin == 10


def test_plan_quote_first_when_not_smaller():
    plan = plan_twin(BID, ASK, base_amount=80, quote_amount=30)
    assert plan.first_order is ASK and plan.first_selling == 30
    assert plan.second_order is BID and plan.second_selling == 60
    assert plan.first.token == "B" and plan.first.amount == 0
    assert plan.margin == 20
