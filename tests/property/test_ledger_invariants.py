"""
Property-based тесты инвариантов ledger (hypothesis)

Coverage:
- Случайные последовательности операций: сумма балансов == total_supply,
  цена и объём не убывают, отказ не оставляет следов
- Округление при фиксированной цене в пользу пула
- buy выпускает ровно котируемое количество
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from bondledger import BondingCurveExchange, CurveConfig, InMemoryHost
from bondledger.core.errors import LedgerError
from bondledger.core.math.bonding_curve import price_at_volume, reserve_for_units, units_for_reserve

ACTORS = ["0x" + f"{i:02x}" * 20 for i in range(1, 5)]

actor = st.sampled_from(range(len(ACTORS)))
amount = st.integers(min_value=0, max_value=5 * 10**21)

operation = st.one_of(
    st.tuples(st.just("buy"), actor, st.integers(min_value=0, max_value=10**19)),
    st.tuples(st.just("sell_all"), actor, st.just(0)),
    st.tuples(st.just("transfer"), actor, actor, amount),
    st.tuples(st.just("approve"), actor, actor, amount),
    st.tuples(st.just("transfer_from"), actor, actor, actor, amount),
    st.tuples(st.just("seed_mint"), actor, st.just(0)),
    st.tuples(st.just("receive"), actor, st.integers(min_value=0, max_value=10**18)),
)


def _apply(exchange: BondingCurveExchange, op: tuple) -> None:
    name = op[0]
    if name == "buy":
        exchange.buy(ACTORS[op[1]], op[2])
    elif name == "sell_all":
        exchange.sell_all(ACTORS[op[1]])
    elif name == "transfer":
        exchange.transfer(ACTORS[op[1]], ACTORS[op[2]], op[3])
    elif name == "approve":
        exchange.approve(ACTORS[op[1]], ACTORS[op[2]], op[3])
    elif name == "transfer_from":
        exchange.transfer_from(ACTORS[op[1]], ACTORS[op[2]], ACTORS[op[3]], op[4])
    elif name == "seed_mint":
        exchange.seed_mint(ACTORS[op[1]])
    elif name == "receive":
        exchange.receive(ACTORS[op[1]], op[2])


@settings(max_examples=80, deadline=None)
@given(ops=st.lists(operation, max_size=40))
def test_supply_matches_balances_and_price_never_drops(ops: list) -> None:
    host = InMemoryHost()
    exchange = BondingCurveExchange(host, CurveConfig(test_mode=True))
    last_price = exchange.current_price_per_token()
    last_volume = exchange.cumulative_volume()

    for op in ops:
        before = exchange.snapshot()
        published = len(host.notifications)
        try:
            _apply(exchange, op)
        except LedgerError:
            # Отказ не оставляет следов
            assert exchange.snapshot() == before
            assert len(host.notifications) == published

        snap = exchange.snapshot()
        assert snap.is_balanced()
        assert sum(exchange.balance_of(a) for a in ACTORS) == exchange.total_supply()
        assert snap.cumulative_volume >= last_volume
        assert snap.current_price >= last_price
        last_volume = snap.cumulative_volume
        last_price = snap.current_price


@settings(max_examples=100, deadline=None)
@given(
    volume=st.integers(min_value=0, max_value=10**27),
    reserve=st.integers(min_value=1, max_value=10**24),
)
def test_round_trip_at_fixed_price_never_gains(volume: int, reserve: int) -> None:
    price = price_at_volume(volume)
    units = units_for_reserve(reserve, price)

    assert units == reserve * 10**18 // price
    assert reserve_for_units(units, price) <= reserve


@settings(max_examples=60, deadline=None)
@given(value=st.integers(min_value=1, max_value=10**20))
def test_buy_mints_quoted_units(value: int) -> None:
    exchange = BondingCurveExchange(InMemoryHost())
    exchange.buy(ACTORS[0], 10**15)

    quoted = exchange.quote_tokens_for_wei(value)
    assert quoted == exchange.quote_tokens_for_wei(value)

    minted = exchange.buy(ACTORS[1], value)

    assert minted == quoted
    assert exchange.balance_of(ACTORS[1]) == quoted
