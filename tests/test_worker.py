import pytest

from suiarb.types import ActionKind, PublicSource, ShioDeadlineMissed, ShioSource
from suiarb.worker import BalanceChange, DryRunError, action_for_result, short_coin_name, verify_dry_run


def test_shio_source_becomes_bid():
    src = ShioSource(opp_tx_digest="opp", bid_amount=7, start=1, arb_found=2, deadline=3)
    action = action_for_result("txdata", src, "opp")
    assert action.kind is ActionKind.SHIO_SUBMIT_BID
    assert action.payload == ("txdata", 7, "opp")


def test_public_source_becomes_public_tx():
    action = action_for_result("txdata", PublicSource(), "opp")
    assert action.kind is ActionKind.EXECUTE_PUBLIC_TX
    assert action.payload == "txdata"


def test_missed_deadline_becomes_public_tx():
    src = ShioDeadlineMissed(start=1, arb_found=5, deadline=3)
    action = action_for_result("txdata", src, "opp")
    assert action.kind is ActionKind.EXECUTE_PUBLIC_TX


def test_verify_returns_sender_change():
    changes = [BalanceChange("other", 100), BalanceChange("me", 5), BalanceChange("me", 9)]
    assert verify_dry_run(True, changes, "me") == BalanceChange("me", 5)


def test_verify_rejects_failed_status():
    with pytest.raises(DryRunError, match="Dry run result"):
        verify_dry_run(False, [BalanceChange("me", 5)], "me")


def test_verify_rejects_missing_change():
    with pytest.raises(DryRunError, match="No balance change"):
        verify_dry_run(True, [BalanceChange("other", 5)], "me")


@pytest.mark.parametrize("amount", [0, -3])
def test_verify_rejects_non_positive_change(amount):
    with pytest.raises(DryRunError, match="not increased"):
        verify_dry_run(True, [BalanceChange("me", amount)], "me")


@pytest.mark.parametrize(
    "coin,expected",
    [("0x2::sui::SUI", "SUI"), ("plain", "plain"), ("a::b", "a::b"), ("a::b::C::D", "C")],
)
def test_short_coin_name(coin, expected):
    assert short_coin_name(coin) == expected