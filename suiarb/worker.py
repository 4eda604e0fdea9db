"""Decisions a worker makes around a found arbitrage: what to submit and whether a dry run passed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from .types import Action, ShioSource, Source


class DryRunError(Exception):
    """The final dry run of an arbitrage transaction did not prove it profitable."""


@dataclass(frozen=True)
class BalanceChange:
    """A change in an owner's balance reported by a simulation."""

    owner: str
    amount: int


def action_for_result(tx_data: Any, source: Source, opp_tx_digest: str) -> Action:
    """Submit as an auction bid when the opportunity came from the auction, else publicly."""
    if isinstance(source, ShioSource):
        return Action.shio_submit_bid(tx_data, source.bid_amount, opp_tx_digest)
    return Action.execute_public_tx(tx_data)


def verify_dry_run(success: bool, balance_changes: Iterable[BalanceChange], sender: str) -> BalanceChange:
    """Check that a dry run succeeded and raised the sender's balance; return that change."""
    if not success:
        raise DryRunError(f"Dry run result: {success!r}")
    change = next((bc for bc in balance_changes if bc.owner == sender), None)
    if change is None:
        raise DryRunError("No balance change for attacker")
    if change.amount <= 0:
        raise DryRunError(f"Attacker's balance not increased {change!r}")
    return change


def short_coin_name(coin: str) -> str:
    """The type name of a coin such as ``0x2::sui::SUI``, or the whole string if it has none."""
    parts = coin.split("::")
    return parts[2] if len(parts) > 2 else coin