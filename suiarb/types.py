"""Core value types: where an arbitrage opportunity came from, engine events and actions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Union


def _saturating_sub(a: int, b: int) -> int:
    return max(0, a - b)


def _check_unsigned(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


@dataclass(frozen=True)
class PublicSource:
    """An opportunity seen in a public, already executed transaction."""

    def is_shio(self) -> bool:
        return False

    def with_bid_amount(self, bid_amount: int) -> "PublicSource":
        """Public opportunities carry no bid; the result equals this source."""
        _check_unsigned("bid_amount", bid_amount)
        return replace(self)

    def with_arb_found_time(self, arb_found: int) -> "PublicSource":
        """Public opportunities have no deadline; the result equals this source."""
        _check_unsigned("arb_found", arb_found)
        return replace(self)

    def __str__(self) -> str:
        return "Public"


@dataclass(frozen=True)
class ShioSource:
    """An opportunity offered by the auction feed, still inside its deadline."""

    opp_tx_digest: str
    bid_amount: int
    start: int
    arb_found: int
    deadline: int

    def is_shio(self) -> bool:
        return True

    def with_bid_amount(self, bid_amount: int) -> "ShioSource":
        return replace(self, bid_amount=bid_amount)

    def with_arb_found_time(self, arb_found: int) -> "ShioSource | ShioDeadlineMissed":
        if arb_found < self.deadline:
            return replace(self, arb_found=arb_found)
        return ShioDeadlineMissed(start=self.start, arb_found=arb_found, deadline=self.deadline)

    def __str__(self) -> str:
        return (
            f"Shio(start={self.start}, deadline={self.deadline}, "
            f"time_window={_saturating_sub(self.deadline, self.start)}ms, "
            f"arb_found={self.arb_found}, "
            f"early={_saturating_sub(self.deadline, self.arb_found)}ms)"
        )


@dataclass(frozen=True)
class ShioDeadlineMissed:
    """An auction opportunity whose arbitrage was found after the deadline."""

    start: int
    arb_found: int
    deadline: int

    def is_shio(self) -> bool:
        return False

    def with_bid_amount(self, bid_amount: int) -> "ShioDeadlineMissed":
        """A missed deadline takes no bid; the result equals this source."""
        _check_unsigned("bid_amount", bid_amount)
        return replace(self)

    def with_arb_found_time(self, arb_found: int) -> "ShioDeadlineMissed":
        """The found time of a missed deadline is fixed; the result equals this source."""
        _check_unsigned("arb_found", arb_found)
        return replace(self)

    def __str__(self) -> str:
        return (
            f"ShioDeadlineMissed(start={self.start}, deadline={self.deadline}, "
            f"time_window={_saturating_sub(self.deadline, self.start)}ms, "
            f"arb_found={self.arb_found}, "
            f"overdue={_saturating_sub(self.arb_found, self.deadline)}ms)"
        )


Source = Union[PublicSource, ShioSource, ShioDeadlineMissed]


class ActionKind(Enum):
    NOTIFY_VIA_TELEGRAM = "notify_via_telegram"
    EXECUTE_PUBLIC_TX = "execute_public_tx"
    SHIO_SUBMIT_BID = "shio_submit_bid"


@dataclass(frozen=True)
class Action:
    """Something the strategy asks an executor to do."""

    kind: ActionKind
    payload: Any

    @classmethod
    def notify(cls, message: Any) -> "Action":
        return cls(ActionKind.NOTIFY_VIA_TELEGRAM, message)

    @classmethod
    def execute_public_tx(cls, tx_data: Any) -> "Action":
        return cls(ActionKind.EXECUTE_PUBLIC_TX, tx_data)

    @classmethod
    def shio_submit_bid(cls, tx_data: Any, bid_amount: int, opp_tx_digest: str) -> "Action":
        return cls(ActionKind.SHIO_SUBMIT_BID, (tx_data, bid_amount, opp_tx_digest))


class EventKind(Enum):
    PUBLIC_TX = "public_tx"
    PRIVATE_TX = "private_tx"
    SHIO = "shio"


@dataclass(frozen=True)
class Event:
    """Something a collector delivers to the strategy.

    For ``PUBLIC_TX`` the payload is ``(effects, events)``; for ``PRIVATE_TX``
    it is transaction data; for ``SHIO`` it is an auction item.
    """

    kind: EventKind
    payload: Any