"""Relays submitted transactions to websocket subscribers as JSON messages."""

from __future__ import annotations

import argparse
import asyncio
import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Set

import websockets

logger = logging.getLogger(__name__)

DEFAULT_WS_HOST = "0.0.0.0"
DEFAULT_WS_PORT = 9001


@dataclass(frozen=True)
class TxMessage:
    """A transaction as sent to subscribers: base64 transaction bytes and signatures."""

    tx_bytes: str = ""
    signatures: List[str] = field(default_factory=list)

    @classmethod
    def from_parts(cls, tx_bytes: bytes, signatures: Iterable[bytes]) -> "TxMessage":
        """Build a message from raw transaction bytes and raw signatures."""
        return cls(
            tx_bytes=base64.b64encode(tx_bytes).decode("ascii"),
            signatures=[base64.b64encode(sig).decode("ascii") for sig in signatures],
        )

    def to_json(self) -> str:
        return json.dumps({"tx_bytes": self.tx_bytes, "signatures": list(self.signatures)})


class _Subscription:
    """Yields the latest message each time a new one is published; older unread ones are dropped."""

    def __init__(self, owner: "Relay"):
        self._owner = owner
        self._slot: "asyncio.Queue[TxMessage]" = asyncio.Queue(maxsize=1)

    def _offer(self, message: TxMessage) -> None:
        if self._slot.full():
            self._slot.get_nowait()
        self._slot.put_nowait(message)

    def __aiter__(self) -> "_Subscription":
        return self

    async def __anext__(self) -> TxMessage:
        return await self._slot.get()

    def close(self) -> None:
        self._owner._subscribers.discard(self)

    def __enter__(self) -> "_Subscription":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class Relay:
    """Accepts transactions and broadcasts each one to every current subscriber."""

    def __init__(self) -> None:
        self._subscribers: Set[_Subscription] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def handle_transaction(self, tx_bytes: bytes, signatures: Iterable[bytes]) -> TxMessage:
        """Encode a received transaction, publish it, and return the published message."""
        message = TxMessage.from_parts(tx_bytes, signatures)
        if not self._subscribers:
            logger.debug("No subscriber")
        for subscription in list(self._subscribers):
            subscription._offer(message)
        return message

    def subscribe(self) -> _Subscription:
        """Register a subscriber that receives messages published from now on."""
        subscription = _Subscription(self)
        self._subscribers.add(subscription)
        return subscription

    async def _handle_connection(self, websocket: Any) -> None:
        with self.subscribe() as subscription:
            try:
                async for message in subscription:
                    payload = message.to_json()
                    logger.info("Relay send %s", payload)
                    await websocket.send(payload)
            except websockets.exceptions.ConnectionClosed:
                logger.debug("websocket subscriber disconnected")

    async def serve_websocket(self, host: str = DEFAULT_WS_HOST, port: int = DEFAULT_WS_PORT) -> None:
        """Serve subscribers over websocket until cancelled."""
        logger.info("WebSocket Server running on %s:%d", host, port)
        async with websockets.serve(self._handle_connection, host, port):
            await asyncio.Future()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="relay", description="Broadcast transactions to websocket subscribers.")
    parser.add_argument("--host", default=DEFAULT_WS_HOST, help="websocket listen address")
    parser.add_argument("--port", type=int, default=DEFAULT_WS_PORT, help="websocket listen port")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG)
    relay = Relay()
    try:
        asyncio.run(relay.serve_websocket(args.host, args.port))
    except KeyboardInterrupt:
        pass
    return 0