# suiarb

Building blocks for an arbitrage bot on the Sui network, plus a small relay
that rebroadcasts transactions to WebSocket subscribers.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `suiarb.types` — where an opportunity came from: `PublicSource`,
  `ShioSource` and `ShioDeadlineMissed`, each with `is_shio()`,
  `with_bid_amount()` and `with_arb_found_time()`. Calling
  `with_arb_found_time()` on a `ShioSource` with a time at or after its
  deadline gives a `ShioDeadlineMissed`. Also the `Action` values (built with
  `Action.notify`, `Action.execute_public_tx`, `Action.shio_submit_bid`,
  tagged by `ActionKind`) and `Event` values (tagged by `EventKind`).
- `suiarb.arb_cache` — `ArbCache`, one pending opportunity per coin.
  `insert()` adds a coin or replaces its entry with a fresh expiry;
  `get(coin)` returns `(digest, sim_ctx)` or `None`; `pop_one()` removes and
  returns the live `ArbItem` that expires first; `remove_expired()` drops
  timed-out entries and returns their coins. The expiry is given in seconds
  and the clock can be injected.
- `suiarb.strategy` — `ArbDispatcher` records the coins touched by a
  transaction (`on_swaps`) and `dispatch()`es cached items into a queue
  (anything with `qsize()` and `put_nowait()`, such as `queue.Queue` or
  `asyncio.Queue`), topping it up to a limit of 10 by default. Coins handed out
  recently are skipped unless the item comes from the auction feed; `recent()`
  lists them. `CachedEpoch` keeps a fetched epoch until it goes stale.
  `new_shio_source()` builds a `ShioSource` whose deadline is moved 20 ms
  earlier.
- `suiarb.worker` — `action_for_result()` chooses a bid submission for a
  `ShioSource` and public execution otherwise; `verify_dry_run()` checks that
  a dry run succeeded and that the sender's `BalanceChange` is positive,
  raising `DryRunError` otherwise; `short_coin_name()` gives the type name of
  a coin such as `0x2::sui::SUI`.
- `suiarb.pool_ids` — `supported_protocols()`, `global_ids()` (system object
  ids and other global objects, normalised to full width), `parse_path()` for
  a comma-separated list of ids, and `read_ids()` / `write_ids()` for files of
  one id per line.
- `suiarb.cli` — `build_parser()` and `parse_args()` for the `start-bot` and
  `pool-ids` subcommands. Options such as `--rpc-url` or `--private-key` not
  given on the command line fall back to the environment variable
  `SUI_<OPTION>` (for example `SUI_RPC_URL`), then to a default;
  `--private-key` has no default and is required.
- `suiarb.common` — `add()` for unsigned 64-bit integers, raising on negative
  operands or overflow.

## Example

```python
from suiarb.arb_cache import ArbCache
from suiarb.types import PublicSource

cache = ArbCache(5.0)
cache.insert("0x2::sui::SUI", None, "digest", None, PublicSource())
item = cache.pop_one()
print(item.coin)
```

## The relay

```
suiarb-relay --host 0.0.0.0 --port 9001
```

starts a WebSocket server (these are the defaults). Every transaction passed
to `Relay.handle_transaction(tx_bytes, signatures)` is sent to each connected
subscriber as JSON of the form `{"tx_bytes": "...", "signatures": ["..."]}`,
with bytes and signatures Base64-encoded. A subscriber that falls behind only
receives the latest message; with no subscribers the message is dropped.
In-process consumers can use `Relay.subscribe()` as a context manager and
iterate it asynchronously.

## What this package does not do

- There is no bot run loop: nothing here connects to a node, collects
  transactions, searches for trades, simulates them or submits anything. The
  `cli` module only parses the options such a run would take; there is no
  `arb` command.
- The relay command serves WebSocket subscribers only. It has no endpoint
  that accepts transactions from the network; transactions reach it only
  through `Relay.handle_transaction` in the same process.
- `pool_ids` does not discover pools or their related objects; it provides
  the protocol list, the global ids and the id-file reading and writing.