"""Sui arbitrage bot components: opportunity cache, dispatch, dry-run checks, options and a websocket relay."""

__version__ = "0.1.0"