"""twinarb - crossed-order arbitrage for on-chain order books."""

__version__ = "0.1.0"
