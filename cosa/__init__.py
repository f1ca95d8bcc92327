"""Auction ledger: data types, a keeper, message handlers and module wiring with block-driven expiry."""

__version__ = "0.1.0"
__all__ = ["types", "keeper", "msg_server", "module"]