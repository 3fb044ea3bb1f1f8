"""
Test fixtures package for CivisGrid tests.

Usage:
    from fixtures import sample_vectors, make_trade_message

    def test_something():
        tree = build_merkle_tree(sample_vectors(8))
"""

from .common import (
    sample_vectors,
    make_order_data,
    make_order_message,
    make_trade_data,
    make_trade_message,
    make_subscription_message,
)

__all__ = [
    "sample_vectors",
    "make_order_data",
    "make_order_message",
    "make_trade_data",
    "make_trade_message",
    "make_subscription_message",
]
