"""
Common test fixtures shared by all modules.

Provides factory functions for:
- Sample byte items
- Live order/trade feed messages as raw JSON text
"""

import json
from typing import Any


def sample_vectors(count: int) -> list[bytes]:
    """One-byte items [1], [2], ..., [count]."""
    return [bytes([value]) for value in range(1, count + 1)]


def make_order_data(
    order_id: int = 1,
    amount: str = "0.5",
    price: str = "25000.0",
    order_type: int = 0,
    **overrides: Any,
) -> dict[str, Any]:
    """Create the data payload of an order event."""
    data = {
        "id": order_id,
        "id_str": str(order_id),
        "order_type": order_type,
        "datetime": "1700000000",
        "microtimestamp": "1700000000123456",
        "amount": float(amount),
        "amount_str": amount,
        "price": float(price),
        "price_str": price,
    }
    data.update(overrides)
    return data


def make_order_message(
    order_id: int = 1,
    price: str = "25000.0",
    event: str = "order_created",
    channel: str = "live_orders_btceur",
    **overrides: Any,
) -> str:
    """Create an order event envelope as JSON text."""
    return json.dumps({
        "data": make_order_data(order_id=order_id, price=price, **overrides),
        "channel": channel,
        "event": event,
    })


def make_trade_data(
    trade_id: int = 1,
    amount: str = "0.01",
    price: str = "25000.0",
    **overrides: Any,
) -> dict[str, Any]:
    """Create the data payload of a trade event."""
    data = {
        "id": trade_id,
        "timestamp": "1700000001",
        "amount": float(amount),
        "amount_str": amount,
        "price": float(price),
        "price_str": price,
        "type": 1,
        "microtimestamp": "1700000001000001",
        "buy_order_id": 11,
        "sell_order_id": 12,
    }
    data.update(overrides)
    return data


def make_trade_message(
    trade_id: int = 1,
    channel: str = "live_trades_btceur",
    **overrides: Any,
) -> str:
    """Create a trade event envelope as JSON text."""
    return json.dumps({
        "data": make_trade_data(trade_id=trade_id, **overrides),
        "channel": channel,
        "event": "trade",
    })


def make_subscription_message(channel: str = "live_orders_btceur") -> str:
    """Create a subscription acknowledgement."""
    return json.dumps({
        "event": "bts:subscription_succeeded",
        "channel": channel,
        "data": {},
    })
