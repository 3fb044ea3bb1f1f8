"""
Module 00 - Market Feed Records
File: feed.py

Purpose: Order and trade records as published on a Bitstamp-style live
market-data channel, and decoding of the JSON envelope they arrive in:

    {"event": "trade", "channel": "live_trades_btceur", "data": {...}}

Decoded records are turned into Merkle tree items through canonical
serialization, so the same record always lands on the same leaf label.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Iterable, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .canonical import canonical_item
from .errors import FeedMessageException


class FeedEventType(str, Enum):
    """Events a live order/trade channel can emit."""

    SUBSCRIPTION_SUCCEEDED = "bts:subscription_succeeded"
    UNSUBSCRIPTION_SUCCEEDED = "bts:unsubscription_succeeded"
    ORDER_CREATED = "order_created"
    ORDER_CHANGED = "order_changed"
    ORDER_DELETED = "order_deleted"
    TRADE = "trade"


ORDER_EVENTS = frozenset({
    FeedEventType.ORDER_CREATED,
    FeedEventType.ORDER_CHANGED,
    FeedEventType.ORDER_DELETED,
})


class Order(BaseModel):
    """A limit order from the live orders channel."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int = Field(..., ge=0, description="Order identifier")
    amount: float = Field(..., description="Order amount")
    amount_str: str = Field(..., description="Order amount as published")
    price: float = Field(..., description="Limit price")
    price_str: str = Field(..., description="Limit price as published")
    order_type: int = Field(..., ge=0, le=1, description="0 = buy, 1 = sell")
    datetime: str = Field(..., description="Order timestamp (unix seconds)")
    microtimestamp: str = Field(..., description="Order timestamp (unix microseconds)")


class Trade(BaseModel):
    """An executed trade from the live trades channel."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int = Field(..., ge=0, description="Trade identifier")
    amount: float = Field(..., description="Traded amount")
    amount_str: str = Field(..., description="Traded amount as published")
    price: float = Field(..., description="Execution price")
    price_str: str = Field(..., description="Execution price as published")
    buy_order_id: int = Field(..., ge=0)
    sell_order_id: int = Field(..., ge=0)
    type: int = Field(..., ge=0, le=1, description="0 = buy, 1 = sell")
    timestamp: str = Field(..., description="Trade timestamp (unix seconds)")
    microtimestamp: str = Field(..., description="Trade timestamp (unix microseconds)")


FeedRecord = Union[Order, Trade]


class FeedEvent(BaseModel):
    """One decoded feed envelope."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    event: FeedEventType
    channel: str | None = None
    record: Order | Trade | None = None

    @property
    def has_record(self) -> bool:
        return self.record is not None


def parse_feed_message(text: str | bytes) -> FeedEvent:
    """
    Decode one feed envelope.

    Args:
        text: Raw JSON text of the message

    Returns:
        FeedEvent; order events carry an Order, trade events a Trade and
        subscription acknowledgements carry no record

    Raises:
        FeedMessageException: On invalid JSON, an unknown event or a record
            payload that does not match its schema
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise FeedMessageException(f"Feed message is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise FeedMessageException(
            "Feed message must be a JSON object",
            details={"type": type(payload).__name__},
        )

    raw_event = payload.get("event")
    channel = payload.get("channel")
    if channel is not None and not isinstance(channel, str):
        raise FeedMessageException(
            "Feed message channel must be a string",
            event=str(raw_event) if raw_event is not None else None,
            details={"channel_type": type(channel).__name__},
        )
    try:
        event = FeedEventType(raw_event)
    except ValueError as e:
        raise FeedMessageException(
            f"Unknown event {raw_event!r} on channel {channel!r}",
            event=str(raw_event) if raw_event is not None else None,
            channel=channel,
        ) from e

    record: FeedRecord | None = None
    try:
        if event in ORDER_EVENTS:
            record = Order.model_validate(payload.get("data"))
        elif event is FeedEventType.TRADE:
            record = Trade.model_validate(payload.get("data"))
    except ValidationError as e:
        raise FeedMessageException(
            f"Invalid {event.value} payload: {e.error_count()} validation error(s)",
            event=event.value,
            channel=channel,
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    return FeedEvent(event=event, channel=channel, record=record)


def records_to_items(records: Iterable[FeedRecord]) -> list[bytes]:
    """Canonically serialize records into Merkle tree items, preserving order."""
    return [canonical_item(record) for record in records]


def read_feed_records(lines: Iterable[str]) -> list[FeedRecord]:
    """
    Decode a JSON-lines stream of feed envelopes into records.

    Blank lines and record-less events (subscription acknowledgements)
    are skipped; record order follows line order.
    """
    records: list[FeedRecord] = []
    for line in lines:
        if not line.strip():
            continue
        event = parse_feed_message(line)
        if event.record is not None:
            records.append(event.record)
    return records
