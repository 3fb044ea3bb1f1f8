"""
Module 00 - Market Feed Record Tests
Tests for core/schemas/feed.py

Covers decoding of live order/trade envelopes and turning records into
Merkle tree items.
"""
import json

import pytest

from core.merkle import build_merkle_tree, verify
from core.schemas import (
    ErrorCodes,
    FeedEventType,
    FeedMessageException,
    Order,
    Trade,
    canonical_item,
    parse_feed_message,
    read_feed_records,
    records_to_items,
)
from fixtures.common import (
    make_order_data,
    make_order_message,
    make_subscription_message,
    make_trade_data,
    make_trade_message,
)


class TestParseFeedMessage:
    """Tests for parse_feed_message()."""

    def test_order_created(self):
        event = parse_feed_message(make_order_message(order_id=42, price="25000.5"))

        assert event.event is FeedEventType.ORDER_CREATED
        assert event.channel == "live_orders_btceur"
        assert isinstance(event.record, Order)
        assert event.record.id == 42
        assert event.record.price_str == "25000.5"
        assert event.record.price == 25000.5

    @pytest.mark.parametrize("name", ["order_changed", "order_deleted"])
    def test_other_order_events(self, name):
        event = parse_feed_message(make_order_message(event=name))
        assert isinstance(event.record, Order)

    def test_trade(self):
        event = parse_feed_message(make_trade_message(trade_id=7))

        assert event.event is FeedEventType.TRADE
        assert isinstance(event.record, Trade)
        assert event.record.buy_order_id == 11
        assert event.record.sell_order_id == 12

    def test_subscription_ack_has_no_record(self):
        event = parse_feed_message(make_subscription_message())

        assert event.event is FeedEventType.SUBSCRIPTION_SUCCEEDED
        assert not event.has_record

    def test_bytes_input(self):
        event = parse_feed_message(make_trade_message().encode("utf-8"))
        assert event.has_record

    def test_unknown_fields_ignored(self):
        event = parse_feed_message(make_order_message(id_str="1", extra_field=True))
        assert not hasattr(event.record, "extra_field")

    def test_records_are_frozen(self):
        record = parse_feed_message(make_trade_message()).record
        with pytest.raises(Exception):
            record.price = 1.0


class TestParseFeedMessageErrors:
    """Invalid messages raise FeedMessageException."""

    def test_invalid_json(self):
        with pytest.raises(FeedMessageException, match="not valid JSON") as exc_info:
            parse_feed_message("{not json")
        assert exc_info.value.code == ErrorCodes.FEED_MESSAGE_INVALID

    def test_not_an_object(self):
        with pytest.raises(FeedMessageException, match="JSON object"):
            parse_feed_message("[1, 2]")

    def test_unknown_event(self):
        message = json.dumps({"event": "heartbeat", "channel": "c", "data": {}})
        with pytest.raises(FeedMessageException) as exc_info:
            parse_feed_message(message)
        assert exc_info.value.details["event"] == "heartbeat"
        assert exc_info.value.details["channel"] == "c"

    def test_non_string_channel(self):
        message = json.dumps({"event": "bts:subscription_succeeded", "channel": 5})
        with pytest.raises(FeedMessageException) as exc_info:
            parse_feed_message(message)
        assert exc_info.value.code == ErrorCodes.FEED_MESSAGE_INVALID
        assert exc_info.value.details["channel_type"] == "int"

    def test_missing_record_field(self):
        data = make_order_data()
        del data["price_str"]
        message = json.dumps({"event": "order_created", "channel": "c", "data": data})

        with pytest.raises(FeedMessageException) as exc_info:
            parse_feed_message(message)
        assert exc_info.value.details["errors"]

    def test_bad_order_type(self):
        with pytest.raises(FeedMessageException):
            parse_feed_message(make_order_message(order_type=5))

    def test_trade_without_data(self):
        with pytest.raises(FeedMessageException):
            parse_feed_message(json.dumps({"event": "trade", "channel": "c"}))


class TestRecordsToItems:
    """Tests for read_feed_records() and records_to_items()."""

    def test_read_skips_blank_and_acks(self, feed_lines):
        records = read_feed_records(feed_lines)

        assert [type(r) for r in records] == [Order, Order, Trade]
        assert [r.id for r in records] == [1, 2, 7]

    def test_read_propagates_errors(self):
        with pytest.raises(FeedMessageException):
            read_feed_records([make_trade_message(), "garbage"])

    def test_items_are_canonical(self, feed_lines):
        records = read_feed_records(feed_lines)
        items = records_to_items(records)

        assert items == [canonical_item(r) for r in records]
        assert items[0] == records_to_items(read_feed_records(feed_lines))[0]

    def test_same_record_same_item_regardless_of_key_order(self):
        data = dict(reversed(list(make_trade_data().items())))
        forward = parse_feed_message(make_trade_message()).record
        backward = parse_feed_message(
            json.dumps({"event": "trade", "channel": "live_trades_btceur", "data": data})
        ).record
        assert canonical_item(forward) == canonical_item(backward)

    def test_records_in_tree(self, feed_lines):
        records = read_feed_records(feed_lines)
        tree = build_merkle_tree(records_to_items(records))
        trade_item = canonical_item(records[2])

        assert verify(trade_item, tree.make_proof(trade_item), tree.root_label())

