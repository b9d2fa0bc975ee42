#!/usr/bin/env python3
"""
Example usage of the JSON type codec.

This script encodes a structure holding datetimes, patterns, sets and a
user-defined class into plain JSON, and decodes it back.
"""

import json
import re
from collections import OrderedDict
from datetime import datetime, timezone
from json_typecodec import BigInt, create_mapping, decode, default_registry, encode


class Money:
    """Amount in minor units with a currency code."""

    def __init__(self, cents: int, currency: str):
        self.cents = cents
        self.currency = currency

    def __repr__(self) -> str:
        return f"Money({self.cents}, {self.currency!r})"


def main():
    """Main example function."""
    print("JSON Type Codec Example")
    print("=" * 50)

    registry = default_registry.extend(
        create_mapping(
            Money,
            lambda money: [money.cents, money.currency],
            lambda pair: Money(*pair)
        )
    )

    sample_data = {
        "order": {
            "id": BigInt(9007199254740993),
            "placed_at": datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
            "total": Money(4999, "EUR"),
            "tags": {"gift", "express"},
            "lines": OrderedDict([("sku-1", 2), ("sku-2", 1)]),
        },
        "filters": [re.compile(r"^sku-\d+$", re.IGNORECASE)],
        "note": None,
    }

    encoded = encode(sample_data, registry)
    json_string = json.dumps(encoded, indent=2)
    print(f"Encoded JSON:\n{json_string}\n")

    decoded = decode(json.loads(json_string), registry)
    print(f"Decoded order total: {decoded['order']['total']}")
    print(f"Decoded placed_at: {decoded['order']['placed_at'].isoformat()}")
    print(f"Pattern still matches: {bool(decoded['filters'][0].match('SKU-7'))}")


if __name__ == "__main__":
    main()
