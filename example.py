"""Example usage of the treediff comparison engine."""

import json
from treediff import ConfigBuilder, DiffEngine, parse_json, parse_yaml

# Invoice as returned by the legacy service
old_document = parse_json("""
{
    "id": "INV-001",
    "total": 100.0,
    "status": "PAID",
    "customer": {"name": "ACME", "vat": "DE123"},
    "tags": ["priority", "export", "q1"],
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5},
        {"sku": "GADGET-002", "quantity": 2}
    ]
}
""")

# Same invoice as exported by the new service, in YAML
new_document = parse_yaml("""
id: INV-001
total: "100.0"
status: paid
customer:
  name: ACME
tags: [q1, priority, audit]
lineItems:
  - sku: WIDGET-001
    quantity: 5
  - sku: GADGET-002
    quantity: 3
    discount: 0.1
""")


def main():
    print("=" * 60)
    print("treediff - Example")
    print("=" * 60)

    context = (
        ConfigBuilder()
        .file_a("legacy.json")
        .file_b("new.yaml")
        .check_all()
        .build()
    )

    engine = DiffEngine()
    result = engine.compare(old_document, new_document, context)
    result.print_summary(context)

    print("\n" + "-" * 60)
    print("Full JSON Report:")
    print(json.dumps(result.to_dict(), indent=2))


def example_same_order():
    """Compare line items index by index instead of as a multiset."""
    print("\n" + "=" * 60)
    print("Example with Ordered Arrays")
    print("=" * 60)

    context = (
        ConfigBuilder()
        .file_a("legacy.json")
        .file_b("new.yaml")
        .array_same_order(True)
        .check_for_key_diffs(True)
        .check_for_value_diffs(True)
        .build()
    )

    result = DiffEngine().compare(old_document, new_document, context)
    result.print_summary(context)


if __name__ == "__main__":
    main()
    example_same_order()
