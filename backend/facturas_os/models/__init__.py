"""ORM Models — read-only mappings of the accounting system's invoice tables."""
