"""PostgreSQL value types: arrays, hstore, JSON, bytes, decimals, timestamps and geometry."""

__version__ = "0.1.0"