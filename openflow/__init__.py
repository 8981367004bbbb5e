"""OpenFlow 1.3 message framing, table messages and properties, runners and a response recorder."""

__version__ = "0.1.0"

__all__ = ["bitmap", "recorder", "request", "runner", "table", "table_props"]