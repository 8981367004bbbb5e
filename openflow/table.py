"""Flow table configuration, statistics and feature messages."""

from __future__ import annotations

import enum
import io
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

from openflow.table_props import TableProp, read_table_prop

MAX_TABLE_NAME_LEN = 32
TABLE_FEATURES_LEN = 64

_TABLE_MOD = struct.Struct("!B3xI")
_TABLE_STATS = struct.Struct("!B3xIQQ")
_TABLE_FEATURES = struct.Struct(f"!HB5x{MAX_TABLE_NAME_LEN}sQQII")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise EOFError(f"expected {size} bytes, got {size - remaining}")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class Table(int):
    """A switch table number."""

    MAX: ClassVar[Table]
    ALL: ClassVar[Table]

    def __new__(cls, value: int = 0) -> Table:
        if not 0 <= int(value) <= 0xFF:
            raise ValueError(f"table number out of range: {value}")
        return super().__new__(cls, value)

    def __str__(self) -> str:
        return f"Table({int(self)})"

    __repr__ = __str__


# The last usable table number.
Table.MAX = Table(0xFE)
# The wildcard table used for table config, flow stats and flow deletes.
Table.ALL = Table(0xFF)


class TableConfig(enum.IntFlag):
    """Table configuration flags, reserved for future use."""

    DEPRECATED_MASK = 3


@dataclass
class TableMod:
    """A message that configures the behaviour of a flow table."""

    table: int = 0
    config: int = 0

    def to_bytes(self) -> bytes:
        """Serialize the table modification message."""
        return _TABLE_MOD.pack(int(self.table), int(self.config))

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TableMod:
        """Read a table modification message in wire format."""
        table, config = _TABLE_MOD.unpack(_read_exact(stream, _TABLE_MOD.size))
        return cls(table=Table(table), config=config)


@dataclass
class TableStats:
    """Statistics of one table within a switch."""

    table: int = 0
    active_count: int = 0
    lookup_count: int = 0
    matched_count: int = 0

    def to_bytes(self) -> bytes:
        """Serialize the table statistics."""
        return _TABLE_STATS.pack(
            int(self.table),
            self.active_count,
            self.lookup_count,
            self.matched_count,
        )

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TableStats:
        """Read table statistics in wire format."""
        table, active, lookup, matched = _TABLE_STATS.unpack(
            _read_exact(stream, _TABLE_STATS.size)
        )
        return cls(
            table=Table(table),
            active_count=active,
            lookup_count=lookup,
            matched_count=matched,
        )


@dataclass
class TableFeatures:
    """Capabilities of a table, with its list of properties."""

    table: int = 0
    name: str = ""
    metadata_match: int = 0
    metadata_write: int = 0
    config: int = 0
    max_entries: int = 0
    properties: list[TableProp] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        """Serialize the table features; the name is cut to 32 bytes."""
        props = b"".join(prop.to_bytes() for prop in self.properties)
        length = TABLE_FEATURES_LEN + len(props)
        if length > 0xFFFF:
            raise ValueError("ofp: table features message is too long")
        header = _TABLE_FEATURES.pack(
            length,
            int(self.table),
            self.name.encode("utf-8"),
            self.metadata_match,
            self.metadata_write,
            int(self.config),
            self.max_entries,
        )
        return header + props

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TableFeatures:
        """Read table features with all their properties in wire format."""
        (
            length,
            table,
            raw_name,
            metadata_match,
            metadata_write,
            config,
            max_entries,
        ) = _TABLE_FEATURES.unpack(_read_exact(stream, TABLE_FEATURES_LEN))

        if length < TABLE_FEATURES_LEN:
            raise ValueError(f"ofp: table features length {length} is too short")

        content = _read_exact(stream, length - TABLE_FEATURES_LEN)
        props_stream = io.BytesIO(content)
        properties = []
        while props_stream.tell() < len(content):
            properties.append(read_table_prop(props_stream))

        return cls(
            table=Table(table),
            name=raw_name.rstrip(b"\x00").decode("utf-8", errors="replace"),
            metadata_match=metadata_match,
            metadata_write=metadata_write,
            config=config,
            max_entries=max_entries,
            properties=properties,
        )