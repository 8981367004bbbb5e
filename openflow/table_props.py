"""Table feature properties carried in table features messages."""

from __future__ import annotations

import enum
import io
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

TABLE_PROP_HEADER_LEN = 4
XM_HEADER_LEN = 4
ACTION_HEADER_LEN = 4
INSTRUCTION_HEADER_LEN = 4

_PROP_HEADER = struct.Struct("!HH")
_XM_HEADER = struct.Struct("!HBB")
_ID_HEADER = struct.Struct("!HH")
_EXPERIMENTER = struct.Struct("!II")


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


def _pad_len(length: int) -> int:
    """Number of zero bytes that align ``length`` to eight bytes."""
    return (length + 7) // 8 * 8 - length


class TablePropType(enum.IntEnum):
    """Table property types; an odd value marks a table-miss property."""

    INSTRUCTIONS = 0
    INSTRUCTIONS_MISS = 1
    NEXT_TABLES = 2
    NEXT_TABLES_MISS = 3
    WRITE_ACTIONS = 4
    WRITE_ACTIONS_MISS = 5
    APPLY_ACTIONS = 6
    APPLY_ACTIONS_MISS = 7
    MATCH = 8
    WILDCARDS = 10
    WRITE_SET_FIELD = 12
    WRITE_SET_FIELD_MISS = 13
    APPLY_SET_FIELD = 14
    APPLY_SET_FIELD_MISS = 15
    EXPERIMENTER = 0xFFFE
    EXPERIMENTER_MISS = 0xFFFF

    def __str__(self) -> str:
        words = (part.capitalize() for part in self.name.split("_"))
        return "TablePropType" + "".join(words)


def _type_text(value: int) -> str:
    try:
        return str(TablePropType(value))
    except ValueError:
        return f"TablePropType({value})"


@dataclass
class XM:
    """An OpenFlow extensible match field."""

    xm_class: int = 0
    type: int = 0
    value: bytes = b""
    mask: bytes = b""

    def _header(self) -> bytes:
        flags = (self.type << 1) | (1 if self.mask else 0)
        return _XM_HEADER.pack(
            self.xm_class, flags & 0xFF, len(self.value) + len(self.mask)
        )

    def to_bytes(self) -> bytes:
        """Serialize the field header followed by its value and mask."""
        return self._header() + bytes(self.value) + bytes(self.mask)

    @classmethod
    def _read_header(cls, stream: BinaryIO) -> tuple[XM, bool, int]:
        xm_class, flags, length = _XM_HEADER.unpack(
            _read_exact(stream, XM_HEADER_LEN)
        )
        return cls(xm_class=xm_class, type=flags >> 1), bool(flags & 1), length

    @classmethod
    def read_from(cls, stream: BinaryIO) -> XM:
        """Read a field with its value and optional mask."""
        xm, has_mask, length = cls._read_header(stream)
        payload = _read_exact(stream, length)
        if has_mask:
            half = length // 2
            xm.value, xm.mask = payload[:half], payload[half:]
        else:
            xm.value = payload
        return xm


def _read_ids(content: bytes) -> list[int]:
    """Decode a sequence of type/length identifiers, returning the types."""
    stream = io.BytesIO(content)
    types = []
    while stream.tell() < len(content):
        id_type, id_len = _ID_HEADER.unpack(_read_exact(stream, _ID_HEADER.size))
        if id_len > _ID_HEADER.size:
            _read_exact(stream, id_len - _ID_HEADER.size)
        types.append(id_type)
    return types


def _read_xm_headers(content: bytes) -> list[XM]:
    stream = io.BytesIO(content)
    fields = []
    while stream.tell() < len(content):
        xm, _, _ = XM._read_header(stream)
        fields.append(xm)
    return fields


def _read_prop_header(stream: BinaryIO) -> tuple[int, int]:
    prop_type, length = _PROP_HEADER.unpack(
        _read_exact(stream, TABLE_PROP_HEADER_LEN)
    )
    if length < TABLE_PROP_HEADER_LEN:
        raise ValueError(f"ofp: table property length {length} is too short")
    return prop_type, length


class TableProp:
    """Common behaviour of all table properties."""

    regular_type: ClassVar[TablePropType]
    miss_type: ClassVar[TablePropType]

    @property
    def type(self) -> TablePropType:
        """The wire type of the property, honouring the miss flag."""
        return self.miss_type if getattr(self, "miss", False) else self.regular_type

    def _payload(self) -> bytes:
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        """Serialize the property with its header and eight-byte alignment."""
        payload = self._payload()
        length = TABLE_PROP_HEADER_LEN + len(payload)
        if length > 0xFFFF:
            raise ValueError("ofp: table property is too long")
        return (
            _PROP_HEADER.pack(int(self.type), length)
            + payload
            + bytes(_pad_len(length))
        )

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> TableProp:
        raise NotImplementedError

    @classmethod
    def _from_body(cls, prop_type: int, length: int, stream: BinaryIO) -> TableProp:
        content = _read_exact(stream, length - TABLE_PROP_HEADER_LEN)
        _read_exact(stream, _pad_len(length))
        return cls._from_content(prop_type, content)

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TableProp:
        """Read one property of this kind in wire format."""
        prop_type, length = _read_prop_header(stream)
        return cls._from_body(prop_type, length, stream)


def _is_miss(prop_type: int) -> bool:
    return prop_type & 1 == 1


@dataclass
class TablePropInstructions(TableProp):
    """Instruction types supported by a table."""

    miss: bool = False
    instructions: list[int] = field(default_factory=list)

    regular_type: ClassVar = TablePropType.INSTRUCTIONS
    miss_type: ClassVar = TablePropType.INSTRUCTIONS_MISS

    def _payload(self) -> bytes:
        return b"".join(
            _ID_HEADER.pack(it, INSTRUCTION_HEADER_LEN) for it in self.instructions
        )

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> TablePropInstructions:
        return cls(miss=_is_miss(prop_type), instructions=_read_ids(content))

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropInstructions:
        return super().read_from(stream)


@dataclass
class TablePropNextTables(TableProp):
    """Tables reachable from this one by a goto-table instruction."""

    miss: bool = False
    next_tables: list[int] = field(default_factory=list)

    regular_type: ClassVar = TablePropType.NEXT_TABLES
    miss_type: ClassVar = TablePropType.NEXT_TABLES_MISS

    def _payload(self) -> bytes:
        return bytes(self.next_tables)

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> TablePropNextTables:
        return cls(miss=_is_miss(prop_type), next_tables=list(content))

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropNextTables:
        return super().read_from(stream)


@dataclass
class _ActionsProp(TableProp):
    miss: bool = False
    actions: list[int] = field(default_factory=list)

    def _payload(self) -> bytes:
        return b"".join(
            _ID_HEADER.pack(action, ACTION_HEADER_LEN) for action in self.actions
        )

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> _ActionsProp:
        return cls(miss=_is_miss(prop_type), actions=_read_ids(content))


@dataclass
class TablePropWriteActions(_ActionsProp):
    """Action types usable in write-actions instructions."""

    regular_type: ClassVar = TablePropType.WRITE_ACTIONS
    miss_type: ClassVar = TablePropType.WRITE_ACTIONS_MISS

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropWriteActions:
        return super().read_from(stream)


@dataclass
class TablePropApplyActions(_ActionsProp):
    """Action types usable in apply-actions instructions."""

    regular_type: ClassVar = TablePropType.APPLY_ACTIONS
    miss_type: ClassVar = TablePropType.APPLY_ACTIONS_MISS

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropApplyActions:
        return super().read_from(stream)


class _FieldsProp(TableProp):
    fields: list[XM]

    def _payload(self) -> bytes:
        return b"".join(xm._header() for xm in self.fields)


@dataclass
class TablePropMatch(_FieldsProp):
    """Fields a table can match on."""

    fields: list[XM] = field(default_factory=list)

    regular_type: ClassVar = TablePropType.MATCH
    miss_type: ClassVar = TablePropType.MATCH

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> TablePropMatch:
        return cls(fields=_read_xm_headers(content))

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropMatch:
        return super().read_from(stream)


@dataclass
class TablePropWildcards(_FieldsProp):
    """Fields a table can wildcard."""

    fields: list[XM] = field(default_factory=list)

    regular_type: ClassVar = TablePropType.WILDCARDS
    miss_type: ClassVar = TablePropType.WILDCARDS

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> TablePropWildcards:
        return cls(fields=_read_xm_headers(content))

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropWildcards:
        return super().read_from(stream)


@dataclass
class TablePropWriteSetField(_FieldsProp):
    """Fields settable by write-actions set-field actions."""

    miss: bool = False
    fields: list[XM] = field(default_factory=list)

    regular_type: ClassVar = TablePropType.WRITE_SET_FIELD
    miss_type: ClassVar = TablePropType.WRITE_SET_FIELD_MISS

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> TablePropWriteSetField:
        return cls(miss=_is_miss(prop_type), fields=_read_xm_headers(content))

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropWriteSetField:
        return super().read_from(stream)


@dataclass
class TablePropApplySetField(_FieldsProp):
    """Fields settable by apply-actions set-field actions."""

    miss: bool = False
    fields: list[XM] = field(default_factory=list)

    regular_type: ClassVar = TablePropType.APPLY_SET_FIELD
    miss_type: ClassVar = TablePropType.APPLY_SET_FIELD_MISS

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> TablePropApplySetField:
        return cls(miss=_is_miss(prop_type), fields=_read_xm_headers(content))

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropApplySetField:
        return super().read_from(stream)


@dataclass
class TablePropExperimenter(TableProp):
    """An experimenter-defined table property."""

    miss: bool = False
    experimenter: int = 0
    exp_type: int = 0
    data: bytes = b""

    regular_type: ClassVar = TablePropType.EXPERIMENTER
    miss_type: ClassVar = TablePropType.EXPERIMENTER_MISS

    def _payload(self) -> bytes:
        return _EXPERIMENTER.pack(self.experimenter, self.exp_type) + bytes(self.data)

    @classmethod
    def _from_content(cls, prop_type: int, content: bytes) -> TablePropExperimenter:
        if len(content) < _EXPERIMENTER.size:
            raise ValueError("ofp: experimenter table property is too short")
        experimenter, exp_type = _EXPERIMENTER.unpack_from(content)
        return cls(
            miss=_is_miss(prop_type),
            experimenter=experimenter,
            exp_type=exp_type,
            data=content[_EXPERIMENTER.size:],
        )

    def to_bytes(self) -> bytes:
        return super().to_bytes()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> TablePropExperimenter:
        return super().read_from(stream)


_PROP_CLASSES: dict[int, type[TableProp]] = {
    TablePropType.INSTRUCTIONS: TablePropInstructions,
    TablePropType.INSTRUCTIONS_MISS: TablePropInstructions,
    TablePropType.NEXT_TABLES: TablePropNextTables,
    TablePropType.NEXT_TABLES_MISS: TablePropNextTables,
    TablePropType.WRITE_ACTIONS: TablePropWriteActions,
    TablePropType.WRITE_ACTIONS_MISS: TablePropWriteActions,
    TablePropType.APPLY_ACTIONS: TablePropApplyActions,
    TablePropType.APPLY_ACTIONS_MISS: TablePropApplyActions,
    TablePropType.MATCH: TablePropMatch,
    TablePropType.WILDCARDS: TablePropWildcards,
    TablePropType.WRITE_SET_FIELD: TablePropWriteSetField,
    TablePropType.WRITE_SET_FIELD_MISS: TablePropWriteSetField,
    TablePropType.APPLY_SET_FIELD: TablePropApplySetField,
    TablePropType.APPLY_SET_FIELD_MISS: TablePropApplySetField,
    TablePropType.EXPERIMENTER: TablePropExperimenter,
    TablePropType.EXPERIMENTER_MISS: TablePropExperimenter,
}


def read_table_prop(stream: BinaryIO) -> TableProp:
    """Read one table property of any known type from a stream."""
    prop_type, length = _read_prop_header(stream)
    prop_class = _PROP_CLASSES.get(prop_type)
    if prop_class is None:
        raise ValueError(
            f"ofp: unknown table property type: {_type_text(prop_type)}"
        )
    return prop_class._from_body(prop_type, length, stream)