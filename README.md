# openflow

A small toolkit for encoding and decoding OpenFlow 1.3 messages, with
no runtime dependencies.

## Modules

- `openflow.request`
  - `Header`: the eight-byte message header (`version`, `type`, `length`,
    `transaction`) with `to_bytes()`, `Header.read_from(stream)` and
    `copy()`.
  - `Request`: a message with a header and a readable `body` stream.
    `to_bytes()` and `write_to(stream)` serialize it and set
    `header.length` from the body; `Request.read_from(stream)` reads one
    message and fills `proto`, `proto_major`, `proto_minor` and
    `content_length`. `proto_at_least(major, minor)` compares versions.
  - `new_request(msg_type, body)`: builds an `OFP/1.3` request (header
    version 4). The body may be `None`, bytes, or any object with a
    `to_bytes()` method; it is serialized on the first read.
  - `BodyTooLongError` is raised when a body does not fit in the 16-bit
    length field; `CorruptedHeaderError` when a header announces a length
    below eight bytes. Both are `ValueError`s. A stream that ends early
    raises `EOFError`.
- `openflow.runner`: ways to run a function.
  `SequentialRunner` calls it in the caller's thread, `OnDemandRunner`
  starts a daemon thread per call, and `MultiRoutineRunner(num)` runs
  calls on a fixed pool of `num` worker threads (a non-positive `num`
  raises `ValueError`). `MultiRoutineRunner.close()` lets queued work
  finish and stops the workers; it is also a context manager.
- `openflow.table`: `Table` (a table number, with `Table.MAX` and
  `Table.ALL`), `TableConfig`, and the messages `TableMod`, `TableStats`
  and `TableFeatures`, each with `to_bytes()` and `read_from(stream)`.
  `TableFeatures` carries a list of table properties and cuts its name to
  32 bytes on the wire.
- `openflow.table_props`: `TablePropType`, the extensible match field
  `XM`, and the table properties `TablePropInstructions`,
  `TablePropNextTables`, `TablePropWriteActions`, `TablePropApplyActions`,
  `TablePropMatch`, `TablePropWildcards`, `TablePropWriteSetField`,
  `TablePropApplySetField` and `TablePropExperimenter`. Properties with a
  `miss` flag use the table-miss type when it is set. Every property pads
  itself to eight bytes. `read_table_prop(stream)` reads a property of any
  known type and raises `ValueError` for an unknown one.
- `openflow.bitmap`: `bitmap64`, `bitmap128`, and `packet_in_reason_bitmap`,
  `port_reason_bitmap`, `flow_reason_bitmap`, `group_bitmap` and
  `action_bitmap`, which set bit `n` for each value `n` given and return a
  32-bit integer.
- `openflow.recorder`: `ResponseRecorder`, a response writer whose
  `write(header, body)` keeps each message as a `Request`. `first()` and
  `last()` return the first and last one (and raise `IndexError` when
  nothing was written); `all()` returns them all in order.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import io

from openflow.request import Request, new_request
from openflow.table import TableMod

msg = new_request(17, TableMod(table=0xFE, config=3))
wire = msg.to_bytes()

decoded = Request.read_from(io.BytesIO(wire))
body = TableMod.read_from(decoded.body)
assert body.table == 0xFE
```

Recording what a handler writes:

```python
from openflow.recorder import ResponseRecorder
from openflow.request import new_request

def handler(writer, request):
    writer.write(request.header.copy(), None)

recorder = ResponseRecorder()
handler(recorder, new_request(0, None))
assert recorder.first().header.type == 0
```

## What it does not do

The package does not open network connections: there is no server,
client, listener or connection type, and no dispatcher that routes
messages to handlers by type. Message types are plain integers. Of the
message bodies, only the table messages and table properties above are
provided; flow modifications, matches, actions, instructions, echo and
multipart messages are not.