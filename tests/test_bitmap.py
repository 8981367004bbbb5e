from openflow.bitmap import (
    action_bitmap,
    bitmap64,
    bitmap128,
    flow_reason_bitmap,
    group_bitmap,
    packet_in_reason_bitmap,
    port_reason_bitmap,
)

PACKET_IN_REASON_ACTION = 1
PACKET_IN_REASON_INVALID_TTL = 2
PORT_REASON_ADD = 0
PORT_REASON_DELETE = 1
FLOW_REASON_DELETE = 2
FLOW_REASON_GROUP_DELETE = 3
GROUP_TYPE_SELECT = 1
GROUP_TYPE_INDIRECT = 2
ACTION_TYPE_OUTPUT = 0
ACTION_TYPE_PUSH_VLAN = 17
ACTION_TYPE_POP_VLAN = 18


def test_bitmap64():
    assert bitmap64(3, 4) == (3, 4)


def test_bitmap128():
    assert bitmap128(3, 4, 5, 6) == (3, 4, 5, 6)


def test_packet_in_reason_bitmap():
    bitmap = packet_in_reason_bitmap(
        PACKET_IN_REASON_ACTION, PACKET_IN_REASON_INVALID_TTL
    )
    assert bitmap == 0x6


def test_port_reason_bitmap():
    assert port_reason_bitmap(PORT_REASON_ADD, PORT_REASON_DELETE) == 0x3


def test_flow_reason_bitmap():
    bitmap = flow_reason_bitmap(FLOW_REASON_DELETE, FLOW_REASON_GROUP_DELETE)
    assert bitmap == 0xC


def test_group_bitmap():
    assert group_bitmap(GROUP_TYPE_SELECT, GROUP_TYPE_INDIRECT) == 0x6


def test_action_bitmap():
    bitmap = action_bitmap(
        ACTION_TYPE_OUTPUT, ACTION_TYPE_PUSH_VLAN, ACTION_TYPE_POP_VLAN
    )
    assert bitmap == 0x60001


def test_empty_bitmap():
    assert action_bitmap() == 0


def test_repeated_values_are_idempotent():
    assert group_bitmap(GROUP_TYPE_SELECT, GROUP_TYPE_SELECT) == group_bitmap(
        GROUP_TYPE_SELECT
    )


def test_bitmap_stays_within_32_bits():
    assert action_bitmap(40) == 0
    assert action_bitmap(31) == 0x80000000