"""Tests for the keypad bit-status model."""

from pyad2.const.bits import BIT_LABELS, DeviceMode, StatusBit
from pyad2.status import BitStatus, decode_bit_field


def test_defaults():
    bits = BitStatus()
    assert bits.ready is False
    assert bits.beeps == 0
    assert bits.zone_bypassed == 0
    assert bits.device_mode is DeviceMode.UNKNOWN
    assert bits.as_dict()["Device mode"] == "-"


def test_decode_positions():
    bits = decode_bit_field("10000001000000000D")

    assert bits.get(StatusBit.READY) is True
    assert bits.get(StatusBit.AC_POWER) is True
    assert bits.get(StatusBit.DEVICE_MODE) is DeviceMode.DSC
    for bit in StatusBit:
        if bit not in (StatusBit.READY, StatusBit.AC_POWER, StatusBit.DEVICE_MODE):
            assert not bits.get(bit), bit


def test_decode_strips_leading_bracket():
    assert decode_bit_field("[10000001000000000D--]") == decode_bit_field("10000001000000000D--")


def test_counters_keep_digit_value():
    bits = decode_bit_field("0000012")
    assert bits.beeps == 1
    assert bits.zone_bypassed == 2
    assert isinstance(bits.beeps, int) and not isinstance(bits.beeps, bool)


def test_counter_non_digit_uses_default():
    bits = decode_bit_field("00000--")
    assert bits.beeps == 0
    assert bits.zone_bypassed == 0


def test_only_one_sets_flags():
    bits = decode_bit_field("-2x" + "0" * 15)
    assert bits.ready is False
    assert bits.armed_away is False
    assert bits.armed_home is False


def test_device_mode_ademco_for_other_chars():
    assert decode_bit_field("0" * 17 + "A").device_mode is DeviceMode.ADEMCO
    assert decode_bit_field("0" * 17 + "-").device_mode is DeviceMode.ADEMCO


def test_short_field_uses_defaults():
    bits = decode_bit_field("1")
    assert bits.ready is True
    assert bits.beeps == 0
    assert bits.fire is False
    assert bits.device_mode is DeviceMode.UNKNOWN

    assert decode_bit_field("") == BitStatus()
    assert decode_bit_field("[") == BitStatus()


def test_as_dict_has_all_labels_in_order():
    data = decode_bit_field("111111111111111111").as_dict()
    assert list(data) == [BIT_LABELS[bit] for bit in StatusBit]
    assert len(data) == 18
    assert data["Ready"] is True
    assert data["Beeps"] == 1
    assert data["Fire"] is True
    assert data["Device mode"] == "Ademco"


def test_decode_replaces_instead_of_merging():
    first = decode_bit_field("111111111111111111")
    second = decode_bit_field("000000000000000000")
    assert second.ready is False
    assert second.fire is False
    assert first.fire is True


def test_counter_non_decimal_digit_uses_default():
    bits = decode_bit_field("00000²³")
    assert bits.beeps == 0
    assert bits.zone_bypassed == 0
