"""Tests for AD2 protocol decoding/encoding."""

import pytest

from pyad2.const.bits import DeviceMode
from pyad2.exceptions import AD2ProtocolError
from pyad2.protocol import AD2Protocol, KeypadStatus, ZoneTransition, normalize_keypad_text

KEYPAD_LINE = (
    '[10000001000000000D--],008,[f70000051008001c28020000000000],'
    '"DISARMED CHIME   Ready to Arm  "'
)


class TestAD2Protocol:
    """Test line decoding."""

    def test_decode_zone_faulted(self):
        """Test expander message with a fault status."""
        result = AD2Protocol().decode_line("!EXP:00,07,01")
        assert result == ZoneTransition(expander="00", channel="07", faulted=1)
        assert result.key == ("00", "07")

    def test_decode_zone_restored(self):
        """Test expander message with the restore status."""
        result = AD2Protocol().decode_line("!EXP:01,03,00")
        assert result == ZoneTransition(expander="01", channel="03", faulted=0)

    def test_decode_zone_any_other_status_is_faulted(self):
        """Test that every non-00 status counts as faulted."""
        result = AD2Protocol().decode_line("!EXP:00,07,17")
        assert result.faulted == 1

    def test_decode_zone_with_carriage_return(self):
        """Test that a trailing CR is tolerated."""
        result = AD2Protocol().decode_line("!EXP:00,07,00\r")
        assert result == ZoneTransition(expander="00", channel="07", faulted=0)

    def test_decode_zone_wrong_field_count(self):
        """Test expander message with too few fields."""
        with pytest.raises(AD2ProtocolError, match="3 fields"):
            AD2Protocol().decode_line("!EXP:00,07")

    def test_decode_zone_without_payload(self):
        """Test expander message with no colon."""
        with pytest.raises(AD2ProtocolError):
            AD2Protocol().decode_line("!EXP")

    def test_decode_keypad(self):
        """Test a full keypad status message."""
        result = AD2Protocol().decode_line(KEYPAD_LINE)

        assert isinstance(result, KeypadStatus)
        assert result.numeric == "008"
        assert result.raw_data == "[f70000051008001c28020000000000]"
        assert result.message == "DISARMED CHIME Ready to Arm"
        assert result.bits.ready is True
        assert result.bits.ac_power is True
        assert result.bits.armed_away is False
        assert result.bits.device_mode is DeviceMode.DSC
        assert result.raw == KEYPAD_LINE

    def test_decode_keypad_three_fields(self):
        """Test keypad message without the text field."""
        result = AD2Protocol().decode_line("[00000000000000000A--],001,[raw]")
        assert isinstance(result, KeypadStatus)
        assert result.message == ""
        assert result.bits.device_mode is DeviceMode.ADEMCO

    def test_decode_keypad_extra_fields_ignored(self):
        """Test that fields after the keypad text are ignored."""
        result = AD2Protocol().decode_line('[1],001,[raw],"Fault 03",extra,more')
        assert result.message == "Fault 03"
        assert result.numeric == "001"

    def test_decode_keypad_two_fields(self):
        """Test keypad message with too few fields."""
        with pytest.raises(AD2ProtocolError, match="at least 3 fields"):
            AD2Protocol().decode_line("[10000001000000000D--],008")

    def test_decode_unknown_lines(self):
        """Test lines matching neither shape."""
        protocol = AD2Protocol()
        assert protocol.decode_line("") is None
        assert protocol.decode_line("\r") is None
        assert protocol.decode_line("!RFX:0123456,80") is None
        assert protocol.decode_line("[no delimiter here]") is None
        assert protocol.decode_line("garbage,with,commas") is None

    def test_encode_keys(self):
        """Test raw keypress encoding."""
        protocol = AD2Protocol()
        assert protocol.encode_keys("12343") == b"12343"
        assert protocol.encode_keys(b"\x01\x01\x01") == b"\x01\x01\x01"

    def test_encode_code(self):
        """Test code entry encoding."""
        assert AD2Protocol().encode_code("1234") == b"#1234"


class TestNormalizeKeypadText:
    """Test keypad text cleanup."""

    def test_quoted_with_padding(self):
        """Test the typical padded, quoted panel text."""
        assert normalize_keypad_text('  "System  Is   Ready  To Arm "  ') == "System Is Ready To Arm"

    def test_no_quotes(self):
        """Test text without quotes."""
        assert normalize_keypad_text("  FAULT   05  ") == "FAULT 05"

    def test_doubled_quotes(self):
        """Test that all remaining quotes are removed."""
        assert normalize_keypad_text('""ARMED  AWAY""') == "ARMED AWAY"

    def test_embedded_comma(self):
        """Test that commas inside the text survive."""
        assert normalize_keypad_text('"Hello, World   "') == "Hello, World"

    def test_inner_padding_inside_quotes(self):
        """Test padding directly inside the quotes."""
        assert normalize_keypad_text('"  DISARMED  "') == "DISARMED"

    def test_tabs_collapse(self):
        """Test that mixed whitespace runs collapse to one space."""
        assert normalize_keypad_text('"A\t\tB"') == "A B"

    def test_empty(self):
        """Test empty and missing text."""
        assert normalize_keypad_text("") == ""
        assert normalize_keypad_text(None) == ""
        assert normalize_keypad_text('""') == ""
