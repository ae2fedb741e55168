"""
Tests for the key=value tokenizer.
"""

import random
import string

import pytest

from lognorm.parsers.tokenizer import extract_fields


class TestExtractFields:
    """Tests for extract_fields on appliance lines."""

    def test_appliance_line(self, pulse_logout_line):
        """Test the fields of a captured PulseSecure line."""
        fields = extract_fields(pulse_logout_line)

        assert fields["id"] == "firewall"
        assert fields["time"] == "2021-04-08 11:57:48"
        assert fields["fw"] == "10.0.0.9"
        assert fields["user"] == "usettest1"
        assert fields["ivs"] == "Default Network"
        assert fields["src"] == "82.213.178.130"
        assert fields["msg"] == "AUT22673: Logout from 82.213.178.130 (session:00000000)"

    def test_empty_quoted_values(self, pulse_logout_line):
        """Test that realm="" and friends are kept as empty strings."""
        fields = extract_fields(pulse_logout_line)

        assert fields["realm"] == ""
        assert fields["roles"] == ""
        assert fields["arg"] == ""
        assert fields["agent"] == ""

    def test_empty_bare_values_skipped(self, pulse_logout_line):
        """Test that key= with nothing before the next key is left out."""
        fields = extract_fields(pulse_logout_line)

        for key in ("dst", "dstname", "op", "result", "sent", "rcvd", "duration"):
            assert key not in fields

    def test_message_field_last(self):
        """Test that a quoted trailing msg loses its quotes."""
        fields = extract_fields('msg="AUT22673: Logout from 82.213.178.130 (session:00000000)"')
        assert fields == {"msg": "AUT22673: Logout from 82.213.178.130 (session:00000000)"}

    def test_order_preserved(self):
        """Test that keys come back in line order."""
        fields = extract_fields("c=3 a=1 b=2")
        assert list(fields) == ["c", "a", "b"]

    def test_bare_value_with_spaces(self):
        """Test that a bare value extends to the next key."""
        fields = extract_fields("ivs=Default Network user=usettest1")
        assert fields == {"ivs": "Default Network", "user": "usettest1"}

    def test_bare_value_with_spaces_at_end(self):
        """Test a spaced bare value in last position."""
        fields = extract_fields("user=usettest1 ivs=Default Network")
        assert fields == {"user": "usettest1", "ivs": "Default Network"}

    def test_quoted_value_with_equals_and_spaces(self):
        """Test that quoting hides = and whitespace."""
        fields = extract_fields('arg="a=1 b=2" next=x')
        assert fields == {"arg": "a=1 b=2", "next": "x"}

    def test_bare_value_with_equals(self):
        """Test that an = without whitespace before it stays in the value."""
        fields = extract_fields("url=https://example.com/?a=b&c=d next=1")
        assert fields == {"url": "https://example.com/?a=b&c=d", "next": "1"}

    def test_run_of_equals(self):
        """Test that adjacent = characters do not start new keys."""
        fields = extract_fields("a==b c=d")
        assert fields == {"a": "=b", "c": "d"}

    def test_escaped_quote(self):
        """Test that \\" neither closes the value nor survives unescaped."""
        fields = extract_fields(r'a="say \"hi\" now" b=2')
        assert fields == {"a": 'say "hi" now', "b": "2"}

    def test_escaped_quote_at_end_of_value(self):
        fields = extract_fields(r'a="ends with \"" b=2')
        assert fields == {"a": 'ends with "', "b": "2"}

    def test_unterminated_quote(self):
        """Test that an unclosed quote swallows the rest of the line."""
        fields = extract_fields('a=1 b="open ended c=3')
        assert fields == {"a": "1", "b": "open ended c=3"}

    def test_extra_whitespace_trimmed(self):
        fields = extract_fields("a=1    b=2   ")
        assert fields == {"a": "1", "b": "2"}

    def test_tab_separated(self):
        fields = extract_fields("a=1\tb=2")
        assert fields == {"a": "1", "b": "2"}

    def test_duplicate_key_last_wins(self):
        fields = extract_fields("a=1 a=2")
        assert fields == {"a": "2"}

    def test_trailing_empty_value(self):
        assert extract_fields("a=1 k=") == {"a": "1"}
        assert extract_fields("k=") == {}

    def test_no_pairs(self):
        """Test text without any key=value pair."""
        assert extract_fields("") == {}
        assert extract_fields("just some words") == {}
        assert extract_fields('"quoted = text"') == {}

    def test_leading_equals_has_no_key(self):
        """Test that text starting with = never yields an empty key."""
        fields = extract_fields("=orphan user=x")
        assert fields == {"user": "x"}
        assert "" not in fields

    def test_spaced_equals_has_no_key(self):
        """Test that 'key = value' spacing does not produce an empty key."""
        assert "" not in extract_fields("key = value")


def _random_key(rng: random.Random) -> str:
    alphabet = string.ascii_lowercase + string.digits + "_."
    return rng.choice(string.ascii_lowercase) + "".join(
        rng.choice(alphabet) for _ in range(rng.randint(0, 7))
    )


def _random_pair(rng: random.Random) -> tuple[str, str]:
    """Return (rendered value, expected value)."""
    word_chars = string.ascii_letters + string.digits + ":/.-_()@,;"
    kind = rng.choice(["bare", "bare_equals", "bare_spaces", "quoted", "escaped", "empty_quoted"])

    def word(chars: str = word_chars) -> str:
        return "".join(rng.choice(chars) for _ in range(rng.randint(1, 10)))

    if kind == "bare":
        value = word()
        return value, value
    if kind == "bare_equals":
        value = word() + "=" + word()
        return value, value
    if kind == "bare_spaces":
        value = " ".join(word() for _ in range(rng.randint(2, 4)))
        return value, value
    if kind == "quoted":
        value = " ".join(word(word_chars + "=") for _ in range(rng.randint(1, 4)))
        return f'"{value}"', value
    if kind == "escaped":
        inner = [word(), word()]
        return f'"{inner[0]} \\"{inner[1]}\\""', f'{inner[0]} "{inner[1]}"'
    return '""', ""


class TestExtractFieldsGenerated:
    """Generated key=value lines: every key maps back to what followed its =."""

    @pytest.mark.parametrize("seed", range(200))
    def test_round_trip(self, seed):
        rng = random.Random(seed)
        expected = {}
        parts = []
        count = rng.randint(1, 8)
        while len(expected) < count:
            key = _random_key(rng)
            if key in expected:
                continue
            rendered, value = _random_pair(rng)
            expected[key] = value
            parts.append(f"{key}={rendered}")

        line = " ".join(parts)
        assert extract_fields(line) == expected, line
