"""
Quoting-aware key=value tokenizer.

Appliance logs such as PulseSecure emit lines like::

    id=firewall time="2021-04-08 11:57:48" ivs=Default Network realm="" msg="AUT22673: Logout"

There is no formal grammar: values may be bare, may contain spaces when
the next key is still a few words away, may be quoted, and quoted values
may contain escaped quotes. ``extract_fields`` recovers the pairs with a
single forward scan.
"""

__all__ = ["extract_fields"]


def extract_fields(text: str) -> dict[str, str]:
    """
    Split ``text`` into an ordered ``{key: value}`` mapping.

    Rules:
        - a key is the run of characters between the last unquoted
          whitespace and an unquoted ``=``
        - a value runs up to the whitespace preceding the next key, so
          ``ivs=Default Network user=x`` gives ``ivs`` -> ``Default Network``
        - an ``=`` with no whitespace since the previous one belongs to the
          value (``url=a=b`` -> ``a=b``)
        - ``"`` opens a quoted section in which ``=`` and whitespace are
          ignored; ``\\"`` does not close it
        - quoted values are returned without their quotes and with ``\\"``
          unescaped; bare values have trailing whitespace trimmed
        - a bare empty value (``dst= next=x``) and an empty key are skipped,
          a quoted empty value (``realm=""``) is kept as ``""``

    Args:
        text: One log line, or the key=value part of one

    Returns:
        Mapping in order of first appearance; a repeated key keeps its
        last value
    """
    fields: dict[str, str] = {}

    equal_pos = -1  # Last unquoted '=' that started a value
    key_start = 0
    last_space = -1  # Last unquoted whitespace
    in_quotes = False
    escaped = False

    for i, char in enumerate(text):
        if in_quotes:
            if char == '"' and not escaped:
                in_quotes = False
        elif char == '"':
            in_quotes = True
        elif char.isspace():
            last_space = i
        elif char == "=" and last_space >= equal_pos:
            if equal_pos >= 0:
                _store(fields, text[key_start:equal_pos], text[equal_pos + 1:last_space])
            key_start = last_space + 1
            equal_pos = i
        escaped = char == "\\"

    if equal_pos >= 0:
        _store(fields, text[key_start:equal_pos], text[equal_pos + 1:].rstrip())

    return fields


def _store(fields: dict[str, str], key: str, raw_value: str) -> None:
    """Insert one pair, unquoting the value when it starts with a quote."""
    if not key:
        return

    if raw_value.startswith('"'):
        if len(raw_value) > 1 and raw_value.endswith('"'):
            value = raw_value[1:-1]
        else:
            # Unterminated quote runs to the end of the span
            value = raw_value[1:]
        fields[key] = value.replace('\\"', '"')
        return

    value = raw_value.rstrip()
    if value:
        fields[key] = value
