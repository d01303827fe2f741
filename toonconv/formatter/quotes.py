"""Smart string quoting for TOON output.

TOON leaves strings bare whenever a decoder would read them back
unchanged, and quotes them otherwise. Values and keys follow different
rules: values must never be mistaken for keywords or numbers, keys must
never be mistaken for structural separators.

Value quoting rules (first match wins):
1. Empty string
2. Literal ``true``, ``false`` or ``null``
3. Looks like a number (float/int parse, ``Infinity``, ``NaN``, scientific notation)
4. Leading or trailing whitespace, or a leading list marker (``-``)
5. Structural character, configured delimiter, quote, backslash or control character
"""

import re
import string
import unicodedata

from toonconv.config import Delimiter, QuoteStrategy
from toonconv.constants import (
    KEY_STRUCTURAL_CHARS,
    RESERVED_LITERALS,
    SPECIAL_NUMBER_LITERALS,
    STRUCTURAL_CHARS,
)

# Everything a float parser reads as a number: ASCII digits with an optional
# fraction and exponent, or inf/infinity/nan in any case. No underscores or padding.
_NUMBER_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def is_control_char(ch: str) -> bool:
    """Check if a character is a Unicode control character (category Cc)."""
    return unicodedata.category(ch) == "Cc"


def looks_like_number(text: str) -> bool:
    """Check if a decoder could read the text as a number."""
    if text in SPECIAL_NUMBER_LITERALS:
        return True
    return _NUMBER_PATTERN.fullmatch(text) is not None


def quote(text: str) -> str:
    """Wrap text in double quotes, escaping as TOON requires.

    Other control characters become ``\\u`` plus four lowercase hex digits.
    """
    parts = ['"']
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
        elif is_control_char(ch):
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)


def unquote(text: str) -> str:
    """Reverse quote(): strip the quotes and resolve escapes."""
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        raise ValueError(f"Not a quoted string: {text!r}")

    reverse = {v[1]: k for k, v in _ESCAPES.items()}
    body = text[1:-1]
    result = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\":
            result.append(ch)
            i += 1
            continue
        if i + 1 >= len(body):
            raise ValueError(f"Dangling escape in {text!r}")
        marker = body[i + 1]
        if marker == "u":
            result.append(chr(int(body[i + 2 : i + 6], 16)))
            i += 6
        elif marker in reverse:
            result.append(reverse[marker])
            i += 2
        else:
            raise ValueError(f"Unknown escape \\{marker} in {text!r}")
    return "".join(result)


class QuoteEngine:
    """Quoting decisions bound to one delimiter and quoting policy."""

    def __init__(
        self,
        delimiter: Delimiter | str = Delimiter.COMMA,
        strategy: QuoteStrategy = QuoteStrategy.SMART,
    ):
        self.delimiter = delimiter.value if isinstance(delimiter, Delimiter) else delimiter
        self.strategy = strategy

    def needs_quoting(self, text: str) -> bool:
        """Decide whether a string value must be quoted to survive decoding."""
        if not text:
            return True

        if text in RESERVED_LITERALS:
            return True

        if looks_like_number(text):
            return True

        if text[0].isspace() or text[-1].isspace():
            return True

        # A bare leading dash reads as a list item marker
        if text == "-" or text.startswith("- "):
            return True

        for ch in text:
            if ch in STRUCTURAL_CHARS or ch in self.delimiter:
                return True
            if ch == '"' or ch == "\\":
                return True
            if is_control_char(ch):
                return True

        return False

    def format(self, text: str) -> str:
        """Render a string value according to the quoting policy."""
        if self.strategy is QuoteStrategy.ALWAYS:
            return quote(text)
        if self.strategy is QuoteStrategy.NEVER:
            return text
        return quote(text) if self.needs_quoting(text) else text

    @staticmethod
    def needs_key_quoting(key: str) -> bool:
        """Decide whether an object key or field name must be quoted."""
        if not key:
            return True

        if ":" in key or " " in key:
            return True

        if key[0] in string.digits:
            return True

        for ch in key:
            if ch in KEY_STRUCTURAL_CHARS:
                return True
            if ch == '"' or ch == "\\" or is_control_char(ch):
                return True

        return False

    def format_key(self, key: str) -> str:
        """Render a key, quoting only when required."""
        return quote(key) if self.needs_key_quoting(key) else key


def needs_quoting(text: str, delimiter: Delimiter | str = Delimiter.COMMA) -> bool:
    """Check if a string value needs quoting under the smart policy."""
    return QuoteEngine(delimiter).needs_quoting(text)


def needs_key_quoting(key: str) -> bool:
    """Check if a key needs quoting."""
    return QuoteEngine.needs_key_quoting(key)


def smart_quote(text: str, delimiter: Delimiter | str = Delimiter.COMMA) -> str:
    """Format a string value with smart quoting."""
    return QuoteEngine(delimiter).format(text)
