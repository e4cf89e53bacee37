# profile_processor/normalizers/identifiers.py
import re
from typing import Optional

LINKEDIN_PROFILE_BASE = "https://linkedin.com/in/"

# Escapes of these characters survive decoding (same set as JS decodeURI).
_RESERVED = set(";/?:@&=+$,#")
_ESCAPE_RUN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")


class ProfileDecodeError(ValueError):
    """Raised when a profile identifier carries malformed percent-encoding."""
    def __init__(self, value: str, reason: str):
        super().__init__(f"Malformed URI sequence in {value!r}: {reason}")
        self.value = value
        self.reason = reason


def decode_uri(value: str) -> str:
    """
    Percent-decode a URI the way a browser's decodeURI does:
      - runs of %XX escapes are decoded as UTF-8
      - escapes for reserved delimiters (e.g. %2F) are left as-is
      - a stray '%' or an invalid UTF-8 sequence raises ProfileDecodeError
    """
    out = []
    pos = 0
    for m in _ESCAPE_RUN.finditer(value):
        _append_literal(out, value, value[pos:m.start()])
        pos = m.end()

        escapes = [m.group(0)[i:i + 3] for i in range(0, len(m.group(0)), 3)]
        raw = bytes(int(e[1:], 16) for e in escapes)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProfileDecodeError(value, f"invalid UTF-8 in {m.group(0)}") from e

        i = 0
        for ch in text:
            width = len(ch.encode("utf-8"))
            out.append("".join(escapes[i:i + width]) if ch in _RESERVED else ch)
            i += width
    _append_literal(out, value, value[pos:])
    return "".join(out)


def _append_literal(out: list, value: str, chunk: str):
    if "%" in chunk:
        raise ProfileDecodeError(value, "'%' not followed by two hex digits")
    out.append(chunk)


def public_identifier(username: Optional[str]) -> str:
    return decode_uri(username) if username else ""


def profile_url(username: Optional[str]) -> str:
    return decode_uri(LINKEDIN_PROFILE_BASE + username) if username else ""
