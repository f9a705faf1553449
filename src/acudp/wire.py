"""Little-endian binary reader/writer for the server plugin protocol.

Two string forms are read from the wire; outbound commands only carry the wide one:

- narrow: one length byte (byte count), then that many bytes
- wide: one length byte (codepoint count), then 4 bytes per codepoint (UTF-32-LE)

NUL characters are stripped from both after decoding.
"""

from __future__ import annotations

import struct
from io import BytesIO

from acudp.exceptions import DecodeError, EncodeError

MAX_STRING_LENGTH = 0xFF
WIDE_CHAR_SIZE = 4


def _strip_nul(text: str) -> str:
    return text.replace("\x00", "")


class WireReader:
    """Reads fixed-layout fields from one datagram. Short reads raise DecodeError."""

    def __init__(self, data: bytes) -> None:
        self._buffer = BytesIO(data)
        self._length = len(data)

    @property
    def position(self) -> int:
        return self._buffer.tell()

    @property
    def remaining(self) -> int:
        return self._length - self._buffer.tell()

    def read_bytes(self, count: int) -> bytes:
        data = self._buffer.read(count)
        if len(data) != count:
            raise DecodeError(
                f"unexpected end of datagram at offset {self.position}: "
                f"wanted {count} bytes, got {len(data)}"
            )
        return data

    def read_struct(self, fmt: str) -> tuple:
        """Read a whole ``struct`` layout (little-endian prefix added)."""
        layout = struct.Struct("<" + fmt)
        return layout.unpack(self.read_bytes(layout.size))

    def read_uint8(self) -> int:
        return self.read_struct("B")[0]

    def read_uint16(self) -> int:
        return self.read_struct("H")[0]

    def read_int32(self) -> int:
        return self.read_struct("i")[0]

    def read_uint32(self) -> int:
        return self.read_struct("I")[0]

    def read_float(self) -> float:
        return self.read_struct("f")[0]

    def read_string(self) -> str:
        """Read a narrow string."""
        size = self.read_uint8()
        data = self.read_bytes(size)
        return _strip_nul(data.decode("utf-8", errors="replace"))

    def read_string_w(self) -> str:
        """Read a wide string."""
        size = self.read_uint8()
        data = self.read_bytes(size * WIDE_CHAR_SIZE)
        return _strip_nul(data.decode("utf-32-le", errors="replace"))

    def read_remaining(self) -> bytes:
        return self._buffer.read()


class WireWriter:
    """Builds an outbound datagram."""

    def __init__(self) -> None:
        self._buffer = BytesIO()

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()

    def write_struct(self, fmt: str, *values: object) -> None:
        try:
            self._buffer.write(struct.pack("<" + fmt, *values))
        except struct.error as exc:
            raise EncodeError(f"could not pack {values!r} as {fmt!r}: {exc}") from exc

    def write_uint8(self, value: int) -> None:
        self.write_struct("B", value)

    def write_uint16(self, value: int) -> None:
        self.write_struct("H", value)

    def write_string_w(self, text: str) -> None:
        """Write a wide string."""
        self.write_uint8(wide_length(text))
        self._buffer.write(encode_wide(text))


def wide_length(text: str) -> int:
    """Codepoint count of ``text``, checked against the one-byte length prefix."""
    if len(text) > MAX_STRING_LENGTH:
        raise EncodeError(
            f"string is {len(text)} characters, limit is {MAX_STRING_LENGTH}"
        )
    return len(text)


def encode_wide(text: str) -> bytes:
    """Encode ``text`` as 4-byte little-endian codepoints, without a length prefix."""
    try:
        return text.encode("utf-32-le")
    except UnicodeEncodeError as exc:
        raise EncodeError(f"could not encode {text!r} as UTF-32: {exc}") from exc
