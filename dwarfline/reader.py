"""Low-level reading of DWARF section data."""

from __future__ import annotations

from dataclasses import dataclass

_UINT64_MASK = (1 << 64) - 1


class DwarfError(Exception):
    """Raised when DWARF data is malformed or unsupported.

    ``errnum`` is -1 when the data is of an unsupported kind, 0 otherwise.
    """

    def __init__(self, message: str, errnum: int = 0) -> None:
        super().__init__(message)
        self.errnum = errnum


@dataclass
class DwarfSections:
    """The raw contents of the DWARF debug sections of one module."""

    info: bytes = b""
    line: bytes = b""
    abbrev: bytes = b""
    ranges: bytes = b""
    strings: bytes = b""
    addr: bytes = b""
    str_offsets: bytes = b""
    line_str: bytes = b""
    rnglists: bytes = b""


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", "surrogateescape")


def cstring_at(data: bytes, offset: int) -> str:
    """Return the NUL-terminated string starting at ``offset`` in ``data``."""
    end = data.find(b"\0", offset)
    if end < 0:
        end = len(data)
    return _decode(data[offset:end])


def leb128_len(data: bytes, offset: int = 0) -> int:
    """Return the number of bytes of the LEB128 number at ``offset``."""
    length = 1
    pos = offset
    while pos < len(data) and data[pos] & 0x80:
        pos += 1
        length += 1
    return length


def is_highest_address(address: int, addrsize: int) -> bool:
    """Whether ``address`` is the largest value of an ``addrsize``-byte address."""
    if addrsize not in (1, 2, 4, 8):
        return False
    return address == (1 << (8 * addrsize)) - 1


class DwarfBuffer:
    """A cursor over a bounded window of a DWARF section."""

    def __init__(
        self,
        name: str,
        data: bytes,
        offset: int = 0,
        end: int | None = None,
        *,
        is_bigendian: bool = False,
        start: int = 0,
    ) -> None:
        self.name = name
        self.data = data
        self.offset = offset
        self.end = len(data) if end is None else min(end, len(data))
        self.is_bigendian = is_bigendian
        self.start = start

    @property
    def left(self) -> int:
        """The number of bytes remaining in the window."""
        return max(self.end - self.offset, 0)

    @property
    def _byteorder(self) -> str:
        return "big" if self.is_bigendian else "little"

    def error(self, msg: str, errnum: int = 0) -> None:
        """Raise a DwarfError naming this buffer and the current position."""
        raise DwarfError(
            f"{msg} in {self.name} at {self.offset - self.start}", errnum
        )

    def require(self, count: int) -> None:
        """Ensure at least ``count`` bytes remain."""
        if count < 0 or self.left < count:
            self.error("DWARF underflow", 0)

    def advance(self, count: int) -> None:
        """Skip ``count`` bytes."""
        self.require(count)
        self.offset += count

    def _take(self, count: int) -> bytes:
        self.require(count)
        chunk = self.data[self.offset:self.offset + count]
        self.offset += count
        return chunk

    def _read_uint(self, size: int) -> int:
        return int.from_bytes(self._take(size), self._byteorder)

    def read_string(self) -> str:
        """Read a NUL-terminated string and move past its terminator."""
        nul = self.data.find(b"\0", self.offset, self.end)
        if nul < 0:
            self.advance(self.left + 1)
        raw = self.data[self.offset:nul]
        self.advance(nul - self.offset + 1)
        return _decode(raw)

    def read_byte(self) -> int:
        return self._take(1)[0]

    def read_sbyte(self) -> int:
        value = self.read_byte()
        return value - 0x100 if value & 0x80 else value

    def read_uint16(self) -> int:
        return self._read_uint(2)

    def read_uint24(self) -> int:
        return self._read_uint(3)

    def read_uint32(self) -> int:
        return self._read_uint(4)

    def read_uint64(self) -> int:
        return self._read_uint(8)

    def read_offset(self, is_dwarf64: bool) -> int:
        """Read a section offset, 8 bytes wide in 64-bit DWARF, else 4."""
        return self.read_uint64() if is_dwarf64 else self.read_uint32()

    def read_address(self, addrsize: int) -> int:
        """Read an address of ``addrsize`` bytes."""
        if addrsize not in (1, 2, 4, 8):
            self.error("unrecognized address size", 0)
        return self._read_uint(addrsize)

    def read_uleb128(self) -> int:
        """Read an unsigned LEB128 number, limited to 64 bits."""
        result = 0
        shift = 0
        while True:
            byte = self.read_byte()
            if shift < 64:
                result |= ((byte & 0x7F) << shift) & _UINT64_MASK
            else:
                self.error("LEB128 overflows uint64_t", 0)
            shift += 7
            if not byte & 0x80:
                return result

    def read_sleb128(self) -> int:
        """Read a signed LEB128 number, limited to 64 bits."""
        value = 0
        shift = 0
        while True:
            byte = self.read_byte()
            if shift < 64:
                value |= ((byte & 0x7F) << shift) & _UINT64_MASK
            else:
                self.error("signed LEB128 overflows uint64_t", 0)
            shift += 7
            if not byte & 0x80:
                break
        if byte & 0x40 and shift < 64:
            value |= (_UINT64_MASK << shift) & _UINT64_MASK
        return value - (1 << 64) if value & (1 << 63) else value

    def read_initial_length(self) -> tuple[int, bool]:
        """Read a unit length; return it and whether the unit is 64-bit DWARF."""
        length = self.read_uint32()
        if length == 0xFFFFFFFF:
            return self.read_uint64(), True
        return length, False

    def sub(self, length: int) -> DwarfBuffer:
        """Return a buffer over the next ``length`` bytes and skip past them."""
        self.require(length)
        child = DwarfBuffer(
            self.name,
            self.data,
            self.offset,
            self.offset + length,
            is_bigendian=self.is_bigendian,
            start=self.start,
        )
        self.offset += length
        return child