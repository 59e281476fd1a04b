"""Abbreviation tables from the .debug_abbrev section."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .constants import Form
from .reader import DwarfBuffer, DwarfError


@dataclass(frozen=True)
class Attr:
    """One attribute specification of an abbreviation.

    ``val`` holds the constant for ``DW_FORM_implicit_const``, else 0.
    """

    name: int
    form: int
    val: int = 0


@dataclass(frozen=True)
class Abbrev:
    """A single abbreviation: the shape of a class of entries."""

    code: int
    tag: int
    has_children: bool
    attrs: tuple[Attr, ...] = ()


class Abbrevs:
    """The abbreviations of one unit, kept sorted by code."""

    def __init__(self, abbrevs: Iterable[Abbrev] = ()) -> None:
        self._abbrevs = tuple(sorted(abbrevs, key=lambda a: a.code))
        self._by_code: dict[int, Abbrev] = {}
        for abbrev in self._abbrevs:
            self._by_code.setdefault(abbrev.code, abbrev)

    def __len__(self) -> int:
        return len(self._abbrevs)

    def __iter__(self) -> Iterator[Abbrev]:
        return iter(self._abbrevs)

    def lookup(self, code: int) -> Abbrev:
        """Return the abbreviation with ``code``."""
        try:
            return self._by_code[code]
        except KeyError:
            raise DwarfError("invalid abbreviation code", 0) from None


def _read_attrs(buf: DwarfBuffer) -> Iterator[Attr]:
    while True:
        name = buf.read_uleb128()
        form = buf.read_uleb128()
        if name == 0:
            return
        val = buf.read_sleb128() if form == Form.IMPLICIT_CONST else 0
        yield Attr(name, form, val)


def read_abbrevs(data: bytes, offset: int, is_bigendian: bool = False) -> Abbrevs:
    """Read the abbreviation table starting at ``offset`` in ``data``."""
    if offset >= len(data):
        raise DwarfError("abbrev offset out of range", 0)
    buf = DwarfBuffer(".debug_abbrev", data, offset, is_bigendian=is_bigendian)
    found = []
    while (code := buf.read_uleb128()) != 0:
        tag = buf.read_uleb128()
        has_children = buf.read_byte() != 0
        found.append(Abbrev(code, tag, has_children, tuple(_read_attrs(buf))))
    return Abbrevs(found)