"""Address ranges of units and functions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .attributes import AttrValue, ValueEncoding, resolve_addr_index
from .constants import Attribute, RangeListEntry
from .reader import DwarfBuffer, DwarfError, DwarfSections, is_highest_address

_UINT64_MASK = (1 << 64) - 1

AddRange = Callable[[int, int], None]


@dataclass
class PcRange:
    """Address range information gathered from an entry's attributes."""

    lowpc: int = 0
    have_lowpc: bool = False
    lowpc_is_addr_index: bool = False
    highpc: int = 0
    have_highpc: bool = False
    highpc_is_relative: bool = False
    highpc_is_addr_index: bool = False
    ranges: int = 0
    have_ranges: bool = False
    ranges_is_index: bool = False

    def update(self, attr: Any, val: AttrValue) -> None:
        """Record what a low_pc, high_pc or ranges attribute says."""
        V = ValueEncoding
        match attr.name:
            case Attribute.LOW_PC:
                if val.encoding in (V.ADDRESS, V.ADDRESS_INDEX):
                    self.lowpc = val.value  # type: ignore[assignment]
                    self.have_lowpc = True
                    if val.encoding is V.ADDRESS_INDEX:
                        self.lowpc_is_addr_index = True
            case Attribute.HIGH_PC:
                if val.encoding in (V.ADDRESS, V.UINT, V.ADDRESS_INDEX):
                    self.highpc = val.value  # type: ignore[assignment]
                    self.have_highpc = True
                    if val.encoding is V.UINT:
                        self.highpc_is_relative = True
                    elif val.encoding is V.ADDRESS_INDEX:
                        self.highpc_is_addr_index = True
            case Attribute.RANGES:
                if val.encoding in (V.UINT, V.REF_SECTION, V.RNGLISTS_INDEX):
                    self.ranges = val.value  # type: ignore[assignment]
                    self.have_ranges = True
                    if val.encoding is V.RNGLISTS_INDEX:
                        self.ranges_is_index = True

    def has_range(self) -> bool:
        """Whether a range list or a complete low/high pair was found."""
        return self.have_ranges or (self.have_lowpc and self.have_highpc)


def _add_low_high_range(
    sections: DwarfSections,
    base_address: int,
    is_bigendian: bool,
    unit: Any,
    pcrange: PcRange,
    add_range: AddRange,
) -> None:
    lowpc = pcrange.lowpc
    if pcrange.lowpc_is_addr_index:
        lowpc = resolve_addr_index(
            sections, unit.addr_base, unit.addrsize, is_bigendian, lowpc
        )
    highpc = pcrange.highpc
    if pcrange.highpc_is_addr_index:
        highpc = resolve_addr_index(
            sections, unit.addr_base, unit.addrsize, is_bigendian, highpc
        )
    if pcrange.highpc_is_relative:
        highpc += lowpc
    add_range(
        (lowpc + base_address) & _UINT64_MASK,
        (highpc + base_address) & _UINT64_MASK,
    )


def _add_ranges_from_ranges(
    sections: DwarfSections,
    base_address: int,
    is_bigendian: bool,
    unit: Any,
    base: int,
    pcrange: PcRange,
    add_range: AddRange,
) -> None:
    if pcrange.ranges >= len(sections.ranges):
        raise DwarfError("ranges offset out of range", 0)
    buf = DwarfBuffer(
        ".debug_ranges", sections.ranges, pcrange.ranges, is_bigendian=is_bigendian
    )
    while True:
        low = buf.read_address(unit.addrsize)
        high = buf.read_address(unit.addrsize)
        if low == 0 and high == 0:
            return
        if is_highest_address(low, unit.addrsize):
            base = high
        else:
            add_range(
                (low + base + base_address) & _UINT64_MASK,
                (high + base + base_address) & _UINT64_MASK,
            )


def _add_ranges_from_rnglists(
    sections: DwarfSections,
    base_address: int,
    is_bigendian: bool,
    unit: Any,
    base: int,
    pcrange: PcRange,
    add_range: AddRange,
) -> None:
    data = sections.rnglists
    if pcrange.ranges_is_index:
        offset = unit.rnglists_base + pcrange.ranges * (8 if unit.is_dwarf64 else 4)
    else:
        offset = pcrange.ranges
    if offset >= len(data):
        raise DwarfError("rnglists offset out of range", 0)
    buf = DwarfBuffer(".debug_rnglists", data, offset, is_bigendian=is_bigendian)

    if pcrange.ranges_is_index:
        offset = buf.read_offset(unit.is_dwarf64) + unit.rnglists_base
        if offset >= len(data):
            raise DwarfError("rnglists index offset out of range", 0)
        buf.offset = offset

    def address_at(index: int) -> int:
        return resolve_addr_index(
            sections, unit.addr_base, unit.addrsize, is_bigendian, index
        )

    def add(low: int, high: int) -> None:
        add_range(low & _UINT64_MASK, high & _UINT64_MASK)

    while (rle := buf.read_byte()) != RangeListEntry.END_OF_LIST:
        match rle:
            case RangeListEntry.BASE_ADDRESSX:
                base = address_at(buf.read_uleb128())
            case RangeListEntry.STARTX_ENDX:
                low = address_at(buf.read_uleb128())
                high = address_at(buf.read_uleb128())
                add(low + base_address, high + base_address)
            case RangeListEntry.STARTX_LENGTH:
                low = address_at(buf.read_uleb128())
                length = buf.read_uleb128()
                low += base_address
                add(low, low + length)
            case RangeListEntry.OFFSET_PAIR:
                low = buf.read_uleb128()
                high = buf.read_uleb128()
                add(low + base + base_address, high + base + base_address)
            case RangeListEntry.BASE_ADDRESS:
                base = buf.read_address(unit.addrsize)
            case RangeListEntry.START_END:
                low = buf.read_address(unit.addrsize)
                high = buf.read_address(unit.addrsize)
                add(low + base_address, high + base_address)
            case RangeListEntry.START_LENGTH:
                low = buf.read_address(unit.addrsize)
                length = buf.read_uleb128()
                low += base_address
                add(low, low + length)
            case _:
                buf.error("unrecognized DW_RLE value", -1)


def add_ranges(
    sections: DwarfSections,
    base_address: int,
    is_bigendian: bool,
    unit: Any,
    base: int,
    pcrange: PcRange,
    add_range: AddRange,
) -> None:
    """Call ``add_range(low, high)`` for every address range in ``pcrange``.

    ``unit`` supplies version, addrsize, is_dwarf64, addr_base and
    rnglists_base; ``base`` is the base address for range list entries.
    """
    if pcrange.have_lowpc and pcrange.have_highpc:
        _add_low_high_range(
            sections, base_address, is_bigendian, unit, pcrange, add_range
        )
        return
    if not pcrange.have_ranges:
        return
    if unit.version < 5:
        _add_ranges_from_ranges(
            sections, base_address, is_bigendian, unit, base, pcrange, add_range
        )
    else:
        _add_ranges_from_rnglists(
            sections, base_address, is_bigendian, unit, base, pcrange, add_range
        )