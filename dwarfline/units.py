"""Compilation units and the map from addresses to units."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .abbrev import Abbrevs, read_abbrevs
from .attributes import AttrValue, ValueEncoding, read_attribute, resolve_string
from .constants import Attribute, Tag, UnitType
from .ranges import PcRange, add_ranges
from .reader import DwarfBuffer, DwarfSections


@dataclass(eq=False)
class Unit:
    """A compilation unit: what is needed to map a PC to a file and line.

    ``unit_data_start`` is the offset in .debug_info of the first entry,
    ``unit_data_offset`` its distance from the start of the unit header.
    ``lines`` stays None until the line table is read.
    """

    low_offset: int
    high_offset: int
    unit_data_start: int
    unit_data_len: int
    unit_data_offset: int
    version: int
    is_dwarf64: bool
    addrsize: int
    abbrevs: Abbrevs
    lineoff: int = 0
    str_offsets_base: int = 0
    addr_base: int = 0
    rnglists_base: int = 0
    filename: str | None = None
    comp_dir: str | None = None
    abs_filename: str | None = None
    lines: Any = None
    lines_failed: bool = False
    function_addrs: list = field(default_factory=list)


@dataclass(eq=False)
class UnitAddrs:
    """An address range ``low <= pc < high`` belonging to a unit."""

    low: int
    high: int
    unit: Unit


@dataclass(eq=False)
class DwarfData:
    """The address map and units of one module's debug information."""

    sections: DwarfSections
    is_bigendian: bool
    base_address: int
    addrs: list[UnitAddrs]
    units: list[Unit]
    altlink: DwarfData | None = None


def find_unit(units: Sequence[Unit], offset: int) -> Unit | None:
    """Return the unit whose .debug_info span holds ``offset``, if any."""
    index = bisect_right(units, offset, key=lambda u: u.low_offset) - 1
    if index >= 0 and units[index].low_offset <= offset < units[index].high_offset:
        return units[index]
    return None


def _find_address_ranges(
    base_address: int,
    buf: DwarfBuffer,
    sections: DwarfSections,
    is_bigendian: bool,
    altlink: DwarfData | None,
    unit: Unit,
    add_range: Callable[[int, int], None],
) -> None:
    V = ValueEncoding
    while buf.left > 0:
        code = buf.read_uleb128()
        if code == 0:
            return
        abbrev = unit.abbrevs.lookup(code)
        is_cu = abbrev.tag == Tag.COMPILE_UNIT
        pcrange = PcRange()
        name_val: AttrValue | None = None
        comp_dir_val: AttrValue | None = None

        for attr in abbrev.attrs:
            val = read_attribute(
                attr.form, attr.val, buf, unit.is_dwarf64, unit.version,
                unit.addrsize, sections, altlink,
            )
            match attr.name:
                case Attribute.LOW_PC | Attribute.HIGH_PC | Attribute.RANGES:
                    pcrange.update(attr, val)
                case Attribute.STMT_LIST:
                    if is_cu and val.encoding in (V.UINT, V.REF_SECTION):
                        unit.lineoff = val.value  # type: ignore[assignment]
                case Attribute.NAME:
                    if is_cu:
                        name_val = val
                case Attribute.COMP_DIR:
                    if is_cu:
                        comp_dir_val = val
                case Attribute.STR_OFFSETS_BASE:
                    if is_cu and val.encoding is V.REF_SECTION:
                        unit.str_offsets_base = val.value  # type: ignore[assignment]
                case Attribute.ADDR_BASE:
                    if is_cu and val.encoding is V.REF_SECTION:
                        unit.addr_base = val.value  # type: ignore[assignment]
                case Attribute.RNGLISTS_BASE:
                    if is_cu and val.encoding is V.REF_SECTION:
                        unit.rnglists_base = val.value  # type: ignore[assignment]

        # Strings are resolved only once str_offsets_base is known.
        if name_val is not None:
            name = resolve_string(
                sections, unit.is_dwarf64, is_bigendian, unit.str_offsets_base, name_val
            )
            if name is not None:
                unit.filename = name
        if comp_dir_val is not None:
            comp_dir = resolve_string(
                sections, unit.is_dwarf64, is_bigendian, unit.str_offsets_base,
                comp_dir_val,
            )
            if comp_dir is not None:
                unit.comp_dir = comp_dir

        if abbrev.tag in (Tag.COMPILE_UNIT, Tag.SUBPROGRAM):
            add_ranges(
                sections, base_address, is_bigendian, unit, pcrange.lowpc,
                pcrange, add_range,
            )
            if is_cu and pcrange.has_range():
                return

        if abbrev.has_children:
            _find_address_ranges(
                base_address, buf, sections, is_bigendian, altlink, unit, add_range
            )


def build_address_map(
    base_address: int,
    sections: DwarfSections,
    is_bigendian: bool,
    altlink: DwarfData | None = None,
) -> tuple[list[UnitAddrs], list[Unit]]:
    """Read .debug_info; return the unsorted address ranges and the units."""
    addrs: list[UnitAddrs] = []
    units: list[Unit] = []

    def adder(unit: Unit) -> Callable[[int, int], None]:
        def add(low: int, high: int) -> None:
            if addrs:
                last = addrs[-1]
                if last.unit is unit and low in (last.high, last.high + 1):
                    if high > last.high:
                        last.high = high
                    return
            addrs.append(UnitAddrs(low, high, unit))

        return add

    info = DwarfBuffer(".debug_info", sections.info, is_bigendian=is_bigendian)
    while info.left > 0:
        unit_start = info.offset
        length, is_dwarf64 = info.read_initial_length()
        unit_buf = info.sub(length)

        version = unit_buf.read_uint16()
        if version < 2 or version > 5:
            unit_buf.error("unrecognized DWARF version", -1)

        unit_type = 0
        if version >= 5:
            unit_type = unit_buf.read_byte()
            if unit_type in (UnitType.TYPE, UnitType.SPLIT_TYPE):
                continue

        addrsize = unit_buf.read_byte() if version >= 5 else 0
        abbrev_offset = unit_buf.read_offset(is_dwarf64)
        abbrevs = read_abbrevs(sections.abbrev, abbrev_offset, is_bigendian)
        if version < 5:
            addrsize = unit_buf.read_byte()
        if unit_type in (UnitType.SKELETON, UnitType.SPLIT_COMPILE):
            unit_buf.read_uint64()  # dwo_id

        unit = Unit(
            low_offset=unit_start,
            high_offset=info.offset,
            unit_data_start=unit_buf.offset,
            unit_data_len=unit_buf.left,
            unit_data_offset=unit_buf.offset - unit_start,
            version=version,
            is_dwarf64=is_dwarf64,
            addrsize=addrsize,
            abbrevs=abbrevs,
        )
        units.append(unit)

        _find_address_ranges(
            base_address, unit_buf, sections, is_bigendian, altlink, unit, adder(unit)
        )

    return addrs, units


def build_dwarf_data(
    base_address: int,
    sections: DwarfSections,
    is_bigendian: bool,
    altlink: DwarfData | None = None,
) -> DwarfData:
    """Build the sorted address map for one module's debug information."""
    addrs, units = build_address_map(base_address, sections, is_bigendian, altlink)
    # Nested ranges: the smallest sorts last among those with the same low.
    addrs.sort(key=lambda a: (a.low, -a.high, a.unit.lineoff))
    return DwarfData(
        sections=sections,
        is_bigendian=is_bigendian,
        base_address=base_address,
        addrs=addrs,
        units=units,
        altlink=altlink,
    )