"""Functions of a unit and the address ranges they cover."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Any

from .attributes import ValueEncoding, read_attribute, resolve_addr_index, resolve_string
from .constants import Attribute, Tag
from .names import read_referenced_name_from_attr
from .ranges import PcRange, add_ranges
from .reader import DwarfBuffer

_FUNCTION_TAGS = (Tag.SUBPROGRAM, Tag.ENTRY_POINT, Tag.INLINED_SUBROUTINE)


@dataclass(eq=False)
class Function:
    """A function from the debug information.

    For an inlined function, ``caller_filename`` and ``caller_lineno`` give
    the call site. ``function_addrs`` maps PC ranges to functions inlined
    into this one, sorted as :func:`read_function_info` sorts.
    """

    name: str | None = None
    caller_filename: str | None = None
    caller_lineno: int = 0
    function_addrs: list[FunctionAddrs] = field(default_factory=list)


@dataclass(eq=False)
class FunctionAddrs:
    """An address range ``low <= pc < high`` belonging to a function."""

    low: int
    high: int
    function: Function


def _sort_key(addrs: FunctionAddrs) -> tuple[int, int, str]:
    # Nested ranges: the smallest sorts last among those with the same low.
    return (addrs.low, -addrs.high, addrs.function.name or "")


def _add_function_range(
    vec: list[FunctionAddrs], function: Function, low: int, high: int
) -> None:
    if vec:
        last = vec[-1]
        if last.function is function and low in (last.high, last.high + 1):
            if high > last.high:
                last.high = high
            return
    vec.append(FunctionAddrs(low, high, function))


def _read_function_entry(
    ddata: Any,
    unit: Any,
    base: int,
    buf: DwarfBuffer,
    header: Any,
    vec_function: list[FunctionAddrs],
    vec_inlined: list[FunctionAddrs],
) -> None:
    V = ValueEncoding
    while buf.left > 0:
        code = buf.read_uleb128()
        if code == 0:
            return
        abbrev = unit.abbrevs.lookup(code)
        vec = vec_inlined if abbrev.tag == Tag.INLINED_SUBROUTINE else vec_function
        function = Function() if abbrev.tag in _FUNCTION_TAGS else None

        pcrange = PcRange()
        have_linkage_name = False
        for attr in abbrev.attrs:
            val = read_attribute(
                attr.form, attr.val, buf, unit.is_dwarf64, unit.version,
                unit.addrsize, ddata.sections, ddata.altlink,
            )

            # The compile unit sets the base address for range lists below it.
            if abbrev.tag == Tag.COMPILE_UNIT and attr.name == Attribute.LOW_PC:
                if val.encoding is V.ADDRESS:
                    base = val.value  # type: ignore[assignment]
                elif val.encoding is V.ADDRESS_INDEX:
                    base = resolve_addr_index(
                        ddata.sections, unit.addr_base, unit.addrsize,
                        ddata.is_bigendian, val.value,
                    )

            if function is None:
                continue

            match attr.name:
                case Attribute.CALL_FILE:
                    if val.encoding is V.UINT:
                        if val.value >= len(header.filenames):  # type: ignore[operator]
                            buf.error(
                                "invalid file number in DW_AT_call_file attribute", 0
                            )
                        function.caller_filename = header.filenames[val.value]  # type: ignore[index]
                case Attribute.CALL_LINE:
                    if val.encoding is V.UINT:
                        function.caller_lineno = val.value  # type: ignore[assignment]
                case Attribute.ABSTRACT_ORIGIN | Attribute.SPECIFICATION:
                    if not have_linkage_name:
                        name = read_referenced_name_from_attr(ddata, unit, attr, val)
                        if name is not None:
                            function.name = name
                case Attribute.NAME:
                    if function.name is None:
                        function.name = resolve_string(
                            ddata.sections, unit.is_dwarf64, ddata.is_bigendian,
                            unit.str_offsets_base, val,
                        )
                case Attribute.LINKAGE_NAME | Attribute.MIPS_LINKAGE_NAME:
                    linkage = resolve_string(
                        ddata.sections, unit.is_dwarf64, ddata.is_bigendian,
                        unit.str_offsets_base, val,
                    )
                    if linkage is not None:
                        function.name = linkage
                        have_linkage_name = True
                case Attribute.LOW_PC | Attribute.HIGH_PC | Attribute.RANGES:
                    pcrange.update(attr, val)

        # A function without a name or without addresses is of no use.
        if function is not None and (function.name is None or not pcrange.has_range()):
            function = None

        if function is not None:
            add_ranges(
                ddata.sections, ddata.base_address, ddata.is_bigendian, unit,
                base, pcrange, partial(_add_function_range, vec, function),
            )

        if abbrev.has_children:
            if function is None:
                _read_function_entry(
                    ddata, unit, base, buf, header, vec_function, vec_inlined
                )
            else:
                inlined: list[FunctionAddrs] = []
                _read_function_entry(
                    ddata, unit, base, buf, header, vec_function, inlined
                )
                if inlined:
                    inlined.sort(key=_sort_key)
                    function.function_addrs = inlined


def read_function_info(ddata: Any, header: Any, unit: Any) -> list[FunctionAddrs]:
    """Return the address ranges of the functions in ``unit``, sorted by low PC.

    ``header`` is the unit's line header, used to resolve call-site file
    numbers. Ranges with the same low PC have the smallest last.
    """
    buf = DwarfBuffer(
        ".debug_info",
        ddata.sections.info,
        unit.unit_data_start,
        unit.unit_data_start + unit.unit_data_len,
        is_bigendian=ddata.is_bigendian,
    )
    addrs: list[FunctionAddrs] = []
    while buf.left > 0:
        _read_function_entry(ddata, unit, 0, buf, header, addrs, addrs)
    addrs.sort(key=_sort_key)
    return addrs