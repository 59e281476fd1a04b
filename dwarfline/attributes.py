"""Reading attribute values and resolving indirect strings and addresses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .constants import Form
from .reader import DwarfBuffer, DwarfError, DwarfSections, cstring_at


class ValueEncoding(Enum):
    """How an attribute value is represented."""

    NONE = auto()
    ADDRESS = auto()
    ADDRESS_INDEX = auto()
    UINT = auto()
    SINT = auto()
    STRING = auto()
    STRING_INDEX = auto()
    REF_UNIT = auto()
    REF_INFO = auto()
    REF_ALT_INFO = auto()
    REF_SECTION = auto()
    REF_TYPE = auto()
    RNGLISTS_INDEX = auto()
    BLOCK = auto()
    EXPR = auto()


@dataclass(frozen=True)
class AttrValue:
    """An attribute value; ``value`` is None for blocks and expressions."""

    encoding: ValueEncoding
    value: int | str | None = None


_INDEX_READERS = {
    Form.STRX: DwarfBuffer.read_uleb128,
    Form.STRX1: DwarfBuffer.read_byte,
    Form.STRX2: DwarfBuffer.read_uint16,
    Form.STRX3: DwarfBuffer.read_uint24,
    Form.STRX4: DwarfBuffer.read_uint32,
    Form.ADDRX: DwarfBuffer.read_uleb128,
    Form.ADDRX1: DwarfBuffer.read_byte,
    Form.ADDRX2: DwarfBuffer.read_uint16,
    Form.ADDRX3: DwarfBuffer.read_uint24,
    Form.ADDRX4: DwarfBuffer.read_uint32,
}

_STRX_FORMS = {Form.STRX, Form.STRX1, Form.STRX2, Form.STRX3, Form.STRX4}


def _string_at(strings: bytes, offset: int, buf: DwarfBuffer, what: str) -> AttrValue:
    if offset >= len(strings):
        buf.error(f"{what} out of range", 0)
    return AttrValue(ValueEncoding.STRING, cstring_at(strings, offset))


def read_attribute(
    form: int,
    implicit_val: int,
    buf: DwarfBuffer,
    is_dwarf64: bool,
    version: int,
    addrsize: int,
    sections: DwarfSections,
    altlink: Any,
) -> AttrValue:
    """Read one attribute value of ``form`` from ``buf``.

    ``altlink`` is the data of a supplementary debug file, exposing a
    ``sections`` attribute, or None when there is none.
    """
    V = ValueEncoding
    if form in _INDEX_READERS:
        index = _INDEX_READERS[form](buf)
        encoding = V.STRING_INDEX if form in _STRX_FORMS else V.ADDRESS_INDEX
        return AttrValue(encoding, index)

    match form:
        case Form.ADDR:
            return AttrValue(V.ADDRESS, buf.read_address(addrsize))
        case Form.BLOCK2:
            buf.advance(buf.read_uint16())
            return AttrValue(V.BLOCK)
        case Form.BLOCK4:
            buf.advance(buf.read_uint32())
            return AttrValue(V.BLOCK)
        case Form.DATA2:
            return AttrValue(V.UINT, buf.read_uint16())
        case Form.DATA4:
            return AttrValue(V.UINT, buf.read_uint32())
        case Form.DATA8:
            return AttrValue(V.UINT, buf.read_uint64())
        case Form.DATA16:
            buf.advance(16)
            return AttrValue(V.BLOCK)
        case Form.STRING:
            return AttrValue(V.STRING, buf.read_string())
        case Form.BLOCK:
            buf.advance(buf.read_uleb128())
            return AttrValue(V.BLOCK)
        case Form.BLOCK1:
            buf.advance(buf.read_byte())
            return AttrValue(V.BLOCK)
        case Form.DATA1 | Form.FLAG:
            return AttrValue(V.UINT, buf.read_byte())
        case Form.SDATA:
            return AttrValue(V.SINT, buf.read_sleb128())
        case Form.STRP:
            offset = buf.read_offset(is_dwarf64)
            return _string_at(sections.strings, offset, buf, "DW_FORM_strp")
        case Form.LINE_STRP:
            offset = buf.read_offset(is_dwarf64)
            return _string_at(sections.line_str, offset, buf, "DW_FORM_line_strp")
        case Form.UDATA:
            return AttrValue(V.UINT, buf.read_uleb128())
        case Form.REF_ADDR:
            if version == 2:
                return AttrValue(V.REF_INFO, buf.read_address(addrsize))
            return AttrValue(V.REF_INFO, buf.read_offset(is_dwarf64))
        case Form.REF1:
            return AttrValue(V.REF_UNIT, buf.read_byte())
        case Form.REF2:
            return AttrValue(V.REF_UNIT, buf.read_uint16())
        case Form.REF4:
            return AttrValue(V.REF_UNIT, buf.read_uint32())
        case Form.REF8:
            return AttrValue(V.REF_UNIT, buf.read_uint64())
        case Form.REF_UDATA:
            return AttrValue(V.REF_UNIT, buf.read_uleb128())
        case Form.INDIRECT:
            real_form = buf.read_uleb128()
            if real_form == Form.IMPLICIT_CONST:
                buf.error("DW_FORM_indirect to DW_FORM_implicit_const", 0)
            return read_attribute(
                real_form, 0, buf, is_dwarf64, version, addrsize, sections, altlink
            )
        case Form.SEC_OFFSET:
            return AttrValue(V.REF_SECTION, buf.read_offset(is_dwarf64))
        case Form.EXPRLOC:
            buf.advance(buf.read_uleb128())
            return AttrValue(V.EXPR)
        case Form.FLAG_PRESENT:
            return AttrValue(V.UINT, 1)
        case Form.REF_SIG8:
            return AttrValue(V.REF_TYPE, buf.read_uint64())
        case Form.REF_SUP4:
            return AttrValue(V.REF_SECTION, buf.read_uint32())
        case Form.REF_SUP8:
            return AttrValue(V.REF_SECTION, buf.read_uint64())
        case Form.IMPLICIT_CONST:
            return AttrValue(V.UINT, implicit_val)
        case Form.LOCLISTX:
            return AttrValue(V.REF_SECTION, buf.read_uleb128())
        case Form.RNGLISTX:
            return AttrValue(V.RNGLISTS_INDEX, buf.read_uleb128())
        case Form.GNU_ADDR_INDEX | Form.GNU_STR_INDEX:
            return AttrValue(V.REF_SECTION, buf.read_uleb128())
        case Form.GNU_REF_ALT:
            offset = buf.read_offset(is_dwarf64)
            if altlink is None:
                return AttrValue(V.NONE)
            return AttrValue(V.REF_ALT_INFO, offset)
        case Form.STRP_SUP | Form.GNU_STRP_ALT:
            offset = buf.read_offset(is_dwarf64)
            if altlink is None:
                return AttrValue(V.NONE)
            return _string_at(altlink.sections.strings, offset, buf, "DW_FORM_strp_sup")
    buf.error("unrecognized DWARF form", -1)
    raise AssertionError("unreachable")


def resolve_string(
    sections: DwarfSections,
    is_dwarf64: bool,
    is_bigendian: bool,
    str_offsets_base: int,
    val: AttrValue,
) -> str | None:
    """Return the string ``val`` denotes, or None if it is not a string."""
    if val.encoding is ValueEncoding.STRING:
        return val.value  # type: ignore[return-value]
    if val.encoding is not ValueEncoding.STRING_INDEX:
        return None
    width = 8 if is_dwarf64 else 4
    offset = val.value * width + str_offsets_base  # type: ignore[operator]
    if offset + width > len(sections.str_offsets):
        raise DwarfError("DW_FORM_strx value out of range", 0)
    buf = DwarfBuffer(
        ".debug_str_offsets", sections.str_offsets, offset, is_bigendian=is_bigendian
    )
    str_offset = buf.read_offset(is_dwarf64)
    if str_offset >= len(sections.strings):
        buf.error("DW_FORM_strx offset out of range", 0)
    return cstring_at(sections.strings, str_offset)


def resolve_addr_index(
    sections: DwarfSections,
    addr_base: int,
    addrsize: int,
    is_bigendian: bool,
    addr_index: int,
) -> int:
    """Return the address stored at ``addr_index`` in .debug_addr."""
    offset = addr_index * addrsize + addr_base
    if offset + addrsize > len(sections.addr):
        raise DwarfError("DW_FORM_addrx value out of range", 0)
    buf = DwarfBuffer(".debug_addr", sections.addr, offset, is_bigendian=is_bigendian)
    return buf.read_address(addrsize)