"""Names of entries reached through abstract origins and specifications."""

from __future__ import annotations

from typing import Any

from .attributes import AttrValue, ValueEncoding, read_attribute, resolve_string
from .constants import Attribute, Form
from .reader import DwarfBuffer, DwarfError
from .units import find_unit

_REFERRING_ATTRIBUTES = (Attribute.ABSTRACT_ORIGIN, Attribute.SPECIFICATION)
_LINKAGE_ATTRIBUTES = (Attribute.LINKAGE_NAME, Attribute.MIPS_LINKAGE_NAME)


def read_referenced_name_from_attr(
    ddata: Any, unit: Any, attr: Any, val: AttrValue
) -> str | None:
    """Return the name of the entry an origin or specification attribute refers to.

    Returns None for other attributes, for type signatures and for
    references that lead to no known unit.
    """
    if attr.name not in _REFERRING_ATTRIBUTES:
        return None
    if attr.form == Form.REF_SIG8:
        return None

    V = ValueEncoding
    if val.encoding is V.REF_INFO:
        target = find_unit(ddata.units, val.value)
        if target is None:
            return None
        return read_referenced_name(ddata, target, val.value - target.low_offset)

    if val.encoding in (V.UINT, V.REF_UNIT):
        return read_referenced_name(ddata, unit, val.value)

    if val.encoding is V.REF_ALT_INFO:
        altlink = ddata.altlink
        if altlink is None:
            return None
        target = find_unit(altlink.units, val.value)
        if target is None:
            return None
        return read_referenced_name(altlink, target, val.value - target.low_offset)

    return None


def read_referenced_name(ddata: Any, unit: Any, offset: int) -> str | None:
    """Return the name of the entry at ``offset`` from the start of ``unit``.

    A linkage name is preferred, then a name found through a
    specification, then the plain name.
    """
    if (
        offset < unit.unit_data_offset
        or offset - unit.unit_data_offset >= unit.unit_data_len
    ):
        raise DwarfError("abstract origin or specification out of range", 0)

    position = unit.unit_data_start + offset - unit.unit_data_offset
    buf = DwarfBuffer(
        ".debug_info",
        ddata.sections.info,
        position,
        unit.unit_data_start + unit.unit_data_len,
        is_bigendian=ddata.is_bigendian,
    )

    code = buf.read_uleb128()
    if code == 0:
        buf.error("invalid abstract origin or specification", 0)
    abbrev = unit.abbrevs.lookup(code)

    name: str | None = None
    for attr in abbrev.attrs:
        val = read_attribute(
            attr.form, attr.val, buf, unit.is_dwarf64, unit.version,
            unit.addrsize, ddata.sections, ddata.altlink,
        )
        if attr.name == Attribute.NAME:
            if name is None:
                name = resolve_string(
                    ddata.sections, unit.is_dwarf64, ddata.is_bigendian,
                    unit.str_offsets_base, val,
                )
        elif attr.name in _LINKAGE_ATTRIBUTES:
            linkage = resolve_string(
                ddata.sections, unit.is_dwarf64, ddata.is_bigendian,
                unit.str_offsets_base, val,
            )
            if linkage is not None:
                return linkage
        elif attr.name == Attribute.SPECIFICATION:
            specified = read_referenced_name_from_attr(ddata, unit, attr, val)
            if specified is not None:
                name = specified
    return name