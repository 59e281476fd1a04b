import struct

import pytest

from dwarfline.abbrev import Attr
from dwarfline.attributes import AttrValue, ValueEncoding
from dwarfline.constants import Attribute, Form
from dwarfline.names import read_referenced_name, read_referenced_name_from_attr
from dwarfline.reader import DwarfError, DwarfSections
from dwarfline.units import build_dwarf_data

HEADER_SIZE = 11

ABBREV = bytes([
    1, 0x11, 1, 0x03, 0x08, 0x11, 0x01, 0x12, 0x06, 0, 0,
    2, 0x2E, 1, 0x03, 0x08, 0x11, 0x01, 0x12, 0x06, 0, 0,
    3, 0x1D, 0, 0x31, 0x13, 0x11, 0x01, 0x12, 0x06, 0x58, 0x0B, 0x59, 0x0B, 0, 0,
    4, 0x2E, 0, 0x03, 0x08, 0x20, 0x0B, 0, 0,
    5, 0x2E, 0, 0x6E, 0x08, 0x03, 0x08, 0x11, 0x01, 0x12, 0x06, 0, 0,
    6, 0x2E, 0, 0x47, 0x13, 0, 0,
    0,
])


def _die(code, *parts):
    return bytes([code]) + b"".join(parts)


def _str(text):
    return text.encode() + b"\0"


def _addr(value):
    return struct.pack("<Q", value)


def _d4(value):
    return struct.pack("<I", value)


def _build():
    body = bytearray()
    offsets = {}

    def emit(key, data):
        offsets[key] = HEADER_SIZE + len(body)
        body.extend(data)

    emit("cu", _die(1, _str("a.c"), _addr(0x1000), _d4(0x100)))
    emit("abstract", _die(4, _str("inl"), bytes([1])))
    emit("outer", _die(2, _str("outer"), _addr(0x1000), _d4(0x80)))
    emit("inlined", _die(3, _d4(offsets["abstract"]), _addr(0x1010), _d4(0x10),
                         bytes([2, 7])))
    emit("end_outer", b"\0")
    emit("other", _die(5, _str("_Z5other"), _str("other"), _addr(0x1080), _d4(0x20)))
    emit("spec", _die(6, _d4(offsets["abstract"])))
    emit("end_cu", b"\0")
    unit = struct.pack("<HIB", 4, 0, 8) + bytes(body)
    info = struct.pack("<I", len(unit)) + unit
    ddata = build_dwarf_data(0, DwarfSections(info=info, abbrev=ABBREV), False)
    return ddata, offsets


def test_plain_name():
    ddata, offsets = _build()
    assert read_referenced_name(ddata, ddata.units[0], offsets["abstract"]) == "inl"


def test_linkage_name_preferred():
    ddata, offsets = _build()
    assert read_referenced_name(ddata, ddata.units[0], offsets["other"]) == "_Z5other"


def test_name_through_specification():
    ddata, offsets = _build()
    assert read_referenced_name(ddata, ddata.units[0], offsets["spec"]) == "inl"


def test_offset_before_unit_data():
    ddata, _ = _build()
    with pytest.raises(DwarfError, match="out of range"):
        read_referenced_name(ddata, ddata.units[0], 0)


def test_offset_past_unit_data():
    ddata, _ = _build()
    unit = ddata.units[0]
    with pytest.raises(DwarfError, match="out of range"):
        read_referenced_name(ddata, unit, unit.unit_data_offset + unit.unit_data_len)


def test_offset_at_terminator():
    ddata, offsets = _build()
    with pytest.raises(DwarfError, match="invalid abstract origin"):
        read_referenced_name(ddata, ddata.units[0], offsets["end_outer"])


def test_offset_inside_string_gives_bad_code():
    ddata, offsets = _build()
    with pytest.raises(DwarfError, match="invalid abbreviation code"):
        read_referenced_name(ddata, ddata.units[0], offsets["cu"] + 1)


def test_from_attr_unit_reference():
    ddata, offsets = _build()
    attr = Attr(Attribute.ABSTRACT_ORIGIN, Form.REF4)
    val = AttrValue(ValueEncoding.REF_UNIT, offsets["abstract"])
    assert read_referenced_name_from_attr(ddata, ddata.units[0], attr, val) == "inl"


def test_from_attr_info_reference():
    ddata, offsets = _build()
    unit = ddata.units[0]
    attr = Attr(Attribute.SPECIFICATION, Form.REF_ADDR)
    val = AttrValue(ValueEncoding.REF_INFO, unit.low_offset + offsets["other"])
    assert read_referenced_name_from_attr(ddata, unit, attr, val) == "_Z5other"


def test_from_attr_info_reference_outside_units():
    ddata, _ = _build()
    unit = ddata.units[0]
    attr = Attr(Attribute.SPECIFICATION, Form.REF_ADDR)
    val = AttrValue(ValueEncoding.REF_INFO, unit.high_offset + 100)
    assert read_referenced_name_from_attr(ddata, unit, attr, val) is None


def test_from_attr_ignores_other_attributes():
    ddata, offsets = _build()
    attr = Attr(Attribute.NAME, Form.REF4)
    val = AttrValue(ValueEncoding.REF_UNIT, offsets["abstract"])
    assert read_referenced_name_from_attr(ddata, ddata.units[0], attr, val) is None


def test_from_attr_ignores_type_signatures():
    ddata, offsets = _build()
    attr = Attr(Attribute.ABSTRACT_ORIGIN, Form.REF_SIG8)
    val = AttrValue(ValueEncoding.REF_TYPE, offsets["abstract"])
    assert read_referenced_name_from_attr(ddata, ddata.units[0], attr, val) is None


def test_from_attr_alt_reference_without_altlink():
    ddata, offsets = _build()
    attr = Attr(Attribute.ABSTRACT_ORIGIN, Form.GNU_REF_ALT)
    val = AttrValue(ValueEncoding.REF_ALT_INFO, offsets["abstract"])
    assert read_referenced_name_from_attr(ddata, ddata.units[0], attr, val) is None