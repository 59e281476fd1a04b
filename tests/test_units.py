import struct

import pytest

from dwarfline.constants import Attribute, Form, Tag
from dwarfline.reader import DwarfError, DwarfSections
from dwarfline.units import build_address_map, build_dwarf_data, find_unit


def _uleb(value):
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _spec(name, form):
    return _uleb(name) + _uleb(form)


ABBREV = (
    _uleb(1) + _uleb(Tag.COMPILE_UNIT) + b"\x01"
    + _spec(Attribute.NAME, Form.STRING)
    + _spec(Attribute.COMP_DIR, Form.STRING)
    + _spec(Attribute.STMT_LIST, Form.SEC_OFFSET)
    + _spec(Attribute.LOW_PC, Form.ADDR)
    + _spec(Attribute.HIGH_PC, Form.DATA4)
    + b"\0\0"
    + _uleb(2) + _uleb(Tag.SUBPROGRAM) + b"\x00"
    + _spec(Attribute.NAME, Form.STRING)
    + _spec(Attribute.LOW_PC, Form.ADDR)
    + _spec(Attribute.HIGH_PC, Form.DATA4)
    + b"\0\0"
    + _uleb(3) + _uleb(Tag.COMPILE_UNIT) + b"\x01"
    + _spec(Attribute.NAME, Form.STRING)
    + b"\0\0"
    + b"\0"
)


def _cstr(text):
    return text.encode() + b"\0"


def _unit_v4(body):
    content = struct.pack("<HIB", 4, 0, 8) + body
    return struct.pack("<I", len(content)) + content


def _unit_v5(body, unit_type=1):
    content = struct.pack("<HBBI", 5, unit_type, 8, 0) + body
    return struct.pack("<I", len(content)) + content


def _cu(name, comp_dir, lineoff, low, length):
    return (_uleb(1) + _cstr(name) + _cstr(comp_dir)
            + struct.pack("<IQI", lineoff, low, length) + b"\0")


def _sub(name, low, length):
    return _uleb(2) + _cstr(name) + struct.pack("<QI", low, length)


def _cu_with_subs(name, subs):
    return _uleb(3) + _cstr(name) + b"".join(subs) + b"\0"


def _sections(info):
    return DwarfSections(info=info, abbrev=ABBREV)


def test_single_unit_fields():
    low, length, lineoff = 0x1000, 0x100, 0x40
    info = _unit_v4(_cu("a.c", "/src", lineoff, low, length))
    addrs, units = build_address_map(0, _sections(info), False, None)
    assert len(units) == 1
    unit = units[0]
    assert (unit.filename, unit.comp_dir, unit.lineoff) == ("a.c", "/src", lineoff)
    assert (unit.version, unit.addrsize, unit.is_dwarf64) == (4, 8, False)
    assert unit.low_offset == 0 and unit.high_offset == len(info)
    assert unit.unit_data_offset == 11
    assert unit.unit_data_start + unit.unit_data_len == len(info)
    assert [(a.low, a.high, a.unit) for a in addrs] == [(low, low + length, unit)]


def test_base_address_is_added():
    low, length, base_address = 0x1000, 0x10, 0x7F0000
    info = _unit_v4(_cu("a.c", "/src", 0, low, length))
    addrs, _ = build_address_map(base_address, _sections(info), False, None)
    assert [(a.low, a.high) for a in addrs] == [
        (base_address + low, base_address + low + length)
    ]


def test_subprogram_ranges_merge_when_adjacent():
    info = _unit_v4(_cu_with_subs("b.c", [
        _sub("f", 0x1000, 0x10),
        _sub("g", 0x1010, 0x20),
        _sub("h", 0x2000, 0x8),
    ]))
    addrs, units = build_address_map(0, _sections(info), False, None)
    assert units[0].filename == "b.c"
    assert [(a.low, a.high) for a in addrs] == [
        (0x1000, 0x1010 + 0x20),
        (0x2000, 0x2000 + 0x8),
    ]
    assert all(a.unit is units[0] for a in addrs)


def test_version5_header():
    info = _unit_v5(_cu("c.c", "/d", 0, 0x10, 0x10))
    _, units = build_address_map(0, _sections(info), False, None)
    assert units[0].version == 5
    assert units[0].unit_data_offset == 12


def test_type_units_are_skipped():
    info = _unit_v5(b"\0" * 16, unit_type=2)
    addrs, units = build_address_map(0, _sections(info), False, None)
    assert (addrs, units) == ([], [])


def test_bad_version():
    content = struct.pack("<HIB", 7, 0, 8) + b"\0"
    info = struct.pack("<I", len(content)) + content
    with pytest.raises(DwarfError) as excinfo:
        build_address_map(0, _sections(info), False, None)
    assert excinfo.value.errnum == -1
    assert "unrecognized DWARF version" in str(excinfo.value)


def test_truncated_info():
    info = _unit_v4(_cu("a.c", "/src", 0, 0x10, 0x10))[:-6]
    with pytest.raises(DwarfError, match="underflow"):
        build_address_map(0, _sections(info), False, None)


def test_invalid_abbrev_code():
    info = _unit_v4(_uleb(9) + b"\0")
    with pytest.raises(DwarfError, match="invalid abbreviation code"):
        build_address_map(0, _sections(info), False, None)


def test_find_unit():
    info = (_unit_v4(_cu("a.c", "/s", 0, 0x10, 0x10))
            + _unit_v4(_cu("b.c", "/s", 0, 0x40, 0x10)))
    _, units = build_address_map(0, _sections(info), False, None)
    assert len(units) == 2
    assert units[0].high_offset == units[1].low_offset
    assert find_unit(units, 0) is units[0]
    assert find_unit(units, units[1].low_offset) is units[1]
    assert find_unit(units, units[1].high_offset - 1) is units[1]
    assert find_unit(units, units[1].high_offset) is None
    assert find_unit([], 0) is None


def test_build_dwarf_data_sorts_ranges():
    info = (_unit_v4(_cu("late.c", "/s", 0, 0x9000, 0x10))
            + _unit_v4(_cu("early.c", "/s", 0, 0x1000, 0x10)))
    sections = _sections(info)
    ddata = build_dwarf_data(0, sections, False, None)
    lows = [a.low for a in ddata.addrs]
    assert lows == sorted(lows)
    assert ddata.addrs[0].unit.filename == "early.c"
    assert ddata.sections is sections
    assert ddata.altlink is None
    assert [u.filename for u in ddata.units] == ["late.c", "early.c"]


def test_nested_ranges_sort_smallest_last():
    info = _unit_v4(_cu_with_subs("n.c", [
        _sub("inner", 0x1000, 0x8),
        _sub("outer", 0x1000, 0x80),
    ]))
    ddata = build_dwarf_data(0, _sections(info), False, None)
    assert len(ddata.addrs) == 2
    assert ddata.addrs[0].low == ddata.addrs[1].low
    assert ddata.addrs[0].high > ddata.addrs[1].high