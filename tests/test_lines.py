import struct

import pytest

from dwarfline.abbrev import Abbrevs
from dwarfline.lines import Line, find_line, read_line_info
from dwarfline.reader import DwarfError, DwarfSections
from dwarfline.units import DwarfData, Unit

OPCODE_LENGTHS = bytes([0, 1, 1, 1, 1, 0, 0, 0, 1, 0, 0, 1])
LINE_BASE = -5
LINE_RANGE = 14
OPCODE_BASE = 13
START = 0x1000
MAIN = "/work/main.c"


def uleb(value):
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def sleb(value):
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if (value == 0 and not byte & 0x40) or (value == -1 and byte & 0x40):
            out.append(byte)
            return bytes(out)
        out.append(byte | 0x80)


def set_address(addr):
    return b"\x00" + uleb(9) + b"\x02" + addr.to_bytes(8, "little")


END_SEQUENCE = b"\x00\x01\x01"
COPY = b"\x01"


def advance_pc(n):
    return b"\x02" + uleb(n)


def advance_line(n):
    return b"\x03" + sleb(n)


def set_file(n):
    return b"\x04" + uleb(n)


def define_file(name, dir_index):
    payload = b"\x03" + name.encode() + b"\0" + uleb(dir_index) + uleb(0) + uleb(0)
    return b"\x00" + uleb(len(payload)) + payload


def line_section(program, dirs=("inc",), files=(("main.c", 0),)):
    header = bytes([1, 1, 1, LINE_BASE & 0xFF, LINE_RANGE, OPCODE_BASE]) + OPCODE_LENGTHS
    header += b"".join(d.encode() + b"\0" for d in dirs) + b"\0"
    header += b"".join(
        n.encode() + b"\0" + uleb(i) + uleb(0) + uleb(0) for n, i in files
    ) + b"\0"
    body = struct.pack("<H", 4) + struct.pack("<I", len(header)) + header + program
    return struct.pack("<I", len(body)) + body


def make_unit(lineoff=0):
    return Unit(
        low_offset=0,
        high_offset=0,
        unit_data_start=0,
        unit_data_len=0,
        unit_data_offset=0,
        version=4,
        is_dwarf64=False,
        addrsize=8,
        abbrevs=Abbrevs(),
        lineoff=lineoff,
        filename="main.c",
        comp_dir="/work",
    )


def read_lines(program, base_address=0, **kwargs):
    ddata = DwarfData(
        sections=DwarfSections(line=line_section(program, **kwargs)),
        is_bigendian=False,
        base_address=base_address,
        addrs=[],
        units=[],
    )
    return read_line_info(ddata, make_unit())


def test_basic_program():
    program = (
        set_address(START) + advance_line(9) + COPY
        + advance_pc(4) + advance_line(2) + COPY + END_SEQUENCE
    )
    header, lines = read_lines(program)
    assert header.filenames[1] == MAIN
    assert lines == [
        Line(START, MAIN, 1 + 9),
        Line(START + 4, MAIN, 1 + 9 + 2),
    ]


def test_special_opcode():
    opcode = (1 - LINE_BASE) + LINE_RANGE * 2 + OPCODE_BASE
    _, lines = read_lines(set_address(START) + bytes([opcode]) + END_SEQUENCE)
    assert lines == [Line(START + 2, MAIN, 1 + 1)]


def test_base_address_added():
    base = 0x400000
    _, lines = read_lines(set_address(START) + COPY, base_address=base)
    assert [line.pc for line in lines] == [START + base]


def test_repeated_row_kept_once():
    _, lines = read_lines(set_address(START) + COPY + COPY)
    assert len(lines) == 1


def test_rows_sorted_by_pc():
    program = (
        set_address(START + 0x100) + COPY + END_SEQUENCE
        + set_address(START) + COPY + END_SEQUENCE
    )
    _, lines = read_lines(program)
    pcs = [line.pc for line in lines]
    assert pcs == sorted(pcs)
    assert pcs[0] == START


def test_end_sequence_resets_state():
    program = set_address(START) + advance_line(5) + END_SEQUENCE + COPY
    _, lines = read_lines(program)
    assert lines == [Line(0, MAIN, 1)]


def test_fixed_advance_pc():
    program = set_address(START) + b"\x09" + struct.pack("<H", 0x20) + COPY
    _, lines = read_lines(program)
    assert lines[0].pc == START + 0x20


def test_set_file():
    program = set_address(START) + set_file(2) + COPY
    _, lines = read_lines(program, files=(("main.c", 0), ("a.h", 1)))
    assert lines[0].filename == "inc/a.h"


def test_set_file_out_of_range():
    with pytest.raises(DwarfError, match="invalid file number"):
        read_lines(set_file(7))


def test_define_file():
    program = (
        set_address(START) + define_file("gen.c", 1) + COPY
        + define_file("/abs/x.c", 1) + advance_pc(1) + COPY
    )
    _, lines = read_lines(program)
    assert [line.filename for line in lines] == ["inc/gen.c", "/abs/x.c"]


def test_define_file_bad_directory():
    with pytest.raises(DwarfError, match="invalid directory index"):
        read_lines(define_file("gen.c", 9))


def test_unknown_extended_op_skipped():
    program = set_address(START) + b"\x00" + uleb(3) + b"\x80ab" + COPY
    _, lines = read_lines(program)
    assert lines == [Line(START, MAIN, 1)]


def test_empty_program_has_no_rows():
    _, lines = read_lines(b"")
    assert lines == []


def test_line_offset_out_of_range():
    ddata = DwarfData(
        sections=DwarfSections(line=line_section(b"")),
        is_bigendian=False,
        base_address=0,
        addrs=[],
        units=[],
    )
    with pytest.raises(DwarfError, match="unit line offset out of range"):
        read_line_info(ddata, make_unit(lineoff=10_000))


def test_find_line():
    lines = [Line(0x10, "a", 1), Line(0x20, "a", 2), Line(0x20, "a", 3)]
    assert find_line(lines, 0x1F) == lines[0]
    assert find_line(lines, 0x20) == lines[2]
    assert find_line(lines, 0x5000) == lines[2]
    assert find_line(lines, 0x5) is None
    assert find_line(lines, (1 << 64) - 1) is None
    assert find_line([], 0x10) is None