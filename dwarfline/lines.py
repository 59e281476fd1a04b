"""The line number program: mapping PCs to file names and lines."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .constants import ExtendedLineOp, LineOp
from .lineheader import LineHeader, join_path, read_line_header
from .reader import DwarfBuffer, DwarfError

_UINT64_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class Line:
    """A PC and the file and line it belongs to, up to the next entry's PC."""

    pc: int
    filename: str | None
    lineno: int


def read_line_program(
    ddata: Any, header: LineHeader, line_buf: DwarfBuffer
) -> list[Line]:
    """Run the line program in ``line_buf``; return its rows in program order.

    The module's base address is added to every PC.
    """
    lines: list[Line] = []
    base_address = ddata.base_address

    reset_filename = header.filenames[1] if len(header.filenames) > 1 else ""
    address = 0
    op_index = 0
    filename = reset_filename
    lineno = 1

    def add_line() -> None:
        line = Line((address + base_address) & _UINT64_MASK, filename, lineno)
        # Discriminators can repeat a row; keep only one.
        if lines and lines[-1] == line:
            return
        lines.append(line)

    def step(operation_advance: int) -> tuple[int, int]:
        if header.max_ops_per_insn == 0:
            line_buf.error("zero maximum operations per instruction", 0)
        total = op_index + operation_advance
        new_address = (
            address + header.min_insn_len * total // header.max_ops_per_insn
        ) & _UINT64_MASK
        return new_address, total % header.max_ops_per_insn

    def line_range() -> int:
        if header.line_range == 0:
            line_buf.error("zero line range in line number program", 0)
        return header.line_range

    while line_buf.left > 0:
        op = line_buf.read_byte()
        if op >= header.opcode_base:
            op -= header.opcode_base
            address, op_index = step(op // line_range())
            lineno += header.line_base + op % line_range()
            add_line()
        elif op == LineOp.EXTENDED_OP:
            length = line_buf.read_uleb128()
            ext = line_buf.read_byte()
            match ext:
                case ExtendedLineOp.END_SEQUENCE:
                    address = 0
                    op_index = 0
                    filename = reset_filename
                    lineno = 1
                case ExtendedLineOp.SET_ADDRESS:
                    address = line_buf.read_address(header.addrsize)
                case ExtendedLineOp.DEFINE_FILE:
                    name = line_buf.read_string()
                    dir_index = line_buf.read_uleb128()
                    line_buf.read_uleb128()
                    line_buf.read_uleb128()
                    if name.startswith("/"):
                        filename = name
                    elif dir_index < len(header.dirs):
                        filename = join_path(header.dirs[dir_index], name)
                    else:
                        line_buf.error(
                            "invalid directory index in line number program", 0
                        )
                case ExtendedLineOp.SET_DISCRIMINATOR:
                    line_buf.read_uleb128()
                case _:
                    line_buf.advance(length - 1)
        else:
            match op:
                case LineOp.COPY:
                    add_line()
                case LineOp.ADVANCE_PC:
                    address, op_index = step(line_buf.read_uleb128())
                case LineOp.ADVANCE_LINE:
                    lineno += line_buf.read_sleb128()
                case LineOp.SET_FILE:
                    fileno = line_buf.read_uleb128()
                    if fileno >= len(header.filenames):
                        line_buf.error(
                            "invalid file number in line number program", 0
                        )
                    filename = header.filenames[fileno]
                case LineOp.SET_COLUMN | LineOp.SET_ISA:
                    line_buf.read_uleb128()
                case (
                    LineOp.NEGATE_STMT
                    | LineOp.SET_BASIC_BLOCK
                    | LineOp.SET_PROLOGUE_END
                    | LineOp.SET_EPILOGUE_BEGIN
                ):
                    pass
                case LineOp.CONST_ADD_PC:
                    address, op_index = step((255 - header.opcode_base) // line_range())
                case LineOp.FIXED_ADVANCE_PC:
                    address = (address + line_buf.read_uint16()) & _UINT64_MASK
                    op_index = 0
                case _:
                    for _ in range(header.opcode_lengths[op - 1]):
                        line_buf.read_uleb128()
    return lines


def read_line_info(ddata: Any, unit: Any) -> tuple[LineHeader, list[Line]]:
    """Read the line table of ``unit``; return its header and rows sorted by PC.

    An empty list means the unit has no useful line information.
    """
    data = ddata.sections.line
    if not 0 <= unit.lineoff < len(data):
        raise DwarfError("unit line offset out of range", 0)
    buf = DwarfBuffer(
        ".debug_line", data, unit.lineoff, is_bigendian=ddata.is_bigendian
    )
    length, is_dwarf64 = buf.read_initial_length()
    line_buf = buf.sub(length)
    header = read_line_header(ddata, unit, is_dwarf64, line_buf)
    lines = read_line_program(ddata, header, line_buf)
    lines.sort(key=lambda line: line.pc)
    return header, lines


def find_line(lines: Sequence[Line], pc: int) -> Line | None:
    """Return the row covering ``pc`` in PC-sorted ``lines``, or None.

    Of several rows with the same PC, the last one is returned.
    """
    if not lines or pc >= _UINT64_MASK:
        return None
    index = bisect_right(lines, pc, key=lambda line: line.pc) - 1
    return lines[index] if index >= 0 else None