"""The header of a unit's line number program."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .attributes import ValueEncoding, read_attribute, resolve_string
from .constants import LineContentType
from .reader import DwarfBuffer


@dataclass
class LineHeader:
    """What the line number program header says.

    ``dirs`` and ``filenames`` are indexed as the line program indexes them.
    For versions before 5, entry 0 of each is the unit's compilation
    directory and file name.
    """

    version: int
    addrsize: int
    min_insn_len: int = 1
    max_ops_per_insn: int = 1
    line_base: int = 0
    line_range: int = 1
    opcode_base: int = 1
    opcode_lengths: bytes = b""
    dirs: list[str | None] = field(default_factory=list)
    filenames: list[str | None] = field(default_factory=list)


def join_path(directory: str | None, name: str) -> str:
    """Join a directory and a file name with a slash; no directory keeps the name."""
    if directory is None:
        return name
    return f"{directory}/{name}"


def _is_absolute(path: str) -> bool:
    return path.startswith("/")


def _peek(buf: DwarfBuffer) -> int:
    buf.require(1)
    return buf.data[buf.offset]


def _read_v2_paths(
    unit: Any, buf: DwarfBuffer
) -> tuple[list[str | None], list[str | None]]:
    dirs: list[str | None] = [unit.comp_dir]
    while _peek(buf) != 0:
        dirs.append(buf.read_string())
    buf.advance(1)

    filenames: list[str | None] = [unit.filename]
    while _peek(buf) != 0:
        name = buf.read_string()
        dir_index = buf.read_uleb128()
        if _is_absolute(name) or (
            dir_index < len(dirs) and dirs[dir_index] is None
        ):
            filenames.append(name)
        elif dir_index < len(dirs):
            filenames.append(join_path(dirs[dir_index], name))
        else:
            buf.error("invalid directory index in line number program header", 0)
        # Modification time and size are of no interest.
        buf.read_uleb128()
        buf.read_uleb128()
    return dirs, filenames


def _read_lnct(
    ddata: Any,
    unit: Any,
    buf: DwarfBuffer,
    header: LineHeader,
    dirs: list[str | None],
    formats: list[tuple[int, int]],
) -> str:
    directory: str | None = None
    path: str | None = None
    for lnct, form in formats:
        val = read_attribute(
            form, 0, buf, unit.is_dwarf64, unit.version, header.addrsize,
            ddata.sections, ddata.altlink,
        )
        if lnct == LineContentType.PATH:
            resolved = resolve_string(
                ddata.sections, unit.is_dwarf64, ddata.is_bigendian,
                unit.str_offsets_base, val,
            )
            if resolved is not None:
                path = resolved
        elif lnct == LineContentType.DIRECTORY_INDEX:
            if val.encoding is ValueEncoding.UINT:
                if val.value >= len(dirs):  # type: ignore[operator]
                    buf.error(
                        "invalid directory index in line number program header", 0
                    )
                directory = dirs[val.value]  # type: ignore[index]
    if path is None:
        buf.error("missing file name in line number program header", 0)
    return join_path(directory, path)  # type: ignore[arg-type]


def _read_format_entries(
    ddata: Any,
    unit: Any,
    buf: DwarfBuffer,
    header: LineHeader,
    dirs: list[str | None],
) -> list[str | None]:
    formats = [
        (buf.read_uleb128(), buf.read_uleb128()) for _ in range(buf.read_byte())
    ]
    count = buf.read_uleb128()
    return [
        _read_lnct(ddata, unit, buf, header, dirs, formats) for _ in range(count)
    ]


def read_line_header(
    ddata: Any, unit: Any, is_dwarf64: bool, line_buf: DwarfBuffer
) -> LineHeader:
    """Read the header at ``line_buf`` and leave it at the line program."""
    version = line_buf.read_uint16()
    if version < 2 or version > 5:
        line_buf.error("unsupported line number version", -1)

    if version < 5:
        addrsize = unit.addrsize
    else:
        addrsize = line_buf.read_byte()
        if line_buf.read_byte() != 0:
            line_buf.error("non-zero segment_selector_size not supported", -1)

    header_length = line_buf.read_offset(is_dwarf64)
    hdr_buf = line_buf.sub(header_length)

    header = LineHeader(version=version, addrsize=addrsize)
    header.min_insn_len = hdr_buf.read_byte()
    header.max_ops_per_insn = 1 if version < 4 else hdr_buf.read_byte()
    hdr_buf.read_byte()  # default_is_stmt
    header.line_base = hdr_buf.read_sbyte()
    header.line_range = hdr_buf.read_byte()
    header.opcode_base = hdr_buf.read_byte()

    count = header.opcode_base - 1
    hdr_buf.require(count)
    header.opcode_lengths = bytes(hdr_buf.data[hdr_buf.offset:hdr_buf.offset + count])
    hdr_buf.advance(count)

    if version < 5:
        header.dirs, header.filenames = _read_v2_paths(unit, hdr_buf)
    else:
        header.dirs = _read_format_entries(ddata, unit, hdr_buf, header, [])
        header.filenames = _read_format_entries(
            ddata, unit, hdr_buf, header, header.dirs
        )
    return header