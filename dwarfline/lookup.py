"""Mapping a PC to source frames through the debug information of modules."""

from __future__ import annotations

import logging
import threading
from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .functions import read_function_info
from .inlined import find_function_range, inlined_frames
from .lineheader import join_path
from .lines import find_line, read_line_info
from .reader import DwarfError
from .units import DwarfData, build_dwarf_data

_UINT64_MASK = (1 << 64) - 1

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """One source-level frame for a PC; unknown parts are None or 0."""

    pc: int
    filename: str | None = None
    lineno: int = 0
    function: str | None = None


def _find_unit_entry(ddata: DwarfData, pc: int) -> int | None:
    addrs = ddata.addrs
    if not addrs or pc >= _UINT64_MASK:
        return None
    index = bisect_right(addrs, pc, key=lambda a: a.low) - 1
    if index < 0:
        return None
    while True:
        if pc < addrs[index].high:
            return index
        if index == 0 or addrs[index - 1].low < addrs[index].low:
            return None
        index -= 1


def _load_unit(ddata: DwarfData, unit: Any) -> None:
    try:
        header, lines = read_line_info(ddata, unit)
    except DwarfError as exc:
        logger.warning("reading line information: %s", exc)
        unit.lines_failed = True
        return
    if not lines:
        unit.lines_failed = True
        return
    try:
        function_addrs = read_function_info(ddata, header, unit)
    except DwarfError as exc:
        logger.warning("reading function information: %s", exc)
        function_addrs = []
    unit.function_addrs = function_addrs
    # Set last, so a unit with lines always has its functions too.
    unit.lines = lines


def _unit_filename(unit: Any) -> str | None:
    if unit.abs_filename is None:
        filename = unit.filename
        if (
            filename is not None
            and not filename.startswith("/")
            and unit.comp_dir is not None
        ):
            filename = join_path(unit.comp_dir, filename)
        unit.abs_filename = filename
    return unit.abs_filename


def lookup_pc(ddata: DwarfData, pc: int) -> list[Frame] | None:
    """Return the frames for ``pc`` in one module, or None if it has no unit for it.

    Line tables and functions of a unit are read the first time a PC in
    the unit is looked up.
    """
    entry = _find_unit_entry(ddata, pc)
    if entry is None:
        return None

    addrs = ddata.addrs
    unit = addrs[entry].unit
    # Prefer an enclosing unit over one whose line information is useless.
    while entry > 0 and addrs[entry - 1].low <= pc < addrs[entry - 1].high:
        if not unit.lines_failed:
            break
        entry -= 1
        unit = addrs[entry].unit

    if unit.lines is None and not unit.lines_failed:
        _load_unit(ddata, unit)

    if unit.lines_failed:
        return [Frame(pc)]

    line = find_line(unit.lines, pc)
    if line is None:
        # The unit covers pc but its line table starts later.
        return [Frame(pc, _unit_filename(unit), 0, None)]

    match = find_function_range(unit.function_addrs, pc)
    if match is None:
        return [Frame(pc, line.filename, line.lineno, None)]

    return [
        Frame(pc, filename, lineno, name)
        for filename, lineno, name in inlined_frames(
            pc, match.function, line.filename, line.lineno
        )
    ]


class DwarfResolver:
    """Resolves PCs against the debug information of the modules added to it."""

    def __init__(self) -> None:
        self._modules: list[DwarfData] = []
        self._lock = threading.Lock()

    def __iter__(self) -> Iterator[DwarfData]:
        return iter(list(self._modules))

    def __len__(self) -> int:
        return len(self._modules)

    def add(
        self,
        base_address: int,
        sections: Any,
        is_bigendian: bool = False,
        altlink: DwarfData | None = None,
    ) -> DwarfData:
        """Read one module's debug sections and add it; return its data."""
        ddata = build_dwarf_data(base_address, sections, is_bigendian, altlink)
        with self._lock:
            self._modules.append(ddata)
        return ddata

    def pcinfo(self, pc: int) -> list[Frame]:
        """Return the frames for ``pc``, innermost first.

        A PC that no module knows gives a single frame with only the PC.
        """
        for ddata in list(self._modules):
            frames = lookup_pc(ddata, pc)
            if frames is not None:
                return frames
        return [Frame(pc)]