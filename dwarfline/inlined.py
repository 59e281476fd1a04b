"""Finding the function that covers a PC and unwinding inlined calls."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from typing import Any

_UINT64_MASK = (1 << 64) - 1


def find_function_range(addrs: Sequence[Any], pc: int) -> Any | None:
    """Return the range in ``addrs`` that holds ``pc``, or None.

    ``addrs`` must be sorted by low PC, with nested ranges that share a
    low PC ordered largest first. Among the ranges that share the greatest
    low PC not above ``pc``, the innermost one holding ``pc`` wins.
    """
    if not addrs or pc >= _UINT64_MASK:
        return None
    index = bisect_right(addrs, pc, key=lambda a: a.low) - 1
    if index < 0:
        return None
    while True:
        if pc < addrs[index].high:
            return addrs[index]
        if index == 0 or addrs[index - 1].low < addrs[index].low:
            return None
        index -= 1


def inlined_frames(
    pc: int, function: Any, filename: str | None, lineno: int
) -> list[tuple[str | None, int, str | None]]:
    """Return ``(filename, lineno, function_name)`` frames for ``pc``, innermost first.

    ``filename`` and ``lineno`` are where ``pc`` lies in the source. Every
    function inlined into ``function`` at ``pc`` gets a frame, and the last
    frame is that of ``function`` itself, at the call site of its
    outermost inlined callee.
    """
    match = find_function_range(function.function_addrs, pc)
    if match is None:
        return [(filename, lineno, function.name)]
    inlined = match.function
    frames = inlined_frames(pc, inlined, filename, lineno)
    frames.append((inlined.caller_filename, inlined.caller_lineno, function.name))
    return frames