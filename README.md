# dwarfline

`dwarfline` reads DWARF debug information (versions 2 to 5) and answers one
question: given a program counter, which source file, line number and function
does it belong to, including any functions inlined at that point?

It has no dependencies beyond the standard library.

## What it does not do

- It does not open object files. Getting `.debug_info`, `.debug_line` and the
  other sections out of an ELF, Mach-O or PE file is up to the caller; the
  package works on the section bytes you hand it.
- It does not walk a running program's stack. You supply the PCs.
- It does not read symbol tables; function names come only from the debug
  information.

## Usage

Put the raw bytes of the debug sections into a `DwarfSections` and add them to
a `DwarfResolver`:

```python
from dwarfline.reader import DwarfSections
from dwarfline.lookup import DwarfResolver

sections = DwarfSections(
    info=debug_info_bytes,
    line=debug_line_bytes,
    abbrev=debug_abbrev_bytes,
    ranges=debug_ranges_bytes,
    strings=debug_str_bytes,
)

resolver = DwarfResolver()
resolver.add(base_address=0, sections=sections, is_bigendian=False)

for frame in resolver.pcinfo(0x401136):
    print(hex(frame.pc), frame.filename, frame.lineno, frame.function)
```

`DwarfSections` has one field per section, all `bytes` and empty by default:
`info`, `line`, `abbrev`, `ranges`, `strings` (`.debug_str`), `addr`,
`str_offsets`, `line_str` and `rnglists`.

`DwarfResolver.add` reads the units of one module, with its load address, and
returns the resulting `DwarfData`. Its `altlink` argument takes the `DwarfData`
of a supplementary debug file, if the module refers to one. Modules are
searched in the order they were added.

`DwarfResolver.pcinfo` returns a list of `Frame` values (`pc`, `filename`,
`lineno`, `function`), innermost first. When the PC lies in inlined code there
is one frame per inlined call, followed by the frame of the function they were
inlined into. A PC that no module covers gives a single frame with only the PC
set. A unit's line table and functions are read the first time a PC inside it
is looked up; if that reading fails, a warning is logged through the
`dwarfline.lookup` logger and the frame carries only the PC.

## Lower-level pieces

- `dwarfline.reader`: `DwarfBuffer` for bounded reads of fixed-size integers,
  LEB128 numbers, offsets, addresses and strings in either byte order;
  `DwarfError`.
- `dwarfline.constants`: the DWARF tag, form, attribute, opcode and unit type
  values as `IntEnum`s.
- `dwarfline.abbrev`: `read_abbrevs` parses an abbreviation table.
- `dwarfline.attributes`: `read_attribute`, `resolve_string` and
  `resolve_addr_index` decode attribute values.
- `dwarfline.ranges`: `PcRange` and `add_ranges` for low/high pairs,
  `.debug_ranges` and `.debug_rnglists`.
- `dwarfline.units`: `build_address_map` and `build_dwarf_data` build the
  address map of compilation units; `find_unit` finds a unit by offset.
- `dwarfline.lineheader` and `dwarfline.lines`: `read_line_info` reads a
  unit's line header and runs its line program; `find_line` looks up a PC.
- `dwarfline.functions`: `read_function_info` collects function and inlined
  subroutine address ranges; `dwarfline.names` follows abstract origins and
  specifications to names.
- `dwarfline.inlined`: `find_function_range` and `inlined_frames`.
- `dwarfline.lookup`: `lookup_pc` resolves a PC within one `DwarfData`.

Malformed or unsupported data raises `dwarfline.reader.DwarfError`. Its
`errnum` is -1 for unsupported data and 0 otherwise; messages about a read
name the section and the byte offset where reading stopped.

## Running the tests

```
pip install -e ".[test]"
pytest
```