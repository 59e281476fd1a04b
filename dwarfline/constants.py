"""DWARF constants used when reading debug information."""

from enum import IntEnum


class Tag(IntEnum):
    """Debugging information entry tags."""

    ENTRY_POINT = 0x3
    COMPILE_UNIT = 0x11
    INLINED_SUBROUTINE = 0x1D
    SUBPROGRAM = 0x2E


class Form(IntEnum):
    """Attribute value encodings."""

    ADDR = 0x01
    BLOCK2 = 0x03
    BLOCK4 = 0x04
    DATA2 = 0x05
    DATA4 = 0x06
    DATA8 = 0x07
    STRING = 0x08
    BLOCK = 0x09
    BLOCK1 = 0x0A
    DATA1 = 0x0B
    FLAG = 0x0C
    SDATA = 0x0D
    STRP = 0x0E
    UDATA = 0x0F
    REF_ADDR = 0x10
    REF1 = 0x11
    REF2 = 0x12
    REF4 = 0x13
    REF8 = 0x14
    REF_UDATA = 0x15
    INDIRECT = 0x16
    SEC_OFFSET = 0x17
    EXPRLOC = 0x18
    FLAG_PRESENT = 0x19
    REF_SIG8 = 0x20
    STRX = 0x1A
    ADDRX = 0x1B
    REF_SUP4 = 0x1C
    STRP_SUP = 0x1D
    DATA16 = 0x1E
    LINE_STRP = 0x1F
    IMPLICIT_CONST = 0x21
    LOCLISTX = 0x22
    RNGLISTX = 0x23
    REF_SUP8 = 0x24
    STRX1 = 0x25
    STRX2 = 0x26
    STRX3 = 0x27
    STRX4 = 0x28
    ADDRX1 = 0x29
    ADDRX2 = 0x2A
    ADDRX3 = 0x2B
    ADDRX4 = 0x2C
    GNU_ADDR_INDEX = 0x1F01
    GNU_STR_INDEX = 0x1F02
    GNU_REF_ALT = 0x1F20
    GNU_STRP_ALT = 0x1F21


class Attribute(IntEnum):
    """Attribute names."""

    SIBLING = 0x01
    LOCATION = 0x02
    NAME = 0x03
    ORDERING = 0x09
    SUBSCR_DATA = 0x0A
    BYTE_SIZE = 0x0B
    BIT_OFFSET = 0x0C
    BIT_SIZE = 0x0D
    ELEMENT_LIST = 0x0F
    STMT_LIST = 0x10
    LOW_PC = 0x11
    HIGH_PC = 0x12
    LANGUAGE = 0x13
    MEMBER = 0x14
    DISCR = 0x15
    DISCR_VALUE = 0x16
    VISIBILITY = 0x17
    IMPORT = 0x18
    STRING_LENGTH = 0x19
    COMMON_REFERENCE = 0x1A
    COMP_DIR = 0x1B
    CONST_VALUE = 0x1C
    CONTAINING_TYPE = 0x1D
    DEFAULT_VALUE = 0x1E
    INLINE = 0x20
    IS_OPTIONAL = 0x21
    LOWER_BOUND = 0x22
    PRODUCER = 0x25
    PROTOTYPED = 0x27
    RETURN_ADDR = 0x2A
    START_SCOPE = 0x2C
    BIT_STRIDE = 0x2E
    UPPER_BOUND = 0x2F
    ABSTRACT_ORIGIN = 0x31
    ACCESSIBILITY = 0x32
    ADDRESS_CLASS = 0x33
    ARTIFICIAL = 0x34
    BASE_TYPES = 0x35
    CALLING_CONVENTION = 0x36
    COUNT = 0x37
    DATA_MEMBER_LOCATION = 0x38
    DECL_COLUMN = 0x39
    DECL_FILE = 0x3A
    DECL_LINE = 0x3B
    DECLARATION = 0x3C
    DISCR_LIST = 0x3D
    ENCODING = 0x3E
    EXTERNAL = 0x3F
    FRAME_BASE = 0x40
    FRIEND = 0x41
    IDENTIFIER_CASE = 0x42
    MACRO_INFO = 0x43
    NAMELIST_ITEMS = 0x44
    PRIORITY = 0x45
    SEGMENT = 0x46
    SPECIFICATION = 0x47
    STATIC_LINK = 0x48
    TYPE = 0x49
    USE_LOCATION = 0x4A
    VARIABLE_PARAMETER = 0x4B
    VIRTUALITY = 0x4C
    VTABLE_ELEM_LOCATION = 0x4D
    ALLOCATED = 0x4E
    ASSOCIATED = 0x4F
    DATA_LOCATION = 0x50
    BYTE_STRIDE = 0x51
    ENTRY_PC = 0x52
    USE_UTF8 = 0x53
    EXTENSION = 0x54
    RANGES = 0x55
    TRAMPOLINE = 0x56
    CALL_COLUMN = 0x57
    CALL_FILE = 0x58
    CALL_LINE = 0x59
    DESCRIPTION = 0x5A
    BINARY_SCALE = 0x5B
    DECIMAL_SCALE = 0x5C
    SMALL = 0x5D
    DECIMAL_SIGN = 0x5E
    DIGIT_COUNT = 0x5F
    PICTURE_STRING = 0x60
    MUTABLE = 0x61
    THREADS_SCALED = 0x62
    EXPLICIT = 0x63
    OBJECT_POINTER = 0x64
    ENDIANITY = 0x65
    ELEMENTAL = 0x66
    PURE = 0x67
    RECURSIVE = 0x68
    SIGNATURE = 0x69
    MAIN_SUBPROGRAM = 0x6A
    DATA_BIT_OFFSET = 0x6B
    CONST_EXPR = 0x6C
    ENUM_CLASS = 0x6D
    LINKAGE_NAME = 0x6E
    STRING_LENGTH_BIT_SIZE = 0x6F
    STRING_LENGTH_BYTE_SIZE = 0x70
    RANK = 0x71
    STR_OFFSETS_BASE = 0x72
    ADDR_BASE = 0x73
    RNGLISTS_BASE = 0x74
    DWO_NAME = 0x76
    REFERENCE = 0x77
    RVALUE_REFERENCE = 0x78
    MACROS = 0x79
    CALL_ALL_CALLS = 0x7A
    CALL_ALL_SOURCE_CALLS = 0x7B
    CALL_ALL_TAIL_CALLS = 0x7C
    CALL_RETURN_PC = 0x7D
    CALL_VALUE = 0x7E
    CALL_ORIGIN = 0x7F
    CALL_PARAMETER = 0x80
    CALL_PC = 0x81
    CALL_TAIL_CALL = 0x82
    CALL_TARGET = 0x83
    CALL_TARGET_CLOBBERED = 0x84
    CALL_DATA_LOCATION = 0x85
    CALL_DATA_VALUE = 0x86
    NORETURN = 0x87
    ALIGNMENT = 0x88
    EXPORT_SYMBOLS = 0x89
    DELETED = 0x8A
    DEFAULTED = 0x8B
    LOCLISTS_BASE = 0x8C
    LO_USER = 0x2000
    HI_USER = 0x3FFF
    MIPS_FDE = 0x2001
    MIPS_LOOP_BEGIN = 0x2002
    MIPS_TAIL_LOOP_BEGIN = 0x2003
    MIPS_EPILOG_BEGIN = 0x2004
    MIPS_LOOP_UNROLL_FACTOR = 0x2005
    MIPS_SOFTWARE_PIPELINE_DEPTH = 0x2006
    MIPS_LINKAGE_NAME = 0x2007
    MIPS_STRIDE = 0x2008
    MIPS_ABSTRACT_NAME = 0x2009
    MIPS_CLONE_ORIGIN = 0x200A
    MIPS_HAS_INLINES = 0x200B
    HP_BLOCK_INDEX = 0x2000
    HP_UNMODIFIABLE = 0x2001
    HP_PROLOGUE = 0x2005
    HP_EPILOGUE = 0x2008
    HP_ACTUALS_STMT_LIST = 0x2010
    HP_PROC_PER_SECTION = 0x2011
    HP_RAW_DATA_PTR = 0x2012
    HP_PASS_BY_REFERENCE = 0x2013
    HP_OPT_LEVEL = 0x2014
    HP_PROF_VERSION_ID = 0x2015
    HP_OPT_FLAGS = 0x2016
    HP_COLD_REGION_LOW_PC = 0x2017
    HP_COLD_REGION_HIGH_PC = 0x2018
    HP_ALL_VARIABLES_MODIFIABLE = 0x2019
    HP_LINKAGE_NAME = 0x201A
    HP_PROF_FLAGS = 0x201B
    HP_UNIT_NAME = 0x201F
    HP_UNIT_SIZE = 0x2020
    HP_WIDENED_BYTE_SIZE = 0x2021
    HP_DEFINITION_POINTS = 0x2022
    HP_DEFAULT_LOCATION = 0x2023
    HP_IS_RESULT_PARAM = 0x2029
    SF_NAMES = 0x2101
    SRC_INFO = 0x2102
    MAC_INFO = 0x2103
    SRC_COORDS = 0x2104
    BODY_BEGIN = 0x2105
    BODY_END = 0x2106
    GNU_VECTOR = 0x2107
    GNU_GUARDED_BY = 0x2108
    GNU_PT_GUARDED_BY = 0x2109
    GNU_GUARDED = 0x210A
    GNU_PT_GUARDED = 0x210B
    GNU_LOCKS_EXCLUDED = 0x210C
    GNU_EXCLUSIVE_LOCKS_REQUIRED = 0x210D
    GNU_SHARED_LOCKS_REQUIRED = 0x210E
    GNU_ODR_SIGNATURE = 0x210F
    GNU_TEMPLATE_NAME = 0x2110
    GNU_CALL_SITE_VALUE = 0x2111
    GNU_CALL_SITE_DATA_VALUE = 0x2112
    GNU_CALL_SITE_TARGET = 0x2113
    GNU_CALL_SITE_TARGET_CLOBBERED = 0x2114
    GNU_TAIL_CALL = 0x2115
    GNU_ALL_TAIL_CALL_SITES = 0x2116
    GNU_ALL_CALL_SITES = 0x2117
    GNU_ALL_SOURCE_CALL_SITES = 0x2118
    GNU_MACROS = 0x2119
    GNU_DELETED = 0x211A
    GNU_DWO_NAME = 0x2130
    GNU_DWO_ID = 0x2131
    GNU_RANGES_BASE = 0x2132
    GNU_ADDR_BASE = 0x2133
    GNU_PUBNAMES = 0x2134
    GNU_PUBTYPES = 0x2135
    GNU_DISCRIMINATOR = 0x2136
    GNU_LOCVIEWS = 0x2137
    GNU_ENTRY_VIEW = 0x2138
    VMS_RTNBEG_PD_ADDRESS = 0x2201
    USE_GNAT_DESCRIPTIVE_TYPE = 0x2301
    GNAT_DESCRIPTIVE_TYPE = 0x2302
    GNU_NUMERATOR = 0x2303
    GNU_DENOMINATOR = 0x2304
    GNU_BIAS = 0x2305
    UPC_THREADS_SCALED = 0x3210
    PGI_LBASE = 0x3A00
    PGI_SOFFSET = 0x3A01
    PGI_LSTRIDE = 0x3A02
    APPLE_OPTIMIZED = 0x3FE1
    APPLE_FLAGS = 0x3FE2
    APPLE_ISA = 0x3FE3
    APPLE_BLOCK = 0x3FE4
    APPLE_MAJOR_RUNTIME_VERS = 0x3FE5
    APPLE_RUNTIME_CLASS = 0x3FE6
    APPLE_OMIT_FRAME_PTR = 0x3FE7
    APPLE_PROPERTY_NAME = 0x3FE8
    APPLE_PROPERTY_GETTER = 0x3FE9
    APPLE_PROPERTY_SETTER = 0x3FEA
    APPLE_PROPERTY_ATTRIBUTE = 0x3FEB
    APPLE_OBJC_COMPLETE_TYPE = 0x3FEC
    APPLE_PROPERTY = 0x3FED


class LineOp(IntEnum):
    """Standard line number program opcodes."""

    EXTENDED_OP = 0x0
    COPY = 0x1
    ADVANCE_PC = 0x2
    ADVANCE_LINE = 0x3
    SET_FILE = 0x4
    SET_COLUMN = 0x5
    NEGATE_STMT = 0x6
    SET_BASIC_BLOCK = 0x7
    CONST_ADD_PC = 0x8
    FIXED_ADVANCE_PC = 0x9
    SET_PROLOGUE_END = 0xA
    SET_EPILOGUE_BEGIN = 0xB
    SET_ISA = 0xC


class ExtendedLineOp(IntEnum):
    """Extended line number program opcodes."""

    END_SEQUENCE = 0x1
    SET_ADDRESS = 0x2
    DEFINE_FILE = 0x3
    SET_DISCRIMINATOR = 0x4


class LineContentType(IntEnum):
    """Content type codes of DWARF 5 line header entries."""

    PATH = 0x1
    DIRECTORY_INDEX = 0x2
    TIMESTAMP = 0x3
    SIZE = 0x4
    MD5 = 0x5
    LO_USER = 0x2000
    HI_USER = 0x3FFF


class RangeListEntry(IntEnum):
    """Entry kinds in a DWARF 5 range list."""

    END_OF_LIST = 0x00
    BASE_ADDRESSX = 0x01
    STARTX_ENDX = 0x02
    STARTX_LENGTH = 0x03
    OFFSET_PAIR = 0x04
    BASE_ADDRESS = 0x05
    START_END = 0x06
    START_LENGTH = 0x07


class UnitType(IntEnum):
    """Unit header types of DWARF 5."""

    COMPILE = 0x01
    TYPE = 0x02
    PARTIAL = 0x03
    SKELETON = 0x04
    SPLIT_COMPILE = 0x05
    SPLIT_TYPE = 0x06
    LO_USER = 0x80
    HI_USER = 0xFF