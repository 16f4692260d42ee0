from enum import IntEnum

from construct import Bytes, Int8ul, Int16ul, Int32ul, Padding, Struct

# "WHDO" is an initialism for "Warhammer: Dark Omen"
FORMAT = b"WHDO"


class FrameType(IntEnum):
    REPEAT = 0
    FLIP_HORIZONTAL = 1
    FLIP_VERTICAL = 2
    FLIP_BOTH = 3
    NORMAL = 4
    EMPTY = 5 # no pixel or palette data, width and height are 0


class Compression(IntEnum):
    NONE = 0
    PACKBITS = 1
    ZERO_RUNS = 2


Header = Struct(
    "format"              / Bytes(4),
    "file_size"           / Int32ul,
    "frame_header_offset" / Int32ul,
    "frame_data_offset"   / Int32ul,
    "color_table_offset"  / Int32ul,
    "color_table_entries" / Int32ul,
    "palette_count"       / Int32ul,
    "frame_count"         / Int32ul,
)

FrameHeader = Struct(
    "type"               / Int8ul,
    "compression"        / Int8ul,
    "color_count"        / Int16ul,
    "x"                  / Int16ul,
    "y"                  / Int16ul,
    "width"              / Int16ul,
    "height"             / Int16ul,
    "data_offset"        / Int32ul,
    "compressed_size"    / Int32ul,
    "uncompressed_size"  / Int32ul,
    "color_table_offset" / Int32ul,
    Padding(4),
)

# B, G, R, unused
COLOR_SIZE = 4
