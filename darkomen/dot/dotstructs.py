from construct import Array, Bytes, Int32ul, Padding, Struct, this

from darkomen.binary import FixedCString

# probably "WDOT" backwards
FORMAT = b"TODW"

Header = Struct(
    "format"     / Bytes(4),
    "unknown1"   / Int32ul,
    "unknown2"   / Int32ul,
    "path_count" / Int32ul,
)

Point = Struct(
    "x" / Int32ul,
    "y" / Int32ul,
    Padding(8),
)

Path = Struct(
    "point_count" / Int32ul,
    "points"      / Array(this.point_count, Point),
    "unknown1"    / Int32ul, # always 5
    "unknown2"    / Int32ul, # always 10
    "unknown3"    / Bytes(36),
)

Footer = Struct(
    Padding(80),
    "map_file_name" / FixedCString(72),
)
