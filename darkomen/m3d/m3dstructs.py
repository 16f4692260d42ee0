from construct import Array, Bytes, Int8ul, Int16sl, Int16ul, Int32ul, Float32l, Struct

from darkomen.binary import FixedCString, Vector3f

# probably "M3DP" backwards
FORMAT = b"PD3M"

ROOT = -1

Header = Struct(
    "format"        / Bytes(4),
    "magic"         / Int32ul,
    "version"       / Int32ul,
    "crc"           / Int32ul, # never checked
    "not_crc"       / Int32ul,
    "texture_count" / Int16ul,
    "object_count"  / Int16ul,
)

Texture = Struct(
    "path"      / FixedCString(64), # a directory on the game developer's machine
    "file_name" / FixedCString(32),
)

ObjectHeader = Struct(
    "name"         / FixedCString(32),
    "parent_index" / Int16sl,
    "padding"      / Int16sl,
    "pivot"        / Vector3f,
    "vertex_count" / Int16ul,
    "face_count"   / Int16ul,
    "flags"        / Int32ul,
    "unknown1"     / Int32ul,
    "unknown2"     / Int32ul,
)

Face = Struct(
    "indexes"       / Array(3, Int16ul),
    "texture_index" / Int16ul,
    "normal"        / Vector3f,
    "unknown1"      / Int32ul,
    "unknown2"      / Int32ul,
)

Vertex = Struct(
    "position" / Vector3f,
    "normal"   / Vector3f,
    "r"        / Int8ul,
    "g"        / Int8ul,
    "b"        / Int8ul,
    "a"        / Int8ul,
    "u"        / Float32l,
    "v"        / Float32l,
    "index"    / Int32ul,
    "unknown1" / Int32ul,
)
