from construct import Bytes, Int32sl, Int32ul, Struct

# trailing spaces are part of the format
FORMAT = b"Dark Omen Battle file 1.10      "

BASE = b"BASE"
WATER = b"WATR"
FURNITURE = b"FURN"
INSTANCES = b"INST"
TERRAIN = b"TERR"
ATTRIBUTES = b"ATTR"

# the blocks always appear in this order
BLOCK_ORDER = (BASE, WATER, FURNITURE, INSTANCES, TERRAIN, ATTRIBUTES)

# bytes per 8x8 block of terrain height offsets
OFFSET_BLOCK_SIZE = 64

POSITION_SCALE = 1024
ROTATION_SCALE = 4096

Header = Struct(
    "format" / Bytes(len(FORMAT)),
)

BlockHeader = Struct(
    "id"   / Bytes(4),
    "size" / Int32ul,
)

FurnitureHeader = Struct(
    "id"    / Bytes(4),
    "size"  / Int32ul,
    "count" / Int32ul,
)

InstancesHeader = Struct(
    "id"            / Bytes(4),
    "size"          / Int32ul,
    "count"         / Int32ul,
    "instance_size" / Int32ul,
)

TerrainHeader = Struct(
    "id"                       / Bytes(4),
    "size"                     / Int32ul, # not used
    "width"                    / Int32ul,
    "height"                   / Int32ul,
    "compressed_block_count"   / Int32ul,
    "uncompressed_block_count" / Int32ul,
    "map_block_size"           / Int32ul,
)

FixedVector = Struct(
    "x" / Int32sl,
    "y" / Int32sl,
    "z" / Int32sl,
)

Instance = Struct(
    "prev"                        / Int32sl,
    "next"                        / Int32sl,
    "selected"                    / Int32sl,
    "exclude_from_terrain"        / Int32sl,
    "position"                    / FixedVector,
    "rotation"                    / FixedVector,
    "min"                         / FixedVector,
    "max"                         / FixedVector,
    "mesh_slot"                   / Int32sl,
    "mesh_id"                     / Int32sl,
    "attackable"                  / Int32sl,
    "toughness"                   / Int32sl,
    "wounds"                      / Int32sl,
    "unknown1"                    / Int32sl,
    "owner_unit_index"            / Int32sl,
    "burnable"                    / Int32sl,
    "sfx_code"                    / Int32sl,
    "gfx_code"                    / Int32sl,
    "locked"                      / Int32sl,
    "exclude_from_terrain_shadow" / Int32sl,
    "exclude_from_walk"           / Int32sl,
    "magic_item_code"             / Int32sl,
    "particle_effect_code"        / Int32sl,
    "dead_mesh_slot"              / Int32sl,
    "dead_mesh_id"                / Int32sl,
    "light"                       / Int32sl,
    "light_radius"                / Int32sl,
    "light_ambient"               / Int32sl,
    "unknown2"                    / Int32sl,
    "unknown3"                    / Int32sl,
)

Attributes = Struct(
    "map_width"  / Int32ul,
    "map_height" / Int32ul,
)
