"""Decoder for .PRJ battle project files.

After a 32 byte header the file is a fixed sequence of tagged blocks,
BASE, WATR, FURN, INST, TERR and ATTR, each starting with a 4 byte id
and a 32-bit size. FURN, INST and TERR carry extra header fields.
"""

import logging
from collections import namedtuple

import numpy as np

from darkomen.binary import Vector, check_magic, cstring, parse_stream, read_exact, read_stream
from darkomen.errors import DecodeError, FormatError
from darkomen.prj import prjstructs as structs

logger = logging.getLogger(__name__)

Project = namedtuple("Project", "base water furniture instances terrain attributes")
Base = namedtuple("Base", "model_file_name")
Water = namedtuple("Water", "model_file_name")
Furniture = namedtuple("Furniture", "file_names")
Attributes = namedtuple("Attributes", "map_width map_height")

Instance = namedtuple("Instance", """
    selected
    exclude_from_terrain
    position
    rotation
    min
    max
    mesh_slot
    mesh_id
    attackable
    toughness
    wounds
    owner_unit_index
    burnable
    sfx_code
    gfx_code
    locked
    exclude_from_terrain_shadow
    exclude_from_walk
    magic_item_code
    particle_effect_code
    dead_mesh_slot
    dead_mesh_id
    light
    light_radius
    light_ambient
""")

# heightmap blocks are the large blocks, offsets are 8x8 blocks of height
# offsets above each large block's minimum
Terrain = namedtuple("Terrain", "width height heightmap1 heightmap2 offsets")
TerrainBlock = namedtuple("TerrainBlock", "minimum offset_index")


def read_header(fd, fmt, block_id):
    hdr = parse_stream(fmt, fd, "%s block header" % block_id.decode())
    if hdr.id != block_id:
        raise FormatError("block", hdr.id, block_id)
    return hdr


def read_block(fd, block_id):
    hdr = read_header(fd, structs.BlockHeader, block_id)
    return read_exact(fd, hdr.size, "%s block data" % block_id.decode())


def fixed(v, scale):
    return Vector(v.x / scale, v.y / scale, v.z / scale)


def parse_base(fd):
    return Base(cstring(read_block(fd, structs.BASE)))


def parse_water(fd):
    return Water(cstring(read_block(fd, structs.WATER)))


def parse_furniture(fd):
    hdr = read_header(fd, structs.FurnitureHeader, structs.FURNITURE)
    # size doesn't include the length prefix of each name
    data = read_exact(fd, 4 * hdr.count + hdr.size - 4, "FURN block data")

    names = []
    pos = 0
    for i in range(hdr.count):
        if pos + 4 > len(data):
            raise DecodeError("FURN block ends before file name %d" % i)
        size = int.from_bytes(data[pos:pos + 4], "little")
        names.append(cstring(data[pos + 4:pos + 4 + size]))
        pos += 4 + size

    return Furniture(tuple(names))


def parse_instances(fd):
    hdr = read_header(fd, structs.InstancesHeader, structs.INSTANCES)
    data = read_exact(fd, hdr.size, "INST block data")
    if hdr.count and hdr.instance_size < structs.Instance.sizeof():
        raise DecodeError("instance records are %d byte(s), expected at least %d"
                          % (hdr.instance_size, structs.Instance.sizeof()))
    if hdr.count * hdr.instance_size > len(data):
        raise DecodeError("INST block holds %d byte(s), too small for %d instance(s) of %d byte(s)"
                          % (len(data), hdr.count, hdr.instance_size))

    instances = []
    for i in range(hdr.count):
        start = i * hdr.instance_size
        r = structs.Instance.parse(data[start:start + structs.Instance.sizeof()])
        instances.append(Instance(
            r.selected, r.exclude_from_terrain,
            fixed(r.position, structs.POSITION_SCALE),
            fixed(r.rotation, structs.ROTATION_SCALE),
            fixed(r.min, structs.POSITION_SCALE),
            fixed(r.max, structs.POSITION_SCALE),
            r.mesh_slot, r.mesh_id, r.attackable, r.toughness, r.wounds,
            r.owner_unit_index, r.burnable, r.sfx_code, r.gfx_code, r.locked,
            r.exclude_from_terrain_shadow, r.exclude_from_walk, r.magic_item_code,
            r.particle_effect_code, r.dead_mesh_slot, r.dead_mesh_id,
            r.light, r.light_radius, r.light_ambient,
        ))

    return tuple(instances)


def read_heightmap(fd, hdr, n):
    data = read_exact(fd, hdr.map_block_size // 2, "heightmap %d data" % n)
    count = hdr.uncompressed_block_count
    if count * 8 > len(data):
        raise DecodeError("heightmap %d holds %d byte(s), too small for %d block(s)"
                          % (n, len(data), count))

    pairs = np.frombuffer(data, dtype="<u4", count=count * 2).reshape(-1, 2)
    bad = np.nonzero(pairs[:, 1] % structs.OFFSET_BLOCK_SIZE)[0]
    if len(bad):
        raise DecodeError("heightmap %d: offset index of block %d is not a multiple of %d, got %d"
                          % (n, bad[0], structs.OFFSET_BLOCK_SIZE, pairs[bad[0], 1]))

    return tuple(TerrainBlock(int(minimum), int(offset) // structs.OFFSET_BLOCK_SIZE)
                 for minimum, offset in pairs)


def parse_terrain(fd):
    hdr = read_header(fd, structs.TerrainHeader, structs.TERRAIN)
    heightmap1 = read_heightmap(fd, hdr, 1)
    heightmap2 = read_heightmap(fd, hdr, 2)

    offset_count = int.from_bytes(read_exact(fd, 4, "terrain offset count"), "little")
    if offset_count != hdr.compressed_block_count * structs.OFFSET_BLOCK_SIZE:
        raise DecodeError("compressed block count and offset count mismatch: got %d, %d"
                          % (hdr.compressed_block_count, offset_count))
    data = read_exact(fd, offset_count, "terrain offsets")
    offsets = tuple(data[i:i + structs.OFFSET_BLOCK_SIZE]
                    for i in range(0, offset_count, structs.OFFSET_BLOCK_SIZE))

    logger.debug("terrain %dx%d, %d large block(s), %d offset block(s)",
                 hdr.width, hdr.height, len(heightmap1), len(offsets))
    return Terrain(hdr.width, hdr.height, heightmap1, heightmap2, offsets)


def parse_attributes(fd):
    data = read_block(fd, structs.ATTRIBUTES)
    if len(data) < structs.Attributes.sizeof():
        raise DecodeError("ATTR block is %d byte(s), expected at least %d"
                          % (len(data), structs.Attributes.sizeof()))
    a = structs.Attributes.parse(data)
    return Attributes(a.map_width, a.map_height)


parsers = {
    structs.BASE: parse_base,
    structs.WATER: parse_water,
    structs.FURNITURE: parse_furniture,
    structs.INSTANCES: parse_instances,
    structs.TERRAIN: parse_terrain,
    structs.ATTRIBUTES: parse_attributes,
}


def decode(src):
    """Decode a battle project from a binary stream or a bytes-like object."""
    fd = read_stream(src)

    hdr = parse_stream(structs.Header, fd, "project header")
    check_magic("project", hdr.format, structs.FORMAT)

    return Project(*(parsers[block_id](fd) for block_id in structs.BLOCK_ORDER))
