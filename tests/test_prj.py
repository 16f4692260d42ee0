import pytest

from darkomen import prj
from darkomen.binary import Vector
from darkomen.errors import DecodeError, FormatError, TruncatedError
from darkomen.prj import prjstructs as structs


def block(block_id, data):
    return structs.BlockHeader.build(dict(id=block_id, size=len(data))) + data


def furniture(names):
    data = b"".join(len(n + b"\x00").to_bytes(4, "little") + n + b"\x00" for n in names)
    return structs.FurnitureHeader.build(dict(
        id=structs.FURNITURE, size=len(data) - 4 * len(names) + 4, count=len(names),
    )) + data


def instance(**fields):
    values = {name: 0 for name in (
        "prev", "next", "selected", "exclude_from_terrain", "mesh_slot", "mesh_id",
        "attackable", "toughness", "wounds", "unknown1", "owner_unit_index", "burnable",
        "sfx_code", "gfx_code", "locked", "exclude_from_terrain_shadow", "exclude_from_walk",
        "magic_item_code", "particle_effect_code", "dead_mesh_slot", "dead_mesh_id",
        "light", "light_radius", "light_ambient", "unknown2", "unknown3",
    )}
    for name in ("position", "rotation", "min", "max"):
        values[name] = dict(x=0, y=0, z=0)
    values.update(fields)
    return structs.Instance.build(values)


def instances(records, instance_size=structs.Instance.sizeof()):
    data = b"".join(r.ljust(instance_size, b"\x00") for r in records)
    return structs.InstancesHeader.build(dict(
        id=structs.INSTANCES, size=len(data), count=len(records), instance_size=instance_size,
    )) + data


def heightmap(pairs, map_block_size):
    data = b"".join(m.to_bytes(4, "little") + o.to_bytes(4, "little") for m, o in pairs)
    return data.ljust(map_block_size // 2, b"\x00")


def terrain(pairs1, pairs2, offsets, width=8, height=16):
    map_block_size = 16 * len(pairs1)
    return (
        structs.TerrainHeader.build(dict(
            id=structs.TERRAIN, size=0, width=width, height=height,
            compressed_block_count=len(offsets) // structs.OFFSET_BLOCK_SIZE,
            uncompressed_block_count=len(pairs1), map_block_size=map_block_size,
        ))
        + heightmap(pairs1, map_block_size)
        + heightmap(pairs2, map_block_size)
        + len(offsets).to_bytes(4, "little")
        + offsets
    )


def build_project(pairs1=((10, 0), (20, 64)), offsets=bytes(range(128)), inst=None):
    if inst is None:
        inst = instances([instance(
            mesh_id=3, wounds=2,
            position=dict(x=2048, y=-512, z=1024),
            rotation=dict(x=0, y=4096, z=2048),
        )])
    return (
        structs.FORMAT
        + block(structs.BASE, b"BASE.M3D\x00junk")
        + block(structs.WATER, b"_4WATER.M3D\x00")
        + furniture([b"_KTREE.M3D", b"HOUSE.M3D"])
        + inst
        + terrain(pairs1, pairs1, offsets)
        + block(structs.ATTRIBUTES, structs.Attributes.build(dict(map_width=184, map_height=200))
                + bytes(8))
    )


def test_decode():
    p = prj.decode(build_project())
    assert p.base == prj.Base("BASE.M3D")
    assert p.water == prj.Water("_4WATER.M3D")
    assert p.furniture == prj.Furniture(("_KTREE.M3D", "HOUSE.M3D"))
    assert p.attributes == prj.Attributes(184, 200)

    inst, = p.instances
    assert inst.mesh_id == 3
    assert inst.wounds == 2
    assert inst.position == Vector(2.0, -0.5, 1.0)
    assert inst.rotation == Vector(0.0, 1.0, 0.5)


def test_terrain():
    t = prj.decode(build_project()).terrain
    assert (t.width, t.height) == (8, 16)
    assert t.heightmap1 == (prj.TerrainBlock(10, 0), prj.TerrainBlock(20, 1))
    assert t.heightmap2 == t.heightmap1
    assert len(t.offsets) == 2
    assert t.offsets[1] == bytes(range(64, 128))


def test_wider_instance_records():
    data = build_project(inst=instances([instance(mesh_id=1), instance(mesh_id=2)],
                                        instance_size=structs.Instance.sizeof() + 8))
    assert [i.mesh_id for i in prj.decode(data).instances] == [1, 2]


def test_bad_magic():
    with pytest.raises(FormatError):
        prj.decode(b"Dark Omen Battle file 1.00      " + bytes(100))


def test_blocks_out_of_order():
    data = build_project().replace(b"WATR", b"ATTR", 1)
    with pytest.raises(FormatError, match="block"):
        prj.decode(data)


def test_heightmap_offset_not_aligned():
    with pytest.raises(DecodeError, match="block 1 is not a multiple of 64"):
        prj.decode(build_project(pairs1=((10, 0), (20, 65))))


def test_offset_count_mismatch():
    data = build_project()
    # claim one more compressed block than there are offsets
    hdr_at = data.index(structs.TERRAIN)
    count_at = hdr_at + 16
    data = data[:count_at] + (3).to_bytes(4, "little") + data[count_at + 4:]
    with pytest.raises(DecodeError, match="mismatch"):
        prj.decode(data)


def test_truncated():
    data = build_project()
    with pytest.raises(TruncatedError):
        prj.decode(data[:-4])


@pytest.mark.parametrize("name, width, height, blocks, offsets", [
    ("B1_01", 184, 200, 575, 473),
    ("B3_01", 240, 240, 900, 304),
    ("B4_01", 220, 320, 1120, 503),
])
def test_real_projects(game_data, name, width, height, blocks, offsets):
    with (game_data / "GAMEDATA" / "1PBAT" / name / (name + ".PRJ")).open("rb") as fd:
        t = prj.decode(fd).terrain
    assert (t.width, t.height) == (width, height)
    assert len(t.heightmap1) == len(t.heightmap2) == blocks
    assert len(t.offsets) == offsets
