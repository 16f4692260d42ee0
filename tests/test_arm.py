import pytest

from darkomen import arm
from darkomen.arm import (
    Alignment, RegimentRace, RegimentType, normalize_books_path, race_label,
    regiment_race, regiment_type, threat_level, type_label,
)
from darkomen.arm import armstructs as structs
from darkomen.errors import FormatError, TruncatedError

ATTRIBUTES = dict(movement=4, weapon_skill=3, ballistic_skill=3, strength=3, toughness=3,
                  wounds=1, initiative=3, attacks=1, leadership=7)


def regiment(**fields):
    values = dict(
        status=b"\x11\x00", unknown1=bytes(2), id=1, unknown2=bytes(2), wizard_type=0,
        max_armour=2, cost=100, banner_index=12, unknown3=bytes(2),
        regiment_attributes=bytes(4), sprite_index=34, name="Grudgebringer Cavalry",
        name_id=5, alignment=Alignment.GOOD, max_troops=12, alive_troops=10, ranks=2,
        unknown4=bytes(4), attributes=ATTRIBUTES, mount=1, armour=2, weapon=3,
        type=(RegimentType.CAVALRY << 3) | RegimentRace.HUMAN, point_value=9,
        missile_weapon=0, unknown5=0, unknown6=bytes(4),
        leader=dict(
            sprite_index=35, name="Morgan Bernhardt", attributes=ATTRIBUTES,
            mount=1, armour=2, weapon=3, unit_type=0, point_value=9, missile_weapon=0,
            unknown7=bytes(4), head_id=7, x=bytes(4), y=bytes(4),
        ),
        experience=1500, duplicate_id=0, min_armour=1, magic_book=arm.UNUSABLE_SLOT,
        magic_items=[1, 0, arm.UNUSABLE_SLOT], purchased_armour=0,
        max_purchasable_armour=3, repurchased_troops=0, max_purchasable_troops=12,
        book_profile=bytes(4),
    )
    values.update(fields)
    return structs.Regiment.build(values)


def build_army(regiments, regiment_size=structs.Regiment.sizeof(), count=None):
    return structs.Header.build(dict(
        format=structs.FORMAT,
        regiment_count=len(regiments) if count is None else count,
        regiment_size=regiment_size,
        race=0, unknown1=bytes(3), default_name="",
        army_name="Grudgebringers",
        small_banner_path="[BOOKS]\\HBGRUDGE.SPR",
        small_banner_disabled_path="[BOOKS]\\HBGRUDGD.SPR",
        large_banner_path="",
        gold_from_treasures=250, gold_in_coffers=1000,
        magic_items=bytes(40), unknown2=bytes(2),
    )) + b"".join(r.ljust(regiment_size, b"\x00") for r in regiments)


def test_decode():
    a = arm.decode(build_army([regiment(), regiment(id=2, experience=6000)]))
    assert a.army_name == "Grudgebringers"
    assert a.small_banner_path == "BOOKS/HBGRUDGE.SPR"
    assert a.small_banner_disabled_path == "BOOKS/HBGRUDGD.SPR"
    assert a.large_banner_path == ""
    assert (a.gold_from_treasures, a.gold_in_coffers) == (250, 1000)
    assert len(a.regiments) == 2

    r = a.regiments[0]
    assert r.name == "Grudgebringer Cavalry"
    assert r.status == b"\x11\x00"
    assert r.regiment_type == RegimentType.CAVALRY
    assert r.race == RegimentRace.HUMAN
    assert r.alignment_kind == Alignment.GOOD
    assert r.threat_level == 2
    assert r.attributes.leadership == 7
    assert r.magic_items == (1, 0, arm.UNUSABLE_SLOT)
    assert r.leader.name == "Morgan Bernhardt"
    assert r.leader.head_id == 7
    assert a.regiments[1].threat_level == 4


def test_save_game_prefix():
    a = arm.decode(bytes(structs.SAVE_HEADER_SIZE) + build_army([regiment()]))
    assert len(a.regiments) == 1


def test_bad_magic():
    with pytest.raises(FormatError):
        arm.decode(bytes(1000))


def test_wider_regiment_records():
    a = arm.decode(build_army([regiment(id=1), regiment(id=2)],
                              regiment_size=structs.Regiment.sizeof() + 12))
    assert [r.id for r in a.regiments] == [1, 2]


def test_not_enough_regiments():
    with pytest.raises(TruncatedError, match="expected to find 3") as exc:
        arm.decode(build_army([regiment()], count=3))
    assert exc.value.index == 1


def test_unknown_alignment():
    r, = arm.decode(build_army([regiment(alignment=0x20)])).regiments
    assert r.alignment_kind is None


@pytest.mark.parametrize("typ, want_type, want_race", [
    ((1 << 3) | 2, RegimentType.INFANTRY, RegimentRace.DWARF),
    ((6 << 3) | 7, RegimentType.MONSTERS, RegimentRace.OGRE),
    ((31 << 3) | 5, RegimentType.UNKNOWN, RegimentRace.UNDEAD),
])
def test_type_and_race(typ, want_type, want_race):
    assert regiment_type(typ) == want_type
    assert regiment_race(typ) == want_race


def test_labels():
    assert type_label((5 << 3) | 1) == "Magic users"
    assert race_label((5 << 3) | 1) == "Wood Elf"
    assert type_label(31 << 3) == "Unknown"


@pytest.mark.parametrize("experience, want", [
    (0, 1), (999, 1), (1000, 2), (2999, 2), (3000, 3), (5999, 3), (6000, 4),
])
def test_threat_level(experience, want):
    assert threat_level(experience) == want


@pytest.mark.parametrize("path, want", [
    ("[BOOKS]\\HBGRUDGE.SPR", "BOOKS/HBGRUDGE.SPR"),
    ("[BOOKS]\\", "BOOKS"),
    ("", ""),
])
def test_normalize_books_path(path, want):
    assert normalize_books_path(path) == want


def test_short_file_with_bad_magic():
    with pytest.raises(FormatError, match="unknown army format b'ABCD'"):
        arm.decode(b"ABCD" + bytes(300))
