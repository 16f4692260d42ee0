from collections import namedtuple
from enum import IntEnum

# a magic item slot the regiment can't use, or a missing magic book slot
UNUSABLE_SLOT = 0xFFFF


class RegimentType(IntEnum):
    UNKNOWN = 0
    INFANTRY = 1
    CAVALRY = 2
    ARCHERS = 3
    ARTILLERY = 4
    MAGIC_USERS = 5
    MONSTERS = 6
    CHARIOTS = 7
    MISC = 8


class RegimentRace(IntEnum):
    HUMAN = 0
    WOOD_ELF = 1
    DWARF = 2
    NIGHT_GOBLIN = 3
    ORC = 4
    UNDEAD = 5
    TOWNSFOLK = 6
    OGRE = 7 # the Imperial Steam Tank is here too


class Alignment(IntEnum):
    GOOD = 0x00
    NEUTRAL = 0x40
    EVIL = 0x80


TYPE_LABELS = {
    RegimentType.INFANTRY: "Infantry",
    RegimentType.CAVALRY: "Cavalry",
    RegimentType.ARCHERS: "Archers",
    RegimentType.ARTILLERY: "Artillery",
    RegimentType.MAGIC_USERS: "Magic users",
    RegimentType.MONSTERS: "Monsters",
    RegimentType.CHARIOTS: "Chariots",
}

RACE_LABELS = {
    RegimentRace.HUMAN: "Human",
    RegimentRace.WOOD_ELF: "Wood Elf",
    RegimentRace.DWARF: "Dwarf",
    RegimentRace.NIGHT_GOBLIN: "Night Goblin",
    RegimentRace.ORC: "Orc",
    RegimentRace.UNDEAD: "Undead",
    RegimentRace.TOWNSFOLK: "Townsfolk",
    RegimentRace.OGRE: "Ogre",
}


def regiment_type(typ):
    """Type from the high 5 bits of the type/race byte."""
    try:
        return RegimentType(typ >> 3)
    except ValueError:
        return RegimentType.UNKNOWN


def regiment_race(typ):
    return RegimentRace(typ & 0b111)


def type_label(typ):
    return TYPE_LABELS.get(regiment_type(typ), "Unknown")


def race_label(typ):
    return RACE_LABELS[regiment_race(typ)]


def threat_level(experience):
    if experience < 1000:
        return 1
    if experience < 3000:
        return 2
    if experience < 6000:
        return 3
    return 4


TroopAttributes = namedtuple("TroopAttributes", """
    movement
    weapon_skill
    ballistic_skill
    strength
    toughness
    wounds
    initiative
    attacks
    leadership
""")

Leader = namedtuple("Leader", """
    name
    sprite_index
    attributes
    mount
    armour
    weapon
    unit_type
    point_value
    missile_weapon
    head_id
""")


class Regiment(namedtuple("Regiment", """
    status
    id
    name
    name_id
    alignment
    type
    banner_index
    sprite_index
    max_troops
    alive_troops
    ranks
    attributes
    mount
    armour
    weapon
    point_value
    missile_weapon
    leader
    experience
    min_armour
    max_armour
    magic_book
    magic_items
    cost
    wizard_type
    duplicate_id
    purchased_armour
    max_purchasable_armour
    repurchased_troops
    max_purchasable_troops
""")):
    """One regiment of an army.

    banner_index and sprite_index (and the leader's sprite_index) index the
    sprite name table of the game executable, see darkomen.engrel.
    magic_book and magic_items index the magic item name table; 0 is an
    empty slot and UNUSABLE_SLOT a slot the regiment doesn't have.
    Experience runs from 0 to 6000.
    """

    __slots__ = ()

    @property
    def regiment_type(self):
        return regiment_type(self.type)

    @property
    def race(self):
        return regiment_race(self.type)

    @property
    def threat_level(self):
        return threat_level(self.experience)

    @property
    def alignment_kind(self):
        try:
            return Alignment(self.alignment)
        except ValueError:
            return None
