from construct import Array, Bytes, Int8ul, Int16ul, Int32ul, Padding, Struct

from darkomen.binary import FixedCString

FORMAT = b"\x9e\x02\x00\x00"

# save games put this much in front of the army header
SAVE_HEADER_SIZE = 504

Header = Struct(
    "format"                     / Bytes(4),
    "regiment_count"             / Int32ul,
    "regiment_size"              / Int32ul,
    "race"                       / Int8ul,
    "unknown1"                   / Bytes(3),
    "default_name"               / FixedCString(2),
    "army_name"                  / FixedCString(32),
    "small_banner_path"          / FixedCString(32),
    "small_banner_disabled_path" / FixedCString(32),
    "large_banner_path"          / FixedCString(32),
    "gold_from_treasures"        / Int16ul,
    "gold_in_coffers"            / Int16ul,
    "magic_items"                / Bytes(40),
    "unknown2"                   / Bytes(2),
)

TroopAttributes = Struct(
    "movement"        / Int8ul,
    "weapon_skill"    / Int8ul,
    "ballistic_skill" / Int8ul,
    "strength"        / Int8ul,
    "toughness"       / Int8ul,
    "wounds"          / Int8ul,
    "initiative"      / Int8ul,
    "attacks"         / Int8ul,
    "leadership"      / Int8ul,
)

Leader = Struct(
    "sprite_index"   / Int16ul,
    "name"           / FixedCString(32),
    Padding(9),
    "attributes"     / TroopAttributes,
    "mount"          / Int8ul,
    "armour"         / Int8ul,
    "weapon"         / Int8ul,
    "unit_type"      / Int8ul,
    "point_value"    / Int8ul,
    "missile_weapon" / Int8ul,
    "unknown7"       / Bytes(4),
    "head_id"        / Int16ul, # 3D head
    "x"              / Bytes(4),
    "y"              / Bytes(4),
)

Regiment = Struct(
    "status"                 / Bytes(2), # 11 00 with the player, 10 00 not
    "unknown1"               / Bytes(2),
    "id"                     / Int16ul,
    "unknown2"               / Bytes(2),
    "wizard_type"            / Int8ul,
    "max_armour"             / Int8ul,
    "cost"                   / Int16ul,
    "banner_index"           / Int16ul,
    "unknown3"               / Bytes(2),
    "regiment_attributes"    / Bytes(4),
    "sprite_index"           / Int16ul,
    "name"                   / FixedCString(32),
    "name_id"                / Int16ul,
    "alignment"              / Int8ul,
    "max_troops"             / Int8ul,
    "alive_troops"           / Int8ul,
    "ranks"                  / Int8ul,
    "unknown4"               / Bytes(4),
    "attributes"             / TroopAttributes,
    "mount"                  / Int8ul,
    "armour"                 / Int8ul,
    "weapon"                 / Int8ul,
    "type"                   / Int8ul, # race in the low 3 bits, type above
    "point_value"            / Int8ul,
    "missile_weapon"         / Int8ul,
    "unknown5"               / Int8ul,
    "unknown6"               / Bytes(4),
    "leader"                 / Leader,
    "experience"             / Int16ul,
    "duplicate_id"           / Int8ul,
    "min_armour"             / Int8ul,
    "magic_book"             / Int16ul,
    "magic_items"            / Array(3, Int16ul),
    Padding(12),
    "purchased_armour"       / Int8ul,
    "max_purchasable_armour" / Int8ul,
    "repurchased_troops"     / Int8ul,
    "max_purchasable_troops" / Int8ul,
    "book_profile"           / Bytes(4),
)
