"""Tables embedded in the game executable, PRG_ENG/ENGREL.EXE.

Regiments refer to sprites and magic items by index; these tables turn
the indexes into names.
"""

from darkomen.binary import cstring, read_source
from darkomen.errors import TruncatedError

SPRITE_NAMES_OFFSET = 0x000CCB54
SPRITE_COUNT = 252
SPRITE_NAME_SIZE = 44

MAGIC_ITEM_NAMES_OFFSET = 0x000DB374
MAGIC_ITEM_COUNT = 64


def _sprite_name(data, index):
    if not 0 <= index < SPRITE_COUNT:
        raise IndexError("sprite name index must be less than %d, got %d" % (SPRITE_COUNT, index))
    offset = SPRITE_NAMES_OFFSET + SPRITE_NAME_SIZE * index
    buf = data[offset:offset + SPRITE_NAME_SIZE]
    if len(buf) != SPRITE_NAME_SIZE:
        raise TruncatedError("could not read sprite name %d: read %d byte(s), expected %d"
                             % (index, len(buf), SPRITE_NAME_SIZE), index=index)
    return cstring(buf)


def read_sprite_names(src):
    data = read_source(src)
    return [_sprite_name(data, i) for i in range(SPRITE_COUNT)]


def read_sprite_name(src, index):
    return _sprite_name(read_source(src), index)


def read_magic_item_names(src):
    """The 64 magic item names; index 0 is "Not used."

    The executable stores them last to first with empty strings between
    some of them.
    """
    data = bytes(read_source(src)[MAGIC_ITEM_NAMES_OFFSET:])

    # the last piece has no terminator
    found = [s for s in data.split(b"\x00")[:-1] if s][:MAGIC_ITEM_COUNT]
    if len(found) != MAGIC_ITEM_COUNT:
        raise TruncatedError("found %d magic item name(s), expected %d"
                             % (len(found), MAGIC_ITEM_COUNT),
                             expected=MAGIC_ITEM_COUNT, index=len(found))

    return [s.decode("latin-1") for s in reversed(found)]


def read_magic_item_name(src, index):
    if not 0 <= index < MAGIC_ITEM_COUNT:
        raise IndexError("magic item index must be less than %d, got %d" % (MAGIC_ITEM_COUNT, index))
    return read_magic_item_names(src)[index]
