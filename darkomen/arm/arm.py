"""Decoder for .ARM army files and the army part of save games.

A save game has a 504 byte prefix, then the same layout as an .ARM
file: a 192 byte header followed by fixed-size regiment records.
"""

import logging
import posixpath
from collections import namedtuple

from darkomen.arm import armstructs as structs
from darkomen.arm.regiment import Leader, Regiment, TroopAttributes
from darkomen.binary import check_magic, parse_at, read_source
from darkomen.errors import DecodeError, TruncatedError

logger = logging.getLogger(__name__)

Army = namedtuple("Army", """
    race
    army_name
    regiments
    small_banner_path
    small_banner_disabled_path
    large_banner_path
    gold_from_treasures
    gold_in_coffers
    magic_items
""")


def normalize_books_path(p):
    r"""Turn "[BOOKS]\HBGRUDGE.SPR" into "BOOKS/HBGRUDGE.SPR"."""
    parts = p.replace("[BOOKS]", "BOOKS").split("\\")
    return posixpath.normpath(posixpath.join(*parts)) if any(parts) else ""


def _regiment(r):
    leader = r.leader
    return Regiment(
        status=r.status,
        id=r.id,
        name=r.name,
        name_id=r.name_id,
        alignment=r.alignment,
        type=r.type,
        banner_index=r.banner_index,
        sprite_index=r.sprite_index,
        max_troops=r.max_troops,
        alive_troops=r.alive_troops,
        ranks=r.ranks,
        attributes=TroopAttributes(**_fields(r.attributes)),
        mount=r.mount,
        armour=r.armour,
        weapon=r.weapon,
        point_value=r.point_value,
        missile_weapon=r.missile_weapon,
        leader=Leader(
            name=leader.name,
            sprite_index=leader.sprite_index,
            attributes=TroopAttributes(**_fields(leader.attributes)),
            mount=leader.mount,
            armour=leader.armour,
            weapon=leader.weapon,
            unit_type=leader.unit_type,
            point_value=leader.point_value,
            missile_weapon=leader.missile_weapon,
            head_id=leader.head_id,
        ),
        experience=r.experience,
        min_armour=r.min_armour,
        max_armour=r.max_armour,
        magic_book=r.magic_book,
        magic_items=tuple(r.magic_items),
        cost=r.cost,
        wizard_type=r.wizard_type,
        duplicate_id=r.duplicate_id,
        purchased_armour=r.purchased_armour,
        max_purchasable_armour=r.max_purchasable_armour,
        repurchased_troops=r.repurchased_troops,
        max_purchasable_troops=r.max_purchasable_troops,
    )


def _fields(container):
    return {k: v for k, v in container.items() if not k.startswith("_")}


def read_regiments(data, hdr, start):
    size = hdr.regiment_size
    if hdr.regiment_count and size < structs.Regiment.sizeof():
        raise DecodeError("regiment records are %d byte(s), expected at least %d"
                          % (size, structs.Regiment.sizeof()))

    regiments = []
    for i in range(hdr.regiment_count):
        offset = start + structs.Header.sizeof() + i * size
        buf = data[offset:offset + size]
        if len(buf) != size:
            raise TruncatedError(
                "army does not contain enough regiments, expected to find %d, "
                "but got EOF while reading regiment at index %d" % (hdr.regiment_count, i),
                expected=hdr.regiment_count, index=i)
        regiments.append(_regiment(structs.Regiment.parse(buf[:structs.Regiment.sizeof()])))
    return tuple(regiments)


def decode(src):
    """Decode an army from an .ARM file or a save game."""
    data = read_source(src)

    start = 0
    if bytes(data[:len(structs.FORMAT)]) != structs.FORMAT:
        if len(data) < structs.SAVE_HEADER_SIZE + len(structs.FORMAT):
            # too short for a save game, report the army magic
            check_magic("army", data[:len(structs.FORMAT)], structs.FORMAT)
        logger.debug("no army header at 0, reading as a save game")
        start = structs.SAVE_HEADER_SIZE

    hdr = parse_at(structs.Header, data, start, "army header")
    check_magic("army", hdr.format, structs.FORMAT)
    logger.debug("army %r with %d regiment(s) of %d byte(s)",
                 hdr.army_name, hdr.regiment_count, hdr.regiment_size)

    return Army(
        race=hdr.race,
        army_name=hdr.army_name,
        regiments=read_regiments(data, hdr, start),
        small_banner_path=normalize_books_path(hdr.small_banner_path),
        small_banner_disabled_path=normalize_books_path(hdr.small_banner_disabled_path),
        large_banner_path=normalize_books_path(hdr.large_banner_path),
        gold_from_treasures=hdr.gold_from_treasures,
        gold_in_coffers=hdr.gold_in_coffers,
        magic_items=hdr.magic_items,
    )
