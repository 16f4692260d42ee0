"""Print the sprite or magic item name table of ENGREL.EXE."""

import logging
from argparse import ArgumentParser, FileType

from darkomen import engrel

argparser = ArgumentParser(description=__doc__)
argparser.add_argument("file", type=FileType("rb"))
argparser.add_argument("--magic-items", action="store_true",
                       help="print magic item names instead of sprite names")
argparser.add_argument("-v", "--verbose", action="store_true")


def main(argv=None):
    args = argparser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    with args.file as fd:
        data = fd.read()

    if args.magic_items:
        names = engrel.read_magic_item_names(data)
    else:
        names = engrel.read_sprite_names(data)

    for i, name in enumerate(names):
        print("%d\t%s" % (i, name))


if __name__ == "__main__":
    main()
