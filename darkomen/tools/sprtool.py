"""Dump every frame of a .SPR sprite as a PNG file."""

import logging
from argparse import ArgumentParser, FileType
from pathlib import Path

from darkomen import spr

logger = logging.getLogger(__name__)

argparser = ArgumentParser(description=__doc__)
argparser.add_argument("file", type=FileType("rb"))
argparser.add_argument("out", type=Path, help="directory for the <frame>.png files")
argparser.add_argument("-v", "--verbose", action="store_true")


def main(argv=None):
    args = argparser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    with args.file as fd:
        sprite = spr.decode(fd)

    args.out.mkdir(parents=True, exist_ok=True)
    for i, frame in enumerate(sprite.frames):
        if frame.image is None:
            continue
        frame.image.save(args.out / ("%d.png" % i))
    logger.info("wrote %d frame(s) to %s",
                sum(f.image is not None for f in sprite.frames), args.out)


if __name__ == "__main__":
    main()
