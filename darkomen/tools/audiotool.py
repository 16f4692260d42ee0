"""Convert a .MAD (mono) or .SAD (stereo) audio stream to a WAV file."""

import logging
from argparse import ArgumentParser, FileType
from pathlib import Path

from darkomen.audio import mad, sad, wav

logger = logging.getLogger(__name__)

argparser = ArgumentParser(description=__doc__)
argparser.add_argument("file", type=Path)
argparser.add_argument("out", type=FileType("wb"))
group = argparser.add_mutually_exclusive_group()
group.add_argument("--mono", dest="stereo", action="store_false", default=None,
                   help="read the file as .MAD whatever its extension")
group.add_argument("--stereo", dest="stereo", action="store_true", default=None,
                   help="read the file as .SAD whatever its extension")
argparser.add_argument("-v", "--verbose", action="store_true")


def main(argv=None):
    args = argparser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    stereo = args.stereo
    if stereo is None:
        stereo = args.file.suffix.upper() == ".SAD"
    codec = sad if stereo else mad

    with args.file.open("rb") as fd:
        stream = codec.decode(fd)

    with args.out as fd:
        wav.write(stream, fd)
    logger.info("wrote %d channel(s) at %d Hz", stream.channels, wav.SAMPLE_RATE)


if __name__ == "__main__":
    main()
