"""Decoder for .DOT path maps: the routes drawn on the campaign map."""

import logging
from collections import namedtuple

from darkomen.binary import check_magic, parse_stream, read_stream
from darkomen.dot import dotstructs as structs

logger = logging.getLogger(__name__)

# file_name is the English map bitmap; localized executables name their own
Map = namedtuple("Map", "paths file_name")
Path = namedtuple("Path", "points")
Point = namedtuple("Point", "x y")


def decode(src):
    """Decode a path map from a binary stream or a bytes-like object."""
    fd = read_stream(src)

    hdr = parse_stream(structs.Header, fd, "path map header")
    check_magic("path map", hdr.format, structs.FORMAT)
    logger.debug("path map with %d path(s)", hdr.path_count)

    paths = []
    for i in range(hdr.path_count):
        p = parse_stream(structs.Path, fd, "path %d" % i)
        paths.append(Path(tuple(Point(pt.x, pt.y) for pt in p.points)))

    footer = parse_stream(structs.Footer, fd, "path map footer")

    return Map(tuple(paths), footer.map_file_name)
