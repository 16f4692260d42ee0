"""Dump the textures and objects of a .M3D model as JSON files."""

import json
import logging
from argparse import ArgumentParser, FileType
from pathlib import Path

from darkomen import m3d

logger = logging.getLogger(__name__)

argparser = ArgumentParser(description=__doc__)
argparser.add_argument("file", type=FileType("rb"))
argparser.add_argument("out", type=Path)
argparser.add_argument("-v", "--verbose", action="store_true")


def texture_json(t):
    return {"path": t.path, "file_name": t.file_name}


def object_json(o):
    return {
        "name": o.name,
        "parent_index": o.parent_index,
        "pivot": list(o.pivot),
        "flags": o.flags,
        "faces": [
            {"indexes": list(f.indexes), "texture_index": f.texture_index,
             "normal": list(f.normal)}
            for f in o.faces
        ],
        "vertexes": [
            {"position": list(v.position), "normal": list(v.normal),
             "color": list(v.color), "u": v.u, "v": v.v, "index": v.index}
            for v in o.vertexes
        ],
    }


def main(argv=None):
    args = argparser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    with args.file as fd:
        name = Path(fd.name).name
        model = m3d.decode(fd)

    logger.info("%s: flags %r", name, m3d.model_flags(name))

    args.out.mkdir(parents=True, exist_ok=True)
    for kind, items, convert in (("texture", model.textures, texture_json),
                                 ("object", model.objects, object_json)):
        for i, item in enumerate(items):
            with (args.out / ("%s-%d.json" % (kind, i))).open("w") as fd:
                json.dump(convert(item), fd, indent=2)


if __name__ == "__main__":
    main()
