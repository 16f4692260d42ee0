"""Decoder for .M3D 3D model files.

After the 24 byte header come the texture table and then the objects.
Each object header is followed directly by its faces and then its
vertexes, and the counts live in that header, so objects can only be
found by walking the file from the start.
"""

import logging
from collections import namedtuple
from io import BytesIO

from darkomen.binary import Color, Vector, check_magic, parse_stream, read_source
from darkomen.errors import DecodeError
from darkomen.m3d import m3dstructs as structs
from darkomen.m3d.flags import has

logger = logging.getLogger(__name__)

Model = namedtuple("Model", "textures objects")
Texture = namedtuple("Texture", "path file_name")
Face = namedtuple("Face", "indexes texture_index normal")
Vertex = namedtuple("Vertex", "position normal color u v index")


class Object(namedtuple("Object", "name parent_index pivot flags faces vertexes")):
    __slots__ = ()

    def has_flags(self, test):
        return has(self.flags, test)

    @property
    def is_root(self):
        return self.parent_index == structs.ROOT


def read_textures(fd, count):
    textures = []
    for i in range(count):
        t = parse_stream(structs.Texture, fd, "texture %d" % i)
        textures.append(Texture(t.path, t.file_name))
    return tuple(textures)


def read_object(fd, i):
    hdr = parse_stream(structs.ObjectHeader, fd, "object %d" % i)

    faces = []
    for j in range(hdr.face_count):
        f = parse_stream(structs.Face, fd, "face %d of object %d" % (j, i))
        faces.append(Face(tuple(f.indexes), f.texture_index, f.normal))

    vertexes = []
    for j in range(hdr.vertex_count):
        v = parse_stream(structs.Vertex, fd, "vertex %d of object %d" % (j, i))
        vertexes.append(Vertex(v.position, v.normal, Color(v.r, v.g, v.b, v.a), v.u, v.v, v.index))

    for j, face in enumerate(faces):
        for index in face.indexes:
            if index >= len(vertexes):
                raise DecodeError("face %d of object %d (%s) references vertex %d, object has %d"
                                  % (j, i, hdr.name, index, len(vertexes)))

    return Object(hdr.name, hdr.parent_index, hdr.pivot, hdr.flags, tuple(faces), tuple(vertexes))


def check_tree(objects):
    """Every parent index names another object and the parents form a forest."""
    for i, obj in enumerate(objects):
        if obj.is_root:
            continue
        if not 0 <= obj.parent_index < len(objects):
            raise DecodeError("object %d (%s) has parent %d, model has %d object(s)"
                              % (i, obj.name, obj.parent_index, len(objects)))

    # objects known to lead to a root
    rooted = set()
    for i in range(len(objects)):
        seen = set()
        j = i
        while j not in rooted and not objects[j].is_root:
            if j in seen:
                raise DecodeError("object %d (%s) is part of a parent cycle" % (i, objects[i].name))
            seen.add(j)
            j = objects[j].parent_index
        rooted.update(seen)
        rooted.add(j)


def decode(src):
    """Decode a model from a bytes-like object or a binary file."""
    fd = BytesIO(read_source(src))

    hdr = parse_stream(structs.Header, fd, "model header")
    check_magic("model", hdr.format, structs.FORMAT)
    logger.debug("model version %d with %d texture(s), %d object(s)",
                 hdr.version, hdr.texture_count, hdr.object_count)

    textures = read_textures(fd, hdr.texture_count)
    objects = tuple(read_object(fd, i) for i in range(hdr.object_count))
    check_tree(objects)

    return Model(textures, objects)


__all__ = ["Color", "Face", "Model", "Object", "Texture", "Vector", "Vertex", "decode"]
