from darkomen.m3d.flags import ModelFlags, has, model_flags
from darkomen.m3d.m3d import Color, Face, Model, Object, Texture, Vertex, decode

__all__ = [
    "Color", "Face", "Model", "ModelFlags", "Object", "Texture", "Vertex",
    "decode", "has", "model_flags",
]
