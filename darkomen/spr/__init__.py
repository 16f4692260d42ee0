from darkomen.spr.spr import Frame, Sprite, decode
from darkomen.spr.sprstructs import Compression, FrameType

__all__ = ["Compression", "Frame", "FrameType", "Sprite", "decode"]
