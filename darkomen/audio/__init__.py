from darkomen.audio.adpcm import ADPCMBlock, PCM16Block
from darkomen.audio.mad import MonoStream, Sentinel
from darkomen.audio.sad import StereoSentinel, StereoStream

__all__ = [
    "ADPCMBlock", "PCM16Block", "MonoStream", "Sentinel", "StereoSentinel",
    "StereoStream",
]
