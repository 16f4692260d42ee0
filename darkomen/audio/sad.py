"""Stereo .SAD audio streams.

Each block starts with an 8 byte header, (sample, index) for the left
channel then the right. Both indexes equal to 99 mark the sentinel.
Otherwise 1016 bytes of nibbles follow, alternating 4 bytes of left
data with 4 bytes of right data. After the sentinel the rest of the
file is raw PCM, one 16-bit left sample then one right sample.

encode() is the inverse of decode(): a decoded file encodes back
to the same bytes when its PCM tail is whole sample pairs.
"""

import logging
from collections import namedtuple

import numpy as np

from darkomen.audio.adpcm import ADPCMBlock, PCM16Block, expand, int16
from darkomen.audio.audiostructs import (
    SENTINEL_INDEX, STEREO_BLOCK_SIZE, STEREO_CHUNK, StereoHeader,
)
from darkomen.audio.mad import Sentinel
from darkomen.binary import read_exact, read_stream
from darkomen.errors import EncodeError, TruncatedError

logger = logging.getLogger(__name__)

StereoSentinel = namedtuple("StereoSentinel", "left right")


class StereoStream(namedtuple("StereoStream", "left right sentinel")):
    __slots__ = ()

    channels = 2

    def samples(self):
        """Expanded samples as an (n, 2) array of left/right pairs."""
        return np.column_stack([expand(self.left), expand(self.right)])


def _split(payload):
    chunks = np.frombuffer(payload, dtype=np.uint8).reshape(-1, 2, STEREO_CHUNK)
    return chunks[:, 0].tobytes(), chunks[:, 1].tobytes()


def _join(left, right):
    left = np.frombuffer(left, dtype=np.uint8).reshape(-1, 1, STEREO_CHUNK)
    right = np.frombuffer(right, dtype=np.uint8).reshape(-1, 1, STEREO_CHUNK)
    return np.concatenate([left, right], axis=1).tobytes()


def decode(src):
    fd = read_stream(src)
    left, right = [], []

    while True:
        buf = fd.read(StereoHeader.sizeof())
        if not buf:
            logger.debug("stream ended without a sentinel after %d block(s)", len(left))
            return StereoStream(tuple(left), tuple(right), None)
        if len(buf) != StereoHeader.sizeof():
            raise TruncatedError("could not read stereo sample and index data of block %d: "
                                 "read %d byte(s), expected %d"
                                 % (len(left), len(buf), StereoHeader.sizeof()),
                                 index=len(left))
        hdr = StereoHeader.parse(buf)
        if hdr.left.index == SENTINEL_INDEX and hdr.right.index == SENTINEL_INDEX:
            break

        payload = read_exact(fd, STEREO_BLOCK_SIZE, "stereo ADPCM data of block %d" % len(left))
        ldata, rdata = _split(payload)
        left.append(ADPCMBlock(hdr.left.sample, hdr.left.index, ldata))
        right.append(ADPCMBlock(hdr.right.sample, hdr.right.index, rdata))

    tail = fd.read()
    if len(tail) % 4:
        logger.warning("PCM tail of %d byte(s) is not whole sample pairs, dropping %d byte(s)",
                       len(tail), len(tail) % 4)
    pcm = np.frombuffer(tail, dtype=int16, count=len(tail) // 4 * 2).reshape(-1, 2)
    left.append(PCM16Block(pcm[:, 0]))
    right.append(PCM16Block(pcm[:, 1]))
    logger.debug("decoded %d ADPCM block pair(s) and %d PCM sample pair(s)",
                 len(left) - 1, len(pcm))

    sentinel = StereoSentinel(Sentinel(hdr.left.sample, hdr.left.index),
                              Sentinel(hdr.right.sample, hdr.right.index))
    return StereoStream(tuple(left), tuple(right), sentinel)


def encode(stream, fd):
    """Write `stream` to the binary file `fd` in .SAD layout.

    The PCM tail is written as whole left/right pairs, so bytes dropped
    from a tail that was not a multiple of 4 bytes long are not restored.
    """
    left, right = stream.left, stream.right
    if len(left) != len(right):
        raise EncodeError("left channel has %d block(s), right channel has %d"
                          % (len(left), len(right)))

    tail = None
    if stream.sentinel is not None:
        if not left or not isinstance(left[-1], PCM16Block) or not isinstance(right[-1], PCM16Block):
            raise EncodeError("stream has a sentinel but does not end with PCM blocks")
        if len(left[-1]) != len(right[-1]):
            raise EncodeError("PCM tails differ in length: %d left, %d right"
                              % (len(left[-1]), len(right[-1])))
        tail = (left[-1], right[-1])
        left, right = left[:-1], right[:-1]

    for i, (lblock, rblock) in enumerate(zip(left, right)):
        for side, block in (("left", lblock), ("right", rblock)):
            if not isinstance(block, ADPCMBlock):
                raise EncodeError("%s block at position %d is not an ADPCM block" % (side, i))
            if len(block.data) != STEREO_BLOCK_SIZE // 2:
                raise EncodeError("%s block at position %d holds %d byte(s), expected %d"
                                  % (side, i, len(block.data), STEREO_BLOCK_SIZE // 2))
        fd.write(StereoHeader.build(dict(
            left=dict(sample=lblock.sample, index=lblock.index),
            right=dict(sample=rblock.sample, index=rblock.index),
        )))
        fd.write(_join(lblock.data, rblock.data))

    if tail is not None:
        lsent, rsent = stream.sentinel
        fd.write(StereoHeader.build(dict(
            left=dict(sample=lsent.sample, index=lsent.index),
            right=dict(sample=rsent.sample, index=rsent.index),
        )))
        fd.write(np.column_stack([tail[0].samples, tail[1].samples]).astype(int16).tobytes())
