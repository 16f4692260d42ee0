"""Mono .MAD audio streams.

A stream is a run of ADPCM blocks, each a 4 byte (sample, index) header
followed by 1020 bytes of nibbles. A header whose index is 99 is the
sentinel: every byte after it is raw 16-bit PCM. Some streams have no
sentinel and simply end after their last ADPCM block.
"""

import logging
from collections import namedtuple

from darkomen.audio.adpcm import ADPCMBlock, PCM16Block, expand
from darkomen.audio.audiostructs import MONO_BLOCK_SIZE, SENTINEL_INDEX, MonoHeader
from darkomen.binary import read_exact, read_stream
from darkomen.errors import EncodeError, TruncatedError

logger = logging.getLogger(__name__)

Sentinel = namedtuple("Sentinel", "sample index")


class MonoStream(namedtuple("MonoStream", "blocks sentinel")):
    """Decoded mono stream.

    `sentinel` is the (sample, index) pair that introduced the PCM tail,
    kept so that the stream encodes back to the same bytes, or None if
    the stream had no tail.
    """

    __slots__ = ()

    channels = 1

    def samples(self):
        return expand(self.blocks)


def decode(src):
    fd = read_stream(src)
    blocks = []

    while True:
        buf = fd.read(MonoHeader.sizeof())
        if not buf:
            logger.debug("stream ended without a sentinel after %d block(s)", len(blocks))
            return MonoStream(tuple(blocks), None)
        if len(buf) != MonoHeader.sizeof():
            raise TruncatedError("could not read header of block %d: read %d byte(s), expected %d"
                                 % (len(blocks), len(buf), MonoHeader.sizeof()),
                                 index=len(blocks))
        hdr = MonoHeader.parse(buf)
        if hdr.index == SENTINEL_INDEX:
            break
        data = read_exact(fd, MONO_BLOCK_SIZE, "mono ADPCM data of block %d" % len(blocks))
        blocks.append(ADPCMBlock(hdr.sample, hdr.index, data))

    tail = fd.read()
    if len(tail) % 2:
        logger.warning("odd PCM tail length %d, dropping the last byte", len(tail))
    blocks.append(PCM16Block.frombytes(tail))
    logger.debug("decoded %d ADPCM block(s) and %d PCM sample(s)",
                 len(blocks) - 1, len(blocks[-1]))

    return MonoStream(tuple(blocks), Sentinel(hdr.sample, hdr.index))


def encode(stream, fd):
    """Write `stream` to the binary file `fd` in .MAD layout.

    Decoding then encoding gives back the same bytes, except that a PCM
    tail with an odd byte count comes back without its last byte.
    """
    blocks = stream.blocks
    tail = None
    if stream.sentinel is not None:
        if not blocks or not isinstance(blocks[-1], PCM16Block):
            raise EncodeError("stream has a sentinel but does not end with a PCM block")
        blocks, tail = blocks[:-1], blocks[-1]

    for i, block in enumerate(blocks):
        if not isinstance(block, ADPCMBlock):
            raise EncodeError("block %d is not an ADPCM block" % i)
        if len(block.data) != MONO_BLOCK_SIZE:
            raise EncodeError("block %d holds %d byte(s), expected %d"
                              % (i, len(block.data), MONO_BLOCK_SIZE))
        fd.write(MonoHeader.build(dict(sample=block.sample, index=block.index)))
        fd.write(block.data)

    if tail is not None:
        fd.write(MonoHeader.build(dict(sample=stream.sentinel.sample,
                                       index=stream.sentinel.index)))
        fd.write(tail.tobytes())
