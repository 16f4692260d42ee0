"""IMA ADPCM blocks and raw 16-bit PCM blocks.

An audio stream is a list of blocks. ADPCMBlock carries its own starting
(sample, index) state, so every block decodes on its own; nothing is
carried over from the block before it. PCM16Block holds samples that
are already linear.
"""

from collections import namedtuple

import numpy as np

int16 = np.dtype("<i2")

INDEX_TABLE = (
    -1, -1, -1, -1, 2, 4, 6, 8,
    -1, -1, -1, -1, 2, 4, 6, 8,
)

STEP_TABLE = (
    7, 8, 9, 10, 11, 12, 13, 14, 16, 17,
    19, 21, 23, 25, 28, 31, 34, 37, 41, 45,
    50, 55, 60, 66, 73, 80, 88, 97, 107, 118,
    130, 143, 157, 173, 190, 209, 230, 253, 279, 307,
    337, 371, 408, 449, 494, 544, 598, 658, 724, 796,
    876, 963, 1060, 1166, 1282, 1411, 1552, 1707, 1878, 2066,
    2272, 2499, 2749, 3024, 3327, 3660, 4026, 4428, 4871, 5358,
    5894, 6484, 7132, 7845, 8630, 9493, 10442, 11487, 12635, 13899,
    15289, 16818, 18500, 20350, 22385, 24623, 27086, 29794, 32767,
)

MAX_INDEX = len(STEP_TABLE) - 1


class BlockDecoder:
    """Predictor state for one ADPCM block."""

    __slots__ = "sample", "index"

    def __init__(self, sample, index):
        self.sample = sample
        self.index = max(0, min(MAX_INDEX, index))

    def decode(self, nibble):
        step = STEP_TABLE[self.index]

        diff = step >> 3
        if nibble & 4: diff += step
        if nibble & 2: diff += step >> 1
        if nibble & 1: diff += step >> 2

        if nibble & 8:
            diff = -diff

        # self.sample may start out of int16 range, so clamp after adding
        self.sample = max(-32768, min(32767, self.sample + diff))
        self.index = max(0, min(MAX_INDEX, self.index + INDEX_TABLE[nibble]))

        return self.sample


class PCM16Block:
    """Signed 16-bit linear samples, stored as a read-only numpy array."""

    __slots__ = "samples",

    def __init__(self, samples):
        samples = np.array(samples, dtype=int16)
        samples.flags.writeable = False
        self.samples = samples

    @classmethod
    def frombytes(cls, data):
        return cls(np.frombuffer(data, dtype=int16, count=len(data) // 2))

    def __len__(self):
        return len(self.samples)

    def __eq__(self, other):
        if not isinstance(other, PCM16Block):
            return NotImplemented
        return np.array_equal(self.samples, other.samples)

    def __repr__(self):
        return "PCM16Block(<%d samples>)" % len(self.samples)

    def tobytes(self):
        return self.samples.tobytes()

    def as_pcm16(self):
        return self


class ADPCMBlock(namedtuple("ADPCMBlock", "sample index data")):
    """Initial predictor sample and step index, plus packed nibbles.

    Each data byte holds two samples, low nibble first.
    """

    __slots__ = ()

    def tobytes(self):
        return self.data

    def as_pcm16(self):
        d = BlockDecoder(self.sample, self.index)
        packed = np.frombuffer(self.data, dtype=np.uint8)
        nibbles = np.empty(len(packed) * 2, dtype=np.uint8)
        nibbles[0::2] = packed & 0x0F
        nibbles[1::2] = packed >> 4
        return PCM16Block([d.decode(n) for n in nibbles.tolist()])


def expand(blocks):
    """Concatenate the PCM expansion of every block."""
    if not blocks:
        return np.zeros(0, dtype=int16)
    return np.concatenate([b.as_pcm16().samples for b in blocks])
