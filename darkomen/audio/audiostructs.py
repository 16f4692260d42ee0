from construct import Int16sl, Struct

SENTINEL_INDEX = 99

MONO_BLOCK_SIZE = 1020
STEREO_BLOCK_SIZE = 1016
# stereo payloads alternate this many bytes of left then right data
STEREO_CHUNK = 4

MonoHeader = Struct(
    "sample" / Int16sl,
    "index"  / Int16sl,
)

StereoHeader = Struct(
    "left"  / MonoHeader,
    "right" / MonoHeader,
)
