from enum import IntFlag


class ModelFlags(IntFlag):
    TRANSLUCENCY = 1 << 0
    UV_ANIMATION = 1 << 1
    ALPHA_TRANSPARENCY = 1 << 2
    COLOR_KEYING = 1 << 4


def has(flags, test):
    return bool(flags & test)


def model_flags(file_name):
    """Flags embedded in a model's file name.

    "_<c>NAME.M3D" carries the flags as the base 36 digit <c>, any other
    name has none. The game only uses _4, _6, _7 and _K.
    """
    if len(file_name) < len("_0.M3D"):
        return ModelFlags(0)
    if not file_name.upper().endswith(".M3D"):
        return ModelFlags(0)
    if file_name[0] != "_":
        return ModelFlags(0)

    c = file_name[1]
    if c.isascii() and c.isalnum():
        return ModelFlags(int(c, 36))
    return ModelFlags(0)
