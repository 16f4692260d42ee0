import wave

from darkomen.audio.adpcm import int16

SAMPLE_RATE = 22050


def write(stream, fd):
    """Render a decoded mono or stereo stream as an uncompressed 16-bit WAV file.

    `fd` is a path or a binary file object opened for writing.
    """
    frames = stream.samples().astype(int16).tobytes()
    with wave.open(fd, "wb") as wf:
        wf.setnchannels(stream.channels)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(frames)
