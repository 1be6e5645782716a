from struct import pack
from itertools import islice
import wave

CHUNK_SAMPLES = 0x1000


def WriteWave(filename, samples, channels=1, samplerate=32000):
    """
    Write interleaved 16-bit samples to a wav file.
    Returns the number of sample frames written.
    """
    if channels not in (1, 2):
        raise ValueError("unsupported channel count {}".format(channels))
    iterator = iter(samples)
    total = 0
    with wave.open(filename, "wb") as wavefile:
        wavefile.setparams((channels, 2, samplerate, 0, "NONE", "not compressed"))
        chunk = list(islice(iterator, CHUNK_SAMPLES))
        while chunk:
            if len(chunk) % channels:
                raise ValueError("sample count is not a multiple of {} channels".format(channels))
            wavefile.writeframes(pack("<" + str(len(chunk)) + "h", *chunk))
            total += len(chunk)
            chunk = list(islice(iterator, CHUNK_SAMPLES))
    return total // channels
