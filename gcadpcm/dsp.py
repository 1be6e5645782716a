from struct import unpack

FRAME_SIZE = 8
SAMPLES_PER_FRAME = 14
COEFFICIENT_COUNT = 16
sign4 = 1 << 3
INT16_MIN = -32768
INT16_MAX = 32767


def NibbleToSigned(value):
    return (value & (sign4 - 1)) - (value & sign4)


def Clamp16(value):
    return max(INT16_MIN, min(value, INT16_MAX))


def IsInteger(value):
    return isinstance(value, int) and not isinstance(value, bool)


def FramesForSamples(samples):
    return (samples + SAMPLES_PER_FRAME - 1) // SAMPLES_PER_FRAME


class Dsp():
    """
    Decoder state of a single DSP ADPCM channel.
    hist1 is the last decoded sample, hist2 the one before it.
    """
    def __init__(self, coefficients, hist1=0, hist2=0):
        coefficients = list(coefficients)
        if len(coefficients) != COEFFICIENT_COUNT:
            raise ValueError("expected {} coefficients, got {}".format(COEFFICIENT_COUNT, len(coefficients)))
        for value in [*coefficients, hist1, hist2]:
            if not IsInteger(value):
                raise ValueError("{!r} is not an integer".format(value))
            if not INT16_MIN <= value <= INT16_MAX:
                raise ValueError("{} does not fit in a signed 16-bit value".format(value))
        self.coefficients = coefficients
        self.hist1 = hist1
        self.hist2 = hist2

    @staticmethod
    def FromDict(dict):
        return Dsp(dict["Coefficients"], dict.get("Hist1", 0), dict.get("Hist2", 0))

    def ToDict(self):
        return {
            "Coefficients": list(self.coefficients),
            "Hist1": self.hist1,
            "Hist2": self.hist2
        }

    def DecodeFrame(self, frame):
        """
        Decode one 8 byte frame into 14 samples, oldest first.
        Frames have to be decoded in stream order since hist1/hist2 carry over.
        """
        if len(frame) != FRAME_SIZE:
            raise ValueError("a frame is {} bytes, got {}".format(FRAME_SIZE, len(frame)))
        temp = unpack("B7s", bytes(frame))
        header = temp[0]
        scale = 1 << (header & 0xF)
        # only 8 coefficient pairs exist
        coefindex = (header >> 4) & 0x7
        coef1 = self.coefficients[coefindex * 2]
        coef2 = self.coefficients[coefindex * 2 + 1]
        pcms = []
        for byte in temp[1]:
            for nibble in ((byte >> 4) & 0xF, byte & 0xF):
                code = NibbleToSigned(nibble)
                prediction = coef1 * self.hist1 + coef2 * self.hist2
                result = (((scale * code) << 11) + 1024 + prediction) >> 11
                result = Clamp16(result)
                pcms.append(result)
                self.hist2 = self.hist1
                self.hist1 = result
        return pcms

    def __repr__(self):
        return "<Dsp hist1 {} hist2 {} coefficients {}>".format(
            self.hist1,
            self.hist2,
            self.coefficients
        )
