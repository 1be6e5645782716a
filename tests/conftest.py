import io
import pytest
from gcadpcm.dsp import Dsp


def MakeFrame(header, codes):
    codes = list(codes)
    assert len(codes) == 14
    data = [header]
    for i in range(7):
        data.append(((codes[i * 2] & 0xF) << 4) | (codes[i * 2 + 1] & 0xF))
    return bytes(data)


def RepeatFrame(header, code, count):
    return MakeFrame(header, [code] * 14) * count


class FlakyReader():
    """Raises OSError for the first `failures` reads without consuming anything."""
    def __init__(self, data, failures=1):
        self.stream = io.BytesIO(data)
        self.failures = failures
        self.calls = []

    def read(self, count):
        self.calls.append((self.stream.tell(), count))
        if self.failures:
            self.failures -= 1
            raise OSError("device not ready")
        return self.stream.read(count)


@pytest.fixture
def zero_coefficients():
    return [0] * 16


@pytest.fixture
def accumulator_coefficients():
    # pair 0 predicts hist1 exactly, so each sample is hist1 + code * scale
    return [2048, 0] + [0] * 14


@pytest.fixture
def accumulator():
    def make(hist1=0, hist2=0):
        return Dsp([2048, 0] + [0] * 14, hist1, hist2)
    return make
