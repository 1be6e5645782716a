import logging
from collections import deque
from enum import Enum
from gcadpcm.dsp import FRAME_SIZE, SAMPLES_PER_FRAME, FramesForSamples
from gcadpcm.filestream import ReadExact

log = logging.getLogger(__name__)


class Layout(Enum):
    Mono = "Mono"
    Stereo = "Stereo"
    StereoInterleaved = "StereoInterleaved"


def ResolveFrames(frames, samples):
    if (frames is None) == (samples is None):
        raise ValueError("give either frames or samples")
    if (frames if samples is None else samples) < 0:
        raise ValueError("length can not be negative")
    return frames if samples is None else FramesForSamples(samples)


def Interleave(left, right):
    result = []
    for l, r in zip(left, right):
        result.append(l)
        result.append(r)
    return result


class Decoder():
    """
    Pull based decoder. Iterating yields signed 16-bit samples, interleaved
    left/right for stereo layouts.

    A failing read is raised from next() without touching the counters or
    the DSP state, so calling next() again repeats the same read.
    """
    ChannelLayout = None
    Channels = 1
    FramesPerStep = 1

    def __init__(self, totalframes):
        self.__framesremaining = totalframes
        self.__buffer = deque()

    def _DecodeStep(self):
        raise NotImplementedError

    def __iter__(self):
        return self

    def __next__(self):
        if not self.__buffer:
            if self.__framesremaining == 0:
                raise StopIteration
            samples = self._DecodeStep()
            self.__buffer.extend(samples)
            self.__framesremaining -= self.FramesPerStep
            log.debug("{} decoded {} samples, {} frames remaining".format(
                self.ChannelLayout.name, len(samples), self.__framesremaining))
        return self.__buffer.popleft()

    def __length_hint__(self):
        stepsamples = SAMPLES_PER_FRAME * self.Channels
        return len(self.__buffer) + (self.__framesremaining // self.FramesPerStep) * stepsamples

    @property
    def FramesRemaining(self):
        return self.__framesremaining

    @property
    def Buffered(self):
        return len(self.__buffer)

    def __repr__(self):
        return "<{} frames remaining {} buffered {}>".format(
            self.__class__.__name__,
            self.__framesremaining,
            len(self.__buffer)
        )


class MonoDecoder(Decoder):
    ChannelLayout = Layout.Mono

    def __init__(self, reader, state, frames=None, samples=None):
        super().__init__(ResolveFrames(frames, samples))
        self.__reader = reader
        self.__state = state

    def _DecodeStep(self):
        frame = ReadExact(self.__reader, FRAME_SIZE)
        return self.__state.DecodeFrame(frame)

    @property
    def State(self):
        return self.__state


class StereoDecoder(Decoder):
    """Two channels, each in its own stream."""
    ChannelLayout = Layout.Stereo
    Channels = 2

    def __init__(self, leftreader, leftstate, rightreader, rightstate, frames=None, samples=None):
        super().__init__(ResolveFrames(frames, samples))
        self.__leftreader = leftreader
        self.__leftstate = leftstate
        self.__rightreader = rightreader
        self.__rightstate = rightstate

    def _DecodeStep(self):
        leftframe = ReadExact(self.__leftreader, FRAME_SIZE)
        rightframe = ReadExact(self.__rightreader, FRAME_SIZE)
        left = self.__leftstate.DecodeFrame(leftframe)
        right = self.__rightstate.DecodeFrame(rightframe)
        return Interleave(left, right)

    @property
    def LeftState(self):
        return self.__leftstate

    @property
    def RightState(self):
        return self.__rightstate


class InterleavedStereoDecoder(Decoder):
    """
    Two channels sharing one stream, alternating per frame, left first.
    frames/samples count a single channel; the internal counter covers both.
    """
    ChannelLayout = Layout.StereoInterleaved
    Channels = 2
    FramesPerStep = 2

    def __init__(self, reader, leftstate, rightstate, frames=None, samples=None):
        super().__init__(ResolveFrames(frames, samples) * 2)
        self.__reader = reader
        self.__leftstate = leftstate
        self.__rightstate = rightstate

    def _DecodeStep(self):
        leftframe = ReadExact(self.__reader, FRAME_SIZE)
        rightframe = ReadExact(self.__reader, FRAME_SIZE)
        left = self.__leftstate.DecodeFrame(leftframe)
        right = self.__rightstate.DecodeFrame(rightframe)
        return Interleave(left, right)

    @property
    def LeftState(self):
        return self.__leftstate

    @property
    def RightState(self):
        return self.__rightstate
