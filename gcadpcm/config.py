from json import load, dump
from gcadpcm.decoder import Layout, MonoDecoder, StereoDecoder, InterleavedStereoDecoder
from gcadpcm.dsp import Dsp, SAMPLES_PER_FRAME, FramesForSamples, IsInteger


class ConfigError(ValueError):
    pass


class StreamConfig():
    """
    Everything needed to decode a raw frame stream: the channel layout,
    its length and the starting DSP state of each channel. Reading these
    values from a container header is left to the caller.
    """
    def __init__(self, layout=Layout.Mono, channels=None, frames=None, samples=None, samplerate=32000):
        self.Layout = layout
        self.Channels = channels if channels is not None else []
        self.Frames = frames
        self.Samples = samples
        self.SampleRate = samplerate
        self.Validate()

    @staticmethod
    def FromDict(dict):
        try:
            layout = Layout(dict.get("Layout", "Mono"))
        except ValueError:
            raise ConfigError("Layout must be one of {}".format(", ".join(l.value for l in Layout))) from None
        channels = []
        for i, channel in enumerate(dict.get("Channels", [])):
            try:
                channels.append(Dsp.FromDict(channel))
            except KeyError as err:
                raise ConfigError("Channels[{}] is missing {}".format(i, err)) from None
            except (TypeError, ValueError) as err:
                raise ConfigError("Channels[{}]: {}".format(i, err)) from None
        return StreamConfig(
            layout,
            channels,
            dict.get("Frames"),
            dict.get("Samples"),
            dict.get("SampleRate", 32000)
        )

    @staticmethod
    def FromFile(filename):
        with open(filename, "r") as f:
            return StreamConfig.FromDict(load(f))

    def ToDict(self):
        result = {
            "Layout": self.Layout.value,
            "SampleRate": self.SampleRate,
            "Channels": [c.ToDict() for c in self.Channels]
        }
        if self.Frames is not None:
            result["Frames"] = self.Frames
        else:
            result["Samples"] = self.Samples
        return result

    def ToFile(self, filename):
        with open(filename, "w") as f:
            dump(self.ToDict(), f, indent=4)

    def Validate(self):
        expected = 1 if self.Layout == Layout.Mono else 2
        if len(self.Channels) != expected:
            raise ConfigError("{} needs {} channel(s), got {}".format(self.Layout.value, expected, len(self.Channels)))
        if (self.Frames is None) == (self.Samples is None):
            raise ConfigError("give either Frames or Samples")
        for key, value in (("Frames", self.Frames), ("Samples", self.Samples)):
            if value is not None and (not IsInteger(value) or value < 0):
                raise ConfigError("{} must be a non-negative integer".format(key))
        if not IsInteger(self.SampleRate) or self.SampleRate <= 0:
            raise ConfigError("SampleRate must be a positive integer")

    @property
    def Readers(self):
        return 2 if self.Layout == Layout.Stereo else 1

    @property
    def ChannelCount(self):
        return len(self.Channels)

    @property
    def TotalFrames(self):
        return self.Frames if self.Frames is not None else FramesForSamples(self.Samples)

    @property
    def DecodedSamples(self):
        return self.TotalFrames * SAMPLES_PER_FRAME * self.ChannelCount

    def CreateDecoder(self, readers):
        if len(readers) != self.Readers:
            raise ConfigError("{} reads from {} source(s), got {}".format(self.Layout.value, self.Readers, len(readers)))
        length = {"frames": self.Frames} if self.Frames is not None else {"samples": self.Samples}
        if self.Layout == Layout.Mono:
            return MonoDecoder(readers[0], self.Channels[0], **length)
        elif self.Layout == Layout.Stereo:
            return StereoDecoder(readers[0], self.Channels[0], readers[1], self.Channels[1], **length)
        return InterleavedStereoDecoder(readers[0], self.Channels[0], self.Channels[1], **length)

    def __repr__(self):
        return "<StreamConfig {} {} frames {} Hz>".format(self.Layout.value, self.TotalFrames, self.SampleRate)
