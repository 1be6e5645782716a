from gcadpcm.dsp import Dsp, FRAME_SIZE, SAMPLES_PER_FRAME, COEFFICIENT_COUNT, FramesForSamples
from gcadpcm.decoder import Layout, Decoder, MonoDecoder, StereoDecoder, InterleavedStereoDecoder
from gcadpcm.filestream import Filestream, ShortReadError, ReadExact
from gcadpcm.config import StreamConfig, ConfigError
from gcadpcm.wavefile import WriteWave

__version__ = "0.2.0"
