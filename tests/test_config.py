import io
import json
import pytest
from conftest import RepeatFrame
from gcadpcm.config import StreamConfig, ConfigError
from gcadpcm.decoder import Layout, MonoDecoder, StereoDecoder, InterleavedStereoDecoder

ACCUMULATOR = {"Coefficients": [2048, 0] + [0] * 14, "Hist1": 0, "Hist2": 0}


def test_from_dict_mono():
    config = StreamConfig.FromDict({"Layout": "Mono", "Frames": 2, "Channels": [ACCUMULATOR]})
    assert config.Layout == Layout.Mono
    assert config.SampleRate == 32000
    assert config.TotalFrames == 2
    assert config.DecodedSamples == 28
    assert config.Readers == 1


def test_samples_round_up():
    config = StreamConfig.FromDict({
        "Layout": "StereoInterleaved",
        "Samples": 15,
        "SampleRate": 44100,
        "Channels": [ACCUMULATOR, ACCUMULATOR]
    })
    assert config.TotalFrames == 2
    assert config.DecodedSamples == 56
    assert config.Readers == 1


@pytest.mark.parametrize("dict", [
    {"Layout": "Surround", "Frames": 1, "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Frames": 1, "Channels": []},
    {"Layout": "Stereo", "Frames": 1, "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Frames": 1, "Samples": 14, "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Frames": -1, "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Frames": 1.5, "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Frames": 1, "SampleRate": 0, "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Frames": 1, "Channels": [{"Hist1": 0}]},
    {"Layout": "Mono", "Frames": 1, "Channels": [{"Coefficients": [0] * 8}]},
    {"Layout": "Mono", "Frames": 1, "Channels": ["coefficients"]},
    {"Layout": "Mono", "Frames": 1, "Channels": [{"Coefficients": [2048.5, 0] + [0] * 14}]},
    {"Layout": "Mono", "Frames": 1, "Channels": [{"Coefficients": [0] * 16, "Hist1": 1.5}]},
    {"Layout": "Mono", "Frames": True, "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Samples": False, "Channels": [ACCUMULATOR]},
    {"Layout": "Mono", "Frames": 1, "SampleRate": True, "Channels": [ACCUMULATOR]},
])
def test_invalid_configs(dict):
    with pytest.raises(ConfigError):
        StreamConfig.FromDict(dict)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_round_trip(tmp_path):
    path = tmp_path / "stream.json"
    config = StreamConfig.FromDict({"Layout": "Stereo", "Samples": 100, "Channels": [ACCUMULATOR, ACCUMULATOR]})
    config.ToFile(str(path))
    assert json.loads(path.read_text())["Samples"] == 100
    loaded = StreamConfig.FromFile(str(path))
    assert loaded.ToDict() == config.ToDict()


def test_create_mono_decoder():
    config = StreamConfig.FromDict({"Layout": "Mono", "Frames": 1, "Channels": [ACCUMULATOR]})
    decoder = config.CreateDecoder([io.BytesIO(RepeatFrame(0x00, 1, 1))])
    assert isinstance(decoder, MonoDecoder)
    assert list(decoder) == list(range(1, 15))


def test_create_stereo_decoder():
    config = StreamConfig.FromDict({"Layout": "Stereo", "Samples": 14, "Channels": [ACCUMULATOR, ACCUMULATOR]})
    readers = [io.BytesIO(RepeatFrame(0x00, 1, 1)), io.BytesIO(RepeatFrame(0x00, 2, 1))]
    decoder = config.CreateDecoder(readers)
    assert isinstance(decoder, StereoDecoder)
    assert list(decoder)[:4] == [1, 2, 2, 4]


def test_create_interleaved_decoder():
    config = StreamConfig.FromDict({"Layout": "StereoInterleaved", "Frames": 1, "Channels": [ACCUMULATOR, ACCUMULATOR]})
    decoder = config.CreateDecoder([io.BytesIO(RepeatFrame(0x00, 1, 2))])
    assert isinstance(decoder, InterleavedStereoDecoder)
    assert len(list(decoder)) == 28


def test_create_decoder_checks_reader_count():
    config = StreamConfig.FromDict({"Layout": "Stereo", "Frames": 1, "Channels": [ACCUMULATOR, ACCUMULATOR]})
    with pytest.raises(ConfigError):
        config.CreateDecoder([io.BytesIO()])
