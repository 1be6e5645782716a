from contextlib import ExitStack
from itertools import islice
from gcadpcm.config import StreamConfig, ConfigError
from gcadpcm.filestream import Filestream
from gcadpcm.wavefile import WriteWave
from tqdm import tqdm
import argparse
import logging
import sys

log = logging.getLogger("gcadpcm")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Decoder of Nintendo DSP ADPCM streams to wav")
    parser.add_argument("config", help="JSON file describing layout, length and channel coefficients")
    parser.add_argument("input", help="Raw ADPCM frames (left channel for planar stereo)")
    parser.add_argument("right", nargs="?", default=None, help="Right channel frames for planar stereo")
    parser.add_argument("-o", "--output", required=True, help="Destination wav file")
    parser.add_argument("--offset", type=int, default=0, help="Bytes to skip at the start of each input (default=0)")
    parser.add_argument("--limit-samples", action="store_true", help="Cut output to the configured sample count (default=False)")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar (default=False)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress information (default=False)")
    parser.add_argument("-l", "--log", default=None, help="Write a debug log to this file")
    return parser, parser.parse_args(argv)


def setup_logging(verbose, logpath):
    log.setLevel(logging.DEBUG)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.INFO if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers = [console]
    if logpath:
        filelog = logging.FileHandler(logpath, "w", encoding="utf-8")
        filelog.setLevel(logging.DEBUG)
        filelog.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        handlers.append(filelog)
    for handler in handlers:
        log.addHandler(handler)
    return handlers


def teardown_logging(handlers):
    for handler in handlers:
        log.removeHandler(handler)
        handler.close()


def decode(args):
    config = StreamConfig.FromFile(args.config)
    log.info("Stream {}".format(config))
    inputs = [args.input] if args.right is None else [args.input, args.right]
    if len(inputs) != config.Readers:
        raise ConfigError("{} expects {} input file(s), got {}".format(config.Layout.value, config.Readers, len(inputs)))
    with ExitStack() as stack:
        readers = [stack.enter_context(Filestream(path, args.offset)) for path in inputs]
        for reader in readers:
            log.info("Input {} {} bytes, {} after offset {}".format(reader.Filename, reader.Length, reader.Remaining, reader.Offset))
        decoder = config.CreateDecoder(readers)
        total = config.DecodedSamples
        samples = decoder
        if args.limit_samples and config.Samples is not None:
            total = config.Samples * config.ChannelCount
            samples = islice(decoder, total)
        progress = tqdm(samples, total=total, unit="sample", unit_scale=True, disable=args.no_progress)
        written = WriteWave(args.output, progress, config.ChannelCount, config.SampleRate)
    log.info("Wrote {} frames to {}".format(written, args.output))
    return written


def main(argv=None):
    parser, args = parse_args(argv)
    handlers = setup_logging(args.verbose, args.log)
    try:
        decode(args)
    except (ValueError, OSError, EOFError) as err:
        log.error(str(err))
        parser.exit(1)
    finally:
        teardown_logging(handlers)
    return 0


if __name__ == "__main__":
    sys.exit(main())
