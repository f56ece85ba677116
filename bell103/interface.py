"""Shared CLI helpers for bell103 command-line tools."""

import argparse
from argparse import ArgumentParser, HelpFormatter
import logging
from pathlib import Path
import numpy as np
import soundfile as sf

from bell103.fsk.waveform import Bell103Parameters, Bell103Waveform, ToneSet
from bell103.fsk.demodulator import Bell103DemodulatorParameters, Bell103Demodulator
from bell103.modem import Modem

DEFAULT_OUT_DIR = Path("out")
DEFAULT_MESSAGE_FILE = Path("MESSAGE.txt")

class WrappedHelpFormatter(HelpFormatter):
	def __init__(self, prog, width=80, max_help_position=26):
		super().__init__(prog, width=width, max_help_position=max_help_position)

def ensure_output_dir(path: Path | str | None) -> Path:
	out = Path(path) if path else DEFAULT_OUT_DIR
	out.mkdir(parents=True, exist_ok=True)
	return out

def resolve_output_path(out_dir: Path, target: Path | str) -> Path:
	target_path = Path(target)
	if target_path.is_absolute():
		return target_path
	return out_dir / target_path

def configure_logging(debug: bool = False):
	logging.basicConfig(
		level=logging.DEBUG if debug else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

def add_output_dir_arg(parser: ArgumentParser):
	parser.add_argument(
		"--out-dir",
		type=Path,
		default=DEFAULT_OUT_DIR,
		help=f"Directory for generated files (default: %(default)s)",
	)

def add_debug_flag(parser: ArgumentParser):
	parser.add_argument(
		"--debug",
		action="store_true",
		default=False,
		help="Enable verbose debug logging",
	)

def add_waveform_args(parser: ArgumentParser, fs_default=None):
	parser.add_argument("--fs", type=int, default=fs_default, help="Sample rate (Hz); must be a multiple of 300." + (" Default: the input file's rate." if fs_default is None else " Default: %(default)s."))
	parser.add_argument("--filter-length", type=int, default=None, help="Samples per analysis window (default: fs/300, one bit slot).")
	parser.add_argument(
		"--tone-set",
		choices=[t.name.lower() for t in ToneSet],
		default=ToneSet.ANSWERING.name.lower(),
		help="Tone pair: answering (mark 2225 / space 2025 Hz) or originating (mark 1270 / space 1070 Hz).",
	)

def build_waveform_parameters(args, fs_Hz=None) -> Bell103Parameters:
	return Bell103Parameters(
		fs_Hz=fs_Hz if fs_Hz is not None else args.fs,
		filter_length=args.filter_length,
		tone_set=ToneSet.from_name(args.tone_set),
	)

def add_demod_args(parser: ArgumentParser):
	parser.add_argument(
		"--demod-plot",
		dest="demod_plot",
		action="store_true",
		help="Save a per-slot mark/space energy plot to out-dir.",
	)
	parser.add_argument(
		"--demod-no-plot",
		dest="demod_plot",
		action="store_false",
		help="Disable demodulator plots.",
	)
	parser.set_defaults(demod_plot=False)

def build_demodulator_parameters(args) -> Bell103DemodulatorParameters:
	return Bell103DemodulatorParameters(plot=args.demod_plot)

def build_modem(args, fs_Hz=None, plot_dir: Path = None):
	wf = Bell103Waveform(build_waveform_parameters(args, fs_Hz=fs_Hz))
	demod = Bell103Demodulator(cfg=build_demodulator_parameters(args), wf=wf, plot_dir=plot_dir)
	return Modem(wf, demodulator=demod), wf, demod

# ---- Command-specific parser builders ----
def build_decode_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		description="Decode a Bell 103 (300 baud FSK, 9N1) recording back into bytes.",
		formatter_class=lambda prog: WrappedHelpFormatter(prog, width=80),
	)
	add_output_dir_arg(parser)
	add_debug_flag(parser)
	add_waveform_args(parser)
	add_demod_args(parser)
	parser.add_argument("input_wav", type=Path, help="Mono 16-bit WAV file to decode.")
	parser.add_argument(
		"--output",
		type=Path,
		default=DEFAULT_MESSAGE_FILE,
		help="File for the decoded bytes, relative to out-dir unless absolute (default: %(default)s).",
	)
	parser.add_argument("--quiet", action="store_true", help="Do not echo the decoded message to stdout.")
	parser.add_argument("--strict", action="store_true", help="Stop at the first framing or truncation error.")
	return parser

def build_encode_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		description="Modulate bytes into a Bell 103 (300 baud FSK, 9N1) WAV file.",
		formatter_class=lambda prog: WrappedHelpFormatter(prog, width=80),
	)
	add_output_dir_arg(parser)
	add_debug_flag(parser)
	add_waveform_args(parser, fs_default=48000)
	src = parser.add_mutually_exclusive_group(required=True)
	src.add_argument("--text", help="Text to send (UTF-8 encoded).")
	src.add_argument("--input-file", type=Path, help="File whose bytes are sent.")
	parser.add_argument("--output-wav", type=Path, default=Path("bell103.wav"), help="Output WAV, relative to out-dir unless absolute (default: %(default)s).")
	parser.add_argument("--amplitude", type=float, default=0.8, help="Peak amplitude, 0..1 (default: %(default)s).")
	parser.add_argument("--lead-in-bits", type=int, default=0, help="Idle mark slots before the first frame (the decoder expects none).")
	parser.add_argument("--tail-bits", type=int, default=0, help="Idle mark slots after the last frame.")
	return parser

def load_wav(path: Path | str) -> tuple[np.ndarray, int]:
	"""Read a mono WAV as int16 samples. Multi-channel audio is rejected."""
	x, fs = sf.read(str(path), dtype="int16", always_2d=True)
	if x.shape[1] != 1:
		raise ValueError(f"{path}: expected a mono recording, got {x.shape[1]} channels.")
	return x[:, 0], int(fs)

def write_wav(path: Path | str, samples: np.ndarray, fs_Hz: int):
	sf.write(str(path), samples, int(fs_Hz), subtype="PCM_16")
