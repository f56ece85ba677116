from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import numpy as np

from ..errors import ConfigurationError

BAUD_RATE = 300 # Bell 103 bit slots per second, fixed by the standard
DATA_BITS = 8
FRAME_BITS = 1 + DATA_BITS + 1 # 9N1: start, 8 data bits LSB-first, stop

class ToneSet(Enum):
	"""Which side of the Bell 103 link we listen to; value is (mark_Hz, space_Hz)."""
	ANSWERING = (2225.0, 2025.0)
	ORIGINATING = (1270.0, 1070.0)

	@property
	def mark_Hz(self) -> float: return self.value[0]

	@property
	def space_Hz(self) -> float: return self.value[1]

	@classmethod
	def from_name(cls, name: str) -> "ToneSet":
		try:
			return cls[name.upper()]
		except KeyError as exc:
			raise ConfigurationError(f"Unknown tone set '{name}' (choose from {', '.join(t.name.lower() for t in cls)})") from exc

@dataclass
class Bell103Parameters:
	fs_Hz: int = 48000 # sampling rate of the input samples
	filter_length: int | None = None # samples per analysis window; None derives fs_Hz/BAUD_RATE (160 at 48 kHz)
	tone_set: ToneSet = ToneSet.ANSWERING

class Bell103Waveform:
	"""Validated Bell 103 signalling parameters.
	Populates:
		- wf.samples_per_bit; one analysis window is exactly one bit slot
		- wf.mark_Hz, wf.space_Hz; tone pair selected by tone_set
	Raises ConfigurationError on anything that would make decoding meaningless.
	"""
	def __init__(self, p: Bell103Parameters = None):
		p = p if p is not None else Bell103Parameters()
		self.__dict__.update(p.__dict__)
		if isinstance(self.tone_set, str):
			self.tone_set = ToneSet.from_name(self.tone_set)
		if not (isinstance(self.fs_Hz, (int, np.integer)) or float(self.fs_Hz).is_integer()) or self.fs_Hz <= 0:
			raise ConfigurationError(f"Sampling rate must be a positive whole number of samples/s (got {self.fs_Hz}).")
		self.fs_Hz = int(self.fs_Hz)
		if self.fs_Hz % BAUD_RATE:
			raise ConfigurationError(f"Sampling rate {self.fs_Hz} Hz is not a multiple of {BAUD_RATE} baud; bit slots would not be sample aligned.")
		self.samples_per_bit = self.fs_Hz // BAUD_RATE
		if self.filter_length is None:
			self.filter_length = self.samples_per_bit
		if self.filter_length < 1:
			raise ConfigurationError(f"Filter length must be at least 1 sample (got {self.filter_length}).")
		if self.filter_length != self.samples_per_bit:
			raise ConfigurationError(f"Filter length {self.filter_length} does not match one bit slot ({self.fs_Hz}/{BAUD_RATE} = {self.samples_per_bit} samples).")
		self.mark_Hz = self.tone_set.mark_Hz
		self.space_Hz = self.tone_set.space_Hz
		nyquist_Hz = self.fs_Hz/2
		if max(self.mark_Hz, self.space_Hz) >= nyquist_Hz:
			raise ConfigurationError(f"{self.tone_set.name.lower()} tones need a sampling rate above {2*max(self.mark_Hz, self.space_Hz):.0f} Hz (got {self.fs_Hz}).")

	def __repr__(self):
		return f"Bell103Waveform(fs_Hz={self.fs_Hz}, filter_length={self.filter_length}, tone_set={self.tone_set.name})"

	@staticmethod
	def frame_bits(data: bytes) -> np.ndarray:
		"""9N1 bit slots for `data`: one row per byte, [start=0, d0..d7, stop=1], flattened."""
		buf = np.frombuffer(bytes(data), dtype=np.uint8)
		v_data_bits = np.unpackbits(buf.reshape(-1, 1), axis=1, bitorder="little")
		n = len(buf)
		return np.hstack([np.zeros((n,1), dtype=np.uint8), v_data_bits, np.ones((n,1), dtype=np.uint8)]).reshape(-1)

	def modulate_bits(self, bits, amplitude: float = 0.8) -> np.ndarray:
		"""Phase-continuous FSK: each bit becomes samples_per_bit samples of mark (1) or space (0)."""
		bits = np.asarray(bits, dtype=bool).reshape(-1)
		f_Hz = np.repeat(np.where(bits, self.mark_Hz, self.space_Hz), self.samples_per_bit)
		phase = 2*np.pi*(np.cumsum(f_Hz) - f_Hz)/self.fs_Hz # phase at each sample start, 0 at t=0
		return amplitude*np.sin(phase)

	def modulate_bytes(self, data: bytes, amplitude: float = 0.8, lead_in_bits: int = 0, tail_bits: int = 0) -> np.ndarray:
		"""Modulate `data` as back-to-back 9N1 frames, optionally padded with idle mark slots."""
		bits = np.concatenate([
			np.ones(lead_in_bits, dtype=np.uint8),
			self.frame_bits(data),
			np.ones(tail_bits, dtype=np.uint8),
		])
		return self.modulate_bits(bits, amplitude=amplitude)

def to_pcm16(x: np.ndarray) -> np.ndarray:
	"""Float samples in [-1, 1] to signed 16-bit PCM."""
	return np.round(np.clip(x, -1.0, 1.0)*32767.0).astype(np.int16)
