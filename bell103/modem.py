"""Utilities to convert Bell 103 audio samples to/from byte data.
Modem is the glue between the bit-slot demodulator and the frame assembler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import numpy as np

from .fsk.waveform import Bell103Parameters, Bell103Waveform
from .fsk.demodulator import Bell103Demodulator
from .framing import FrameAssembler

logger = logging.getLogger(__name__)

@dataclass
class DecodeResult:
	data: bytes = b""
	errors: list = field(default_factory=list) # FramingError / TruncatedInputError records, in stream order
	n_slots: int = 0 # complete bit slots classified

	@property
	def ok(self) -> bool: return not self.errors

class Modem:
	def __init__(self, wf: Bell103Waveform = None, demodulator: Bell103Demodulator = None):
		self.wf = wf if wf is not None else Bell103Waveform()
		self.demodulator = demodulator if demodulator is not None else Bell103Demodulator(wf=self.wf)
		if self.demodulator.wf.filter_length != self.wf.filter_length or self.demodulator.wf.tone_set != self.wf.tone_set:
			raise ValueError("Modem and demodulator were built from different waveform parameters.")

	def modulate_bytes(self, data: bytes, amplitude: float = 0.8, lead_in_bits: int = 0, tail_bits: int = 0) -> np.ndarray:
		return self.wf.modulate_bytes(data, amplitude=amplitude, lead_in_bits=lead_in_bits, tail_bits=tail_bits).astype(np.float32)

	def recover_bytes(self, v_samples, strict: bool = False) -> DecodeResult:
		"""Demodulate every complete bit slot, then assemble frames in slot order.
		Framing and truncation problems are collected in the result (raised if strict).
		"""
		dr = self.demodulator.demodulate(v_samples)
		asm = FrameAssembler(strict=strict)
		asm.feed(dr.bits)
		asm.finish(leftover_samples=dr.leftover_samples)
		logger.info("Decoded %d bytes from %d bit slots (%d errors)", len(asm.data), len(dr.bits), len(asm.errors))
		return DecodeResult(data=bytes(asm.data), errors=list(asm.errors), n_slots=len(dr.bits))

def decode(samples, params: Bell103Parameters = None, strict: bool = False) -> DecodeResult:
	"""Decode a mono sample sequence. Raises ConfigurationError for bad params before touching samples."""
	wf = Bell103Waveform(params if params is not None else Bell103Parameters())
	return Modem(wf).recover_bytes(samples, strict=strict)
