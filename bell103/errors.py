"""Error kinds raised or reported while decoding a Bell 103 signal.

ConfigurationError is raised before any decoding starts. FramingError and
TruncatedInputError are per-frame problems: the decoder records them in
DecodeResult.errors and keeps going (unless asked to be strict).
"""
from __future__ import annotations

class Bell103Error(Exception):
	"""Base class for all bell103 errors."""

class ConfigurationError(Bell103Error, ValueError):
	"""Invalid sampling rate, window length or tone frequency."""

class FramingError(Bell103Error):
	"""Stop bit was space instead of mark; the assembled byte was discarded."""

	def __init__(self, slot_index: int, value: int):
		self.slot_index = slot_index # bit slot holding the bad stop bit
		self.value = value # the discarded byte
		super().__init__(f"Framing error at bit slot {slot_index}: stop bit is space (discarded byte 0x{value:02x})")

	def __eq__(self, other):
		if not isinstance(other, FramingError): return NotImplemented
		return (self.slot_index, self.value) == (other.slot_index, other.value)

	def __hash__(self): return hash((FramingError, self.slot_index, self.value))

class TruncatedInputError(Bell103Error):
	"""The stream ended inside a frame and/or inside a bit slot."""

	def __init__(self, slot_index: int, bits_collected: int = 0, leftover_samples: int = 0):
		self.slot_index = slot_index # slot where the unfinished frame (or window) begins
		self.bits_collected = bits_collected # slots of the open frame already seen, start bit included
		self.leftover_samples = leftover_samples # samples past the last full window
		parts = []
		if bits_collected: parts.append(f"frame open with {bits_collected} of 10 bits")
		if leftover_samples: parts.append(f"{leftover_samples} trailing samples do not fill a bit slot")
		super().__init__(f"Truncated input at bit slot {slot_index}: " + ", ".join(parts))

	def __eq__(self, other):
		if not isinstance(other, TruncatedInputError): return NotImplemented
		return (self.slot_index, self.bits_collected, self.leftover_samples) == (other.slot_index, other.bits_collected, other.leftover_samples)

	def __hash__(self): return hash((TruncatedInputError, self.slot_index, self.bits_collected, self.leftover_samples))
