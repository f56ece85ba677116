"""9N1 frame assembly from a stream of bit decisions.

The assembler is a small state machine advanced one bit slot at a time:

	Idle --space--> Collecting(0 bits) --8 data bits--> AwaitStop --mark--> Idle (+ byte)
	                                                              --space-> Idle (+ FramingError)

Mark while Idle is the resting line and is ignored. Data bits arrive LSB first.
Nothing is ever re-read: each slot is consumed exactly once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union
import logging

from .errors import FramingError, TruncatedInputError
from .fsk.waveform import DATA_BITS

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Idle:
	pass

@dataclass(frozen=True)
class Collecting:
	start_slot: int # slot index of the start bit
	n_bits: int = 0 # data bits received so far
	value: int = 0 # data bits received so far, LSB first

@dataclass(frozen=True)
class AwaitStop:
	start_slot: int
	value: int

State = Union[Idle, Collecting, AwaitStop]

@dataclass(frozen=True)
class Step:
	state: State
	byte: Optional[int] = None # completed byte, if this slot closed a good frame
	error: Optional[FramingError] = None # set if this slot was a bad stop bit

def advance(state: State, bit, slot: int) -> Step:
	"""Feed one bit decision (truthy = mark) received in bit slot `slot`."""
	mark = bool(bit)
	if isinstance(state, Idle):
		if mark:
			return Step(state)
		return Step(Collecting(start_slot=slot))
	if isinstance(state, Collecting):
		value = state.value | (int(mark) << state.n_bits)
		n_bits = state.n_bits + 1
		if n_bits == DATA_BITS:
			return Step(AwaitStop(start_slot=state.start_slot, value=value))
		return Step(Collecting(start_slot=state.start_slot, n_bits=n_bits, value=value))
	if isinstance(state, AwaitStop):
		if mark:
			return Step(Idle(), byte=state.value)
		return Step(Idle(), error=FramingError(slot_index=slot, value=state.value))
	raise TypeError(f"Not a frame assembler state: {state!r}")

def slots_into_frame(state: State) -> int:
	"""Slots of the open frame consumed so far, start bit included (0 when Idle)."""
	if isinstance(state, Collecting): return 1 + state.n_bits
	if isinstance(state, AwaitStop): return 1 + DATA_BITS
	return 0

class FrameAssembler:
	"""Owns the frame state for one decoding run and accumulates its output.

	feed() consumes bit decisions in arrival order; finish() closes the run and
	reports a frame (or bit slot) left open at end of stream.
	"""

	def __init__(self, state: State = None, first_slot: int = 0, strict: bool = False):
		self.state = state if state is not None else Idle()
		self.slot = first_slot # index of the next slot to be fed
		self.strict = strict
		self.data = bytearray()
		self.errors: list = []

	def _report(self, err):
		logger.warning(str(err))
		if self.strict:
			raise err
		self.errors.append(err)

	def feed(self, bits: Iterable) -> bytes:
		"""Advance over `bits`; returns only the bytes completed by this call."""
		out = bytearray()
		for bit in bits:
			step = advance(self.state, bit, self.slot)
			self.state = step.state
			self.slot += 1
			if step.byte is not None:
				out.append(step.byte)
				self.data.append(step.byte)
			if step.error is not None:
				self._report(step.error)
		return bytes(out)

	def finish(self, leftover_samples: int = 0) -> Optional[TruncatedInputError]:
		"""End of stream. An open frame and a partial trailing slot are reported as one truncation."""
		n_open = slots_into_frame(self.state)
		err = None
		if n_open or leftover_samples:
			start_slot = self.state.start_slot if n_open else self.slot
			err = TruncatedInputError(slot_index=start_slot, bits_collected=n_open, leftover_samples=leftover_samples)
		self.state = Idle()
		if err is not None:
			self._report(err)
		return err
