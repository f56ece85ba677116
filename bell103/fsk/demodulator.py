from dataclasses import dataclass
import logging
from pathlib import Path
import numpy as np

from .goertzel import GoertzelFilter
from .waveform import Bell103Waveform

logger = logging.getLogger(__name__)

class ToneClassifier:
	"""Mark/space decision for one bit slot.
	Compares Goertzel energy at the two tones of the same window; mark wins ties,
	so silence reads as the idle line rather than a start bit.
	"""
	def __init__(self, block_size: int, mark_Hz: float, space_Hz: float, fs_Hz: float):
		self.mark = GoertzelFilter(block_size, mark_Hz, fs_Hz)
		self.space = GoertzelFilter(block_size, space_Hz, fs_Hz)

	@classmethod
	def for_waveform(cls, wf: Bell103Waveform) -> "ToneClassifier":
		return cls(wf.filter_length, wf.mark_Hz, wf.space_Hz, wf.fs_Hz)

	@staticmethod
	def decide(mark_E, space_E):
		"""Mark wins ties. Works on scalars or arrays of energies."""
		return mark_E >= space_E

	def classify(self, window) -> bool:
		return bool(self.decide(self.mark.mag_sq(window), self.space.mag_sq(window)))

	def energies(self, X: np.ndarray) -> np.ndarray:
		"""Mark and space energy for each row of X; returns shape (2, n_windows)."""
		return np.vstack([self.mark.mag_sq_windows(X), self.space.mag_sq_windows(X)])

	def classify_windows(self, X: np.ndarray) -> np.ndarray:
		E = self.energies(X)
		return self.decide(E[0], E[1])

def classify(window, mark_Hz: float, space_Hz: float, fs_Hz: float) -> bool:
	"""True (mark) if the window carries at least as much energy at mark_Hz as at space_Hz."""
	return ToneClassifier(len(window), mark_Hz, space_Hz, fs_Hz).classify(window)

@dataclass
class Bell103DemodulatorParameters:
	plot: bool = False # save a per-slot mark/space energy plot

@dataclass
class Bell103DemodulatorResult:
	bits: np.ndarray # one bit decision per complete bit slot (1 = mark)
	energies: np.ndarray # (2, n_slots) mark/space energies behind each decision
	leftover_samples: int = 0 # samples after the last complete slot

class Bell103Demodulator:
	"""Slices samples into back-to-back bit-slot windows and classifies each one."""

	def __init__(self, cfg: Bell103DemodulatorParameters = None, wf: Bell103Waveform = None, plot_dir: Path | None = None):
		cfg = cfg if cfg is not None else Bell103DemodulatorParameters()
		self.__dict__.update(cfg.__dict__)
		self.wf = wf if wf is not None else Bell103Waveform()
		self.plot_dir = Path(plot_dir) if plot_dir else None
		self.classifier = ToneClassifier.for_waveform(self.wf)

	def slot_windows(self, x: np.ndarray) -> tuple[np.ndarray, int]:
		"""View x as (n_slots, filter_length) windows, no overlap and no gap.
		Returns the windows and the number of trailing samples that do not fill a slot.
		"""
		x = np.asarray(x)
		if x.ndim != 1:
			raise ValueError(f"Expected a flat mono sample sequence (got shape {x.shape}).")
		n = self.wf.filter_length
		n_slots = len(x)//n
		return x[:n_slots*n].reshape(n_slots, n), len(x) - n_slots*n

	def demodulate(self, x) -> Bell103DemodulatorResult:
		X, leftover = self.slot_windows(x)
		E = self.classifier.energies(X)
		bits = self.classifier.decide(E[0], E[1]).astype(np.uint8)
		logger.debug("Classified %d bit slots (%d mark, %d space), %d leftover samples", len(bits), int(bits.sum()), len(bits) - int(bits.sum()), leftover)
		if self.plot: self._plot(E, bits)
		return Bell103DemodulatorResult(bits=bits, energies=E, leftover_samples=leftover)

	def _plot(self, E: np.ndarray, bits: np.ndarray):
		import matplotlib.pyplot as plt
		plot_dir = self.plot_dir or Path(".")
		plot_dir.mkdir(parents=True, exist_ok=True)
		fig, (ax_e, ax_b) = plt.subplots(2, 1, figsize=(32,6), sharex=True)
		ax_e.plot(E[0], label=f"mark ({self.wf.mark_Hz:.0f} Hz)")
		ax_e.plot(E[1], label=f"space ({self.wf.space_Hz:.0f} Hz)")
		ax_e.set_ylabel("energy")
		ax_e.set_title("Goertzel energy per bit slot")
		ax_e.legend()
		ax_b.step(np.arange(len(bits)), bits, where="mid")
		ax_b.set_xlabel("bit slot")
		ax_b.set_ylabel("bit")
		fig.savefig(plot_dir / "slot_energy.png", dpi=150, bbox_inches="tight")
		plt.close(fig)
