"""Single-bin (Goertzel) energy estimate of a block of samples at one frequency.
"""
from __future__ import annotations

import math
import numpy as np
from scipy.signal import lfilter

from ..errors import ConfigurationError

def check_target(target_Hz: float, fs_Hz: float):
	if not fs_Hz > 0:
		raise ConfigurationError(f"Sampling rate must be positive (got {fs_Hz}).")
	if not (0 < target_Hz < fs_Hz/2):
		raise ConfigurationError(f"Target frequency {target_Hz} Hz must lie strictly between 0 and Nyquist ({fs_Hz/2} Hz).")

class GoertzelFilter:
	"""Goertzel coefficients for one (block_size, target frequency, sampling rate).

	Holds no running state: every call starts from s1 = s2 = 0 and consumes
	exactly `block_size` samples, so one filter can be shared by any number
	of windows.
	"""

	def __init__(self, block_size: int, target_Hz: float, fs_Hz: float):
		if block_size < 1:
			raise ConfigurationError(f"Block size must be at least 1 sample (got {block_size}).")
		check_target(target_Hz, fs_Hz)
		self.n = int(block_size)
		self.target_Hz = float(target_Hz)
		self.fs_Hz = float(fs_Hz)
		omega = 2.0*math.pi*self.target_Hz/self.fs_Hz
		self.cos = math.cos(omega)
		self.sin = math.sin(omega)
		self.coeff = 2.0*self.cos

	def __repr__(self):
		return f"GoertzelFilter(n={self.n}, target_Hz={self.target_Hz}, fs_Hz={self.fs_Hz})"

	def _check_len(self, n: int):
		if n != self.n:
			raise ValueError(f"Expected a window of {self.n} samples (got {n}).")

	def state(self, window) -> tuple[float, float]:
		"""Run the recurrence s0 = x + coeff*s1 - s2 over one window; returns the final (s1, s2)."""
		self._check_len(len(window))
		coeff = self.coeff
		s1 = 0.0
		s2 = 0.0
		for x in window:
			s0 = coeff*s1 - s2 + float(x)
			s2 = s1
			s1 = s0
		return s1, s2

	def real_imag(self, window) -> tuple[float, float]:
		s1, s2 = self.state(window)
		return s1 - s2*self.cos, s2*self.sin

	def mag_sq(self, window) -> float:
		"""Squared magnitude at the target frequency."""
		s1, s2 = self.state(window)
		return max(s1*s1 + s2*s2 - s1*s2*self.coeff, 0.0)

	def mag_sq_windows(self, X: np.ndarray) -> np.ndarray:
		"""Squared magnitudes for every row of X; X has shape (n_windows, block_size)."""
		X = np.asarray(X, dtype=np.float64)
		if X.ndim != 2:
			raise ValueError(f"Expected a 2-D array of windows (got shape {X.shape}).")
		self._check_len(X.shape[1])
		if X.shape[0] == 0:
			return np.empty(0)
		S = lfilter([1.0], [1.0, -self.coeff, 1.0], X, axis=1) # S[:, i] is s0 after sample i
		s1 = S[:, -1]
		s2 = S[:, -2] if self.n > 1 else np.zeros_like(s1)
		return np.maximum(s1*s1 + s2*s2 - s1*s2*self.coeff, 0.0)

def goertzel_mag_sq(samples, target_Hz: float, fs_Hz: float) -> float:
	"""Squared magnitude of `samples` at `target_Hz`, window length taken from the input."""
	return GoertzelFilter(len(samples), target_Hz, fs_Hz).mag_sq(samples)
