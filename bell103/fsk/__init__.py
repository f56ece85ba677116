from .goertzel import GoertzelFilter, goertzel_mag_sq
from .waveform import BAUD_RATE, ToneSet, Bell103Parameters, Bell103Waveform, to_pcm16
from .demodulator import ToneClassifier, classify, Bell103Demodulator, Bell103DemodulatorParameters, Bell103DemodulatorResult

__all__ = [
	"GoertzelFilter", "goertzel_mag_sq",
	"BAUD_RATE", "ToneSet", "Bell103Parameters", "Bell103Waveform", "to_pcm16",
	"ToneClassifier", "classify", "Bell103Demodulator", "Bell103DemodulatorParameters", "Bell103DemodulatorResult",
]
