"""Bell 103 (300 baud FSK, 9N1) audio demodulator."""
__version__ = "0.1.0"

from .errors import Bell103Error, ConfigurationError, FramingError, TruncatedInputError
from .fsk import BAUD_RATE, ToneSet, Bell103Parameters, Bell103Waveform
from .modem import Modem, DecodeResult, decode

__all__ = [
	"__version__",
	"Bell103Error", "ConfigurationError", "FramingError", "TruncatedInputError",
	"BAUD_RATE", "ToneSet", "Bell103Parameters", "Bell103Waveform",
	"Modem", "DecodeResult", "decode",
]
