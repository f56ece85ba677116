import numpy as np
import pytest

from bell103 import (
	Bell103Parameters,
	Bell103Waveform,
	ConfigurationError,
	FramingError,
	Modem,
	ToneSet,
	TruncatedInputError,
	decode,
)
from bell103.fsk.waveform import to_pcm16


def _signal(data: bytes, params: Bell103Parameters = None, **kwargs) -> np.ndarray:
	wf = Bell103Waveform(params if params is not None else Bell103Parameters())
	return to_pcm16(wf.modulate_bytes(data, **kwargs))


@pytest.mark.parametrize(
	"params",
	[
		Bell103Parameters(),
		Bell103Parameters(fs_Hz=44100, tone_set=ToneSet.ORIGINATING),
		Bell103Parameters(fs_Hz=8100, tone_set=ToneSet.ORIGINATING),
	],
)
def test_empty_input(params) -> None:
	result = decode(np.array([], dtype=np.int16), params)
	assert result.data == b""
	assert result.errors == []
	assert result.ok


def test_single_frame_0x41() -> None:
	params = Bell103Parameters(fs_Hz=48000, filter_length=160, tone_set=ToneSet.ANSWERING)
	x = _signal(b"\x41", params)
	assert len(x) == 10*160
	result = decode(x, params)
	assert result.data == b"A"
	assert result.errors == []
	assert result.n_slots == 10


@pytest.mark.parametrize("tone_set", list(ToneSet))
@pytest.mark.parametrize("fs_Hz", [48000, 44100])
def test_round_trip(tone_set, fs_Hz) -> None:
	data = b"Hello, Bell 103!\x00\x7f\x80\xff" + bytes(range(0, 256, 17))
	params = Bell103Parameters(fs_Hz=fs_Hz, tone_set=tone_set)
	result = decode(_signal(data, params), params)
	assert result.data == data
	assert result.errors == []


def test_round_trip_float_samples_and_idle_line() -> None:
	wf = Bell103Waveform()
	x = wf.modulate_bytes(b"ok", amplitude=0.05, lead_in_bits=7, tail_bits=3)
	result = Modem(wf).recover_bytes(x)
	assert result.data == b"ok"
	assert result.ok


def test_half_slot_short() -> None:
	x = _signal(b"A")
	result = decode(x[:int(9.5*160)])
	assert result.data == b""
	assert result.errors == [TruncatedInputError(slot_index=0, bits_collected=9, leftover_samples=80)]


def test_half_slot_short_keeps_leading_frames() -> None:
	x = _signal(b"AB")
	result = decode(x[:int(19.5*160)])
	assert result.data == b"A"
	assert len(result.errors) == 1
	assert isinstance(result.errors[0], TruncatedInputError)
	assert result.errors[0].slot_index == 10


def test_trailing_partial_slot_after_complete_frames() -> None:
	x = np.concatenate([_signal(b"A"), np.zeros(40, dtype=np.int16)])
	result = decode(x)
	assert result.data == b"A"
	assert result.errors == [TruncatedInputError(slot_index=10, leftover_samples=40)]


def _corrupt_stop_bit(data: bytes, frame: int) -> np.ndarray:
	wf = Bell103Waveform()
	bits = wf.frame_bits(data)
	bits[10*frame + 9] = 0
	return to_pcm16(wf.modulate_bits(bits))


def test_corrupted_stop_bit_recovers_on_next_frame() -> None:
	result = decode(_corrupt_stop_bit(b"ABC", frame=0))
	assert result.data == b"BC"
	assert result.errors == [FramingError(slot_index=9, value=0x41)]


def test_strict_decode_raises() -> None:
	with pytest.raises(FramingError):
		decode(_corrupt_stop_bit(b"AB", frame=1), strict=True)


@pytest.mark.parametrize(
	"params",
	[
		Bell103Parameters(fs_Hz=0),
		Bell103Parameters(fs_Hz=-48000),
		Bell103Parameters(fs_Hz=8000),
		Bell103Parameters(fs_Hz=48000.5),
		Bell103Parameters(fs_Hz=48000, filter_length=0),
		Bell103Parameters(fs_Hz=48000, filter_length=80),
		Bell103Parameters(fs_Hz=3000, tone_set=ToneSet.ANSWERING),
		Bell103Parameters(fs_Hz=2400, tone_set=ToneSet.ORIGINATING),
	],
)
def test_configuration_errors_abort_before_decoding(params) -> None:
	with pytest.raises(ConfigurationError):
		decode(np.zeros(10, dtype=np.int16), params)


def test_tone_set_by_name() -> None:
	wf = Bell103Waveform(Bell103Parameters(tone_set="originating"))
	assert (wf.mark_Hz, wf.space_Hz) == (1270.0, 1070.0)
	with pytest.raises(ConfigurationError):
		Bell103Waveform(Bell103Parameters(tone_set="full-duplex"))


def test_frame_bits_layout() -> None:
	assert Bell103Waveform.frame_bits(b"\x41").tolist() == [0, 1, 0, 0, 0, 0, 0, 1, 0, 1]
	assert Bell103Waveform.frame_bits(b"").size == 0


def test_multichannel_array_rejected() -> None:
	x = _signal(b"A")
	with pytest.raises(ValueError):
		decode(np.stack([x, x], axis=1))
