import numpy as np
import pytest
import soundfile as sf

import b103
import decode
import gen_wav
from bell103.fsk.waveform import Bell103Waveform, to_pcm16
from bell103.interface import load_wav, write_wav


def test_wav_round_trip(tmp_path) -> None:
	path = tmp_path / "a.wav"
	x = to_pcm16(Bell103Waveform().modulate_bytes(b"A"))
	write_wav(path, x, 48000)
	y, fs = load_wav(path)
	assert fs == 48000
	assert y.dtype == np.int16
	np.testing.assert_array_equal(x, y)


def test_stereo_wav_rejected(tmp_path) -> None:
	path = tmp_path / "stereo.wav"
	sf.write(str(path), np.zeros((100, 2), dtype=np.int16), 48000, subtype="PCM_16")
	with pytest.raises(ValueError):
		load_wav(path)


def test_encode_then_decode_cli(tmp_path, capsys) -> None:
	assert gen_wav.main(["--out-dir", str(tmp_path), "--text", "HELLO", "--tone-set", "originating", "--fs", "44100"]) == 0
	assert (tmp_path / "bell103.wav").exists()
	assert decode.main(["--out-dir", str(tmp_path), "--tone-set", "originating", str(tmp_path / "bell103.wav")]) == 0
	assert (tmp_path / "MESSAGE.txt").read_bytes() == b"HELLO"
	assert "HELLO" in capsys.readouterr().out


def test_decode_cli_reports_errors(tmp_path, capsys) -> None:
	wav = tmp_path / "short.wav"
	write_wav(wav, to_pcm16(Bell103Waveform().modulate_bytes(b"AB"))[:int(19.5*160)], 48000)
	assert decode.main(["--out-dir", str(tmp_path), "--quiet", str(wav)]) == 0
	assert (tmp_path / "MESSAGE.txt").read_bytes() == b"A"
	assert "Truncated input" in capsys.readouterr().err
	assert decode.main(["--out-dir", str(tmp_path), "--strict", str(wav)]) == 1


def test_decode_cli_rejects_bad_rate(tmp_path) -> None:
	wav = tmp_path / "odd.wav"
	write_wav(wav, np.zeros(100, dtype=np.int16), 8000)
	assert decode.main(["--out-dir", str(tmp_path), str(wav)]) == 2
	write_wav(wav, np.zeros(160, dtype=np.int16), 48000)
	assert decode.main(["--out-dir", str(tmp_path), "--fs", "44100", str(wav)]) == 2


def test_dispatcher_forwards_arguments(tmp_path) -> None:
	assert b103.main(["encode", "--out-dir", str(tmp_path), "--text", "x", "--output-wav", "x.wav"]) == 0
	assert b103.main(["decode", "--out-dir", str(tmp_path), "--quiet", str(tmp_path / "x.wav")]) == 0
	assert (tmp_path / "MESSAGE.txt").read_bytes() == b"x"


def test_decode_cli_unreadable_input(tmp_path, capsys) -> None:
	assert decode.main(["--out-dir", str(tmp_path), str(tmp_path / "missing.wav")]) == 2
	stereo = tmp_path / "stereo.wav"
	sf.write(str(stereo), np.zeros((320, 2), dtype=np.int16), 48000, subtype="PCM_16")
	assert decode.main(["--out-dir", str(tmp_path), str(stereo)]) == 2
	assert "Cannot read" in capsys.readouterr().err


def test_dispatcher_version_and_help(capsys) -> None:
	with pytest.raises(SystemExit) as exc:
		b103.main(["--version"])
	assert exc.value.code == 0
	assert "0.1.0" in capsys.readouterr().out
	with pytest.raises(SystemExit):
		b103.main(["--help"])
	out = capsys.readouterr().out
	assert "decode" in out and "encode" in out
