#!/usr/bin/env python3
"""Generate a Bell 103 WAV carrying some bytes, back-to-back 9N1 frames."""
import sys
from bell103.fsk.waveform import to_pcm16
from bell103.interface import build_encode_parser, build_modem, configure_logging, ensure_output_dir, resolve_output_path, write_wav

def main(argv: list[str] | None = None) -> int:
	args = build_encode_parser().parse_args(argv)
	configure_logging(args.debug)
	out_dir = ensure_output_dir(args.out_dir)
	modem, wf, _ = build_modem(args)

	if args.text is not None:
		data = args.text.encode("utf-8")
	else:
		with open(args.input_file, "rb") as f:
			data = f.read()
	y = modem.modulate_bytes(data, amplitude=args.amplitude, lead_in_bits=args.lead_in_bits, tail_bits=args.tail_bits)

	out_path = resolve_output_path(out_dir, args.output_wav)
	write_wav(out_path, to_pcm16(y), wf.fs_Hz)
	print(f"Wrote {out_path} ({len(data)} bytes, {len(y)/wf.fs_Hz:.2f} s).")
	return 0

if __name__ == "__main__":
	sys.exit(main())
