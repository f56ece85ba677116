#!/usr/bin/env python3
"""Decode a Bell 103 recording and write the recovered bytes (default: out/MESSAGE.txt)."""
import sys
from bell103.errors import Bell103Error, ConfigurationError
from bell103.interface import build_decode_parser, build_modem, configure_logging, ensure_output_dir, load_wav, resolve_output_path

def main(argv: list[str] | None = None) -> int:
	args = build_decode_parser().parse_args(argv)
	configure_logging(args.debug)
	out_dir = ensure_output_dir(args.out_dir)

	try:
		samples, fs = load_wav(args.input_wav)
	except (OSError, RuntimeError, ValueError) as exc: # soundfile read errors are RuntimeErrors
		print(f"Cannot read {args.input_wav}: {exc}", file=sys.stderr)
		return 2
	if args.fs is not None and args.fs != fs:
		print(f"Sample-rate mismatch: expected {args.fs} Hz, {args.input_wav} is {fs} Hz.", file=sys.stderr)
		return 2
	try:
		modem, wf, demod = build_modem(args, fs_Hz=fs, plot_dir=out_dir)
	except ConfigurationError as exc:
		print(f"Configuration error: {exc}", file=sys.stderr)
		return 2
	print(f"Decoding {args.input_wav} ({len(samples)/fs:.2f} s, {wf.tone_set.name.lower()} tones)...", file=sys.stderr)

	try:
		result = modem.recover_bytes(samples, strict=args.strict)
	except Bell103Error as exc:
		print(f"Stopped: {exc}", file=sys.stderr)
		return 1

	out_path = resolve_output_path(out_dir, args.output)
	with open(out_path, "wb") as f:
		f.write(result.data)
	if not args.quiet:
		print(result.data.decode("ascii", errors="replace"))
	for err in result.errors:
		print(f"[error] {err}", file=sys.stderr)
	print(f"Wrote {len(result.data)} bytes to {out_path} ({len(result.errors)} errors)", file=sys.stderr)
	return 0

if __name__ == "__main__":
	sys.exit(main())
