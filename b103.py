#!/usr/bin/env python3
"""Top-level CLI dispatcher for bell103 tools: `b103 decode ...`, `b103 encode ...`."""
import argparse
import importlib
import sys

from bell103 import __version__

# command -> (module with main(argv), one-line summary)
COMMANDS = {
	"decode": ("decode", "WAV recording -> decoded bytes"),
	"encode": ("gen_wav", "bytes or text -> Bell 103 WAV"),
}

def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="b103",
		description="Bell 103 modem CLI.",
		epilog="commands:\n" + "\n".join(f"  {name:<8} {summary}" for name, (_, summary) in COMMANDS.items()),
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	parser.add_argument("command", choices=COMMANDS.keys(), help="Subcommand to run.")
	parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments forwarded to the subcommand.")
	return parser

def main(argv: list[str] | None = None) -> int:
	ns = build_parser().parse_args(argv)
	module = importlib.import_module(COMMANDS[ns.command][0])
	sub_args = ns.args[1:] if ns.args[:1] == ["--"] else ns.args
	return module.main(sub_args)

if __name__ == "__main__":
	sys.exit(main())
