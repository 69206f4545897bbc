"""
Main entry point for the louvor command line.

Usage:
    louvor transpose cifra.txt -s 2
    louvor transpose cifra.txt --from G --to A -o cifra_A.txt
    louvor chords cifra.txt
    louvor interval C G
    louvor keys
    louvor ask "Quem são os pastores da igreja?"
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from louvor.config import Config, get_config
from louvor.core.notes import get_semitone_options, semitones_between
from louvor.core.transposer import (
    TransposeError,
    find_chords,
    resolve_shift,
    transpose,
)
from louvor.assistant.responder import ChatAssistant

logger = logging.getLogger(__name__)


def _read_text(source: str, encoding: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding=encoding)


def cmd_transpose(args: argparse.Namespace, config: Config) -> int:
    """Transpose a chord sheet and write it out."""
    shift = resolve_shift(args.semitones, args.from_key, args.to_key)

    text = _read_text(args.file, config.transpose.encoding)
    chord_lines_only = args.chord_lines_only or config.transpose.chord_lines_only
    result = transpose(text, shift, chord_lines_only=chord_lines_only)
    logger.info(f"Transposed {args.file} by {shift:+d} semitones")

    if args.output:
        Path(args.output).write_text(result, encoding=config.transpose.encoding)
    else:
        sys.stdout.write(result)

    if args.file != "-":
        try:
            config.add_recent_file(str(Path(args.file).resolve()))
        except OSError as e:
            logger.warning(f"Could not record recent file: {e}")
    return 0


def cmd_chords(args: argparse.Namespace, config: Config) -> int:
    """List the distinct chords of a chord sheet in order of appearance."""
    text = _read_text(args.file, config.transpose.encoding)
    seen = dict.fromkeys(match.text for match in find_chords(text))
    print(" ".join(seen))
    return 0


def cmd_interval(args: argparse.Namespace, config: Config) -> int:
    """Print how many semitones lead from one note up to another."""
    print(semitones_between(args.note_a, args.note_b))
    return 0


def cmd_keys(args: argparse.Namespace, config: Config) -> int:
    """Print the transposition choices offered to users."""
    options = get_semitone_options(
        config.transpose.min_semitones,
        config.transpose.max_semitones,
    )
    for offset, label, interval_name in options:
        print(f"{offset:>4}  {label:<10}  {interval_name}")
    return 0


def cmd_ask(args: argparse.Namespace, config: Config) -> int:
    """Ask the ministry assistant a question."""
    assistant = ChatAssistant(config.assistant)
    reply = assistant.respond(" ".join(args.message))
    print(f"[{reply.query_type} · {reply.agent}]")
    print(reply.response)
    return 0 if reply.success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="louvor",
        description="Chord sheet tools and assistant for the worship ministry.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="Directory holding config.json (default: ~/.louvor)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("transpose", help="Transpose a chord sheet")
    p.add_argument("file", help="Chord sheet to read, or - for stdin")
    p.add_argument("-s", "--semitones", type=int, default=None,
                   help="Semitones to shift (positive = up, negative = down)")
    p.add_argument("--from", dest="from_key", default=None, help="Current key, e.g. G")
    p.add_argument("--to", dest="to_key", default=None, help="Target key, e.g. A")
    p.add_argument("-o", "--output", default=None, help="Write to this file instead of stdout")
    p.add_argument("--chord-lines-only", action="store_true",
                   help="Leave lines that look like lyrics untouched")
    p.set_defaults(func=cmd_transpose)

    p = sub.add_parser("chords", help="List the chords used in a chord sheet")
    p.add_argument("file", help="Chord sheet to read, or - for stdin")
    p.set_defaults(func=cmd_chords)

    p = sub.add_parser("interval", help="Semitones from one note up to another")
    p.add_argument("note_a")
    p.add_argument("note_b")
    p.set_defaults(func=cmd_interval)

    p = sub.add_parser("keys", help="List transposition choices")
    p.set_defaults(func=cmd_keys)

    p = sub.add_parser("ask", help="Ask the ministry assistant")
    p.add_argument("message", nargs="+")
    p.set_defaults(func=cmd_ask)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = Config.load(args.config_dir) if args.config_dir else get_config()

    try:
        return args.func(args, config)
    except TransposeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
