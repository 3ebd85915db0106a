"""Entry point for the pi-repl CLI."""

from __future__ import annotations

import argparse
import logging
import sys

from pi.repl.config import ReplConfig, load_config

EXAMPLES = ("echo", "simple", "pretty", "widgets")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pi-repl", description="pi-repl: interactive line editor demo"
    )
    parser.add_argument(
        "--example", default="simple", choices=EXAMPLES, help="Demo to run (default: simple)"
    )
    parser.add_argument("--history-size", type=int, default=None, help="Number of history entries")
    parser.add_argument("--no-alt-screen", action="store_true", help="Draw on the main screen")
    parser.add_argument("--log-file", default=None, help="Write logs to this file")
    parser.add_argument(
        "--log-level", default="warning", choices=["debug", "info", "warning", "error"]
    )
    return parser


def make_config(args: argparse.Namespace) -> ReplConfig:
    config = load_config()
    if args.history_size is not None:
        config.history_size = args.history_size
    if args.no_alt_screen:
        config.alternate_screen = False
    config.validate()
    return config


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # stderr would draw over the repl, so logs only go out when asked for
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=args.log_file,
    )

    try:
        config = make_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    from pi.repl.examples import EXECUTORS, PROMPT, run_widgets
    from pi.repl.repl import Repl
    from pi.repl.terminal import ProcessTerminal

    repl = Repl.from_config(config)
    if args.example != "echo":
        repl.transcript.append(PROMPT)

    with ProcessTerminal(
        alternate_screen=config.alternate_screen,
        mouse_capture=config.mouse_capture,
        write_log=config.write_log,
    ) as terminal:
        if args.example == "widgets":
            run_widgets(terminal, repl)
        else:
            repl.run_on_terminal(terminal, EXECUTORS[args.example])
    return 0


if __name__ == "__main__":
    sys.exit(main())
