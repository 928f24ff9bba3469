#!/usr/bin/env python3
import argparse
import os
import sys

from config import USER_CONFIG, get_config_path
from errors import SessionError
from log_config import configure_logging
from orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vfm",
        description="Keyboard-driven terminal file browser.",
        epilog=f"Configuration file: {get_config_path()}",
    )
    parser.add_argument("path", nargs="?", default=None, help="directory to start in")
    parser.add_argument(
        "--last-dir-path",
        default=None,
        help="write the final directory to this file on exit",
    )
    parser.add_argument(
        "--print-last-dir",
        action="store_true",
        help="print the final directory on exit",
    )
    return parser


def _write_last_dir(target: str, path: str) -> None:
    target = os.path.expanduser(target)
    with open(target, "w", encoding="utf-8") as fh:
        fh.write(path)


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(USER_CONFIG.log_level, USER_CONFIG.log_file)
    # Make a lone ESC register quickly instead of waiting for a sequence
    os.environ.setdefault("ESCDELAY", "25")

    start_path = args.path or os.getcwd()
    try:
        final_path = Orchestrator(start_path=start_path).run()
    except SessionError as exc:
        print(f"vfm: {exc}", file=sys.stderr)
        return 1

    last_dir_target = args.last_dir_path or USER_CONFIG.last_dir_path
    if last_dir_target:
        try:
            _write_last_dir(last_dir_target, final_path)
        except OSError as exc:
            print(f"vfm: cannot write {last_dir_target}: {exc}", file=sys.stderr)
            return 1
    if args.print_last_dir:
        print(final_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
