from __future__ import annotations

import sys

from .analysis_cli import _build_parser, main as analysis_main


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] in ("-h", "--help"):
        p = _build_parser()
        p.prog = "git-wrapped"
        p.print_help()
        print("")
        print("Writes a JSON year-in-review report and prints a summary to the terminal.")
        return 0
    return analysis_main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
