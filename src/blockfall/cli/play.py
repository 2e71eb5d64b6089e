# src/blockfall/cli/play.py
from __future__ import annotations

from blockfall.apps.play.entrypoint import parse_args, run_play


def main() -> int:
    return run_play(parse_args())


if __name__ == "__main__":
    raise SystemExit(main())
