#!/usr/bin/env python3
import argparse

from almanac.orchestrator import run_once


def main():
    parser = argparse.ArgumentParser(description="Almanac seed-location solver")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--input", dest="input_path", help="Almanac text file (overrides config 'input')")
    parser.add_argument("--split-mode", dest="split_mode", choices=["first", "all"], help="Interval splitting: first overlap only, or all overlaps")
    parser.add_argument("--strict", dest="strict", action="store_true", help="Reject stages with overlapping source intervals")
    parser.add_argument("--no-strict", dest="strict", action="store_false", help="Skip source overlap validation")
    parser.add_argument("--cross-check", dest="cross_check", action="store_true", help="Verify part 2 with the exhaustive point-wise oracle")
    parser.add_argument("--no-cross-check", dest="cross_check", action="store_false", help="Disable the exhaustive cross-check")
    parser.add_argument("--cross-check-max", dest="cross_check_max", type=int, help="Max seed values the cross-check will enumerate")
    parser.set_defaults(strict=None, cross_check=None)
    args = parser.parse_args()

    overrides = {
        "split_mode": args.split_mode,
        "strict": args.strict,
        "cross_check": args.cross_check,
        "cross_check_max": args.cross_check_max,
    }

    report = run_once(args.config, input_path=args.input_path, overrides=overrides)
    print(f"Part 1: {report['part1']}")
    print(f"Part 2: {report['part2']}")


if __name__ == "__main__":
    main()
