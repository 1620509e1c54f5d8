#!/usr/bin/env python3
"""Analyze and optimize the sample CESIL+ programs."""

import argparse
import sys

from .analysis import diagnose
from .optimize import optimize_program
from .printing import print_diagnostics, print_program
from .samples import SAMPLES


def add_optimizer_flags(parser: argparse.ArgumentParser) -> None:
    """Add common optimizer diagnostic flags to an argument parser."""
    parser.add_argument("--print-after-all", action="store_true",
                        help="Print the program after each optimization pass")
    parser.add_argument("--print-metrics", action="store_true",
                        help="Print pass metrics and diagnostics")
    parser.add_argument("--pass-config", default=None,
                        help="JSON pass config (default: cesil/pass_config.json)")


def optimizer_kwargs(args: argparse.Namespace) -> dict:
    """Extract optimizer keyword args from parsed CLI args."""
    return {
        'print_after_all': args.print_after_all,
        'print_metrics': args.print_metrics,
        'config_path': args.pass_config,
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Analyze and optimize CESIL+ sample programs')
    parser.add_argument('samples', nargs='*', help='Sample names (default: all)')
    parser.add_argument('--list', action='store_true', help='List sample names and exit')
    parser.add_argument('--analyze', action='store_true',
                        help='Print label diagnostics before and after optimization')
    add_optimizer_flags(parser)
    args = parser.parse_args(argv)

    if args.list:
        for name in SAMPLES:
            print(name)
        return 0

    names = args.samples or list(SAMPLES)
    unknown = [name for name in names if name not in SAMPLES]
    if unknown:
        parser.error(f"unknown sample(s): {', '.join(unknown)}")

    for name in names:
        program = SAMPLES[name]()
        print_program(program, title=name)
        if args.analyze:
            print_diagnostics(diagnose(program), title=name)

        optimized = optimize_program(program, **optimizer_kwargs(args))
        print_program(optimized, title=f"{name} (optimized)")
        if args.analyze:
            print_diagnostics(diagnose(optimized), title=f"{name} (optimized)")

    return 0


if __name__ == '__main__':
    sys.exit(main())
