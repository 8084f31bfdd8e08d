"""Read two fractions and print every operator applied to them."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import Config, OverflowPolicy
from .exceptions import RationalError
from .rational import Rational

PROMPTS = (
    "Numerator of the first fraction: ",
    "Denominator of the first fraction: ",
    "Numerator of the second fraction: ",
    "Denominator of the second fraction: ",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rational64",
        description="Show arithmetic and comparisons of two 64-bit fractions.",
    )
    parser.add_argument(
        "components",
        nargs="*",
        type=int,
        metavar="N",
        help="N1 D1 N2 D2; prompted for on standard input when omitted",
    )
    parser.add_argument("--config", dest="config", help="TOML file with overflow/strict settings")
    parser.add_argument(
        "--parity",
        action="store_true",
        help="Wrap around on unavoidable overflow instead of failing",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject zero denominators instead of treating the fraction as zero",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log arithmetic fallbacks")
    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    if args.config is not None:
        path = Path(args.config).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {args.config}")
        config = Config.from_toml(path)
    else:
        config = Config.default()
    if args.parity:
        config = Config(overflow=OverflowPolicy.WRAP, strict=config.strict)
    if args.strict:
        config = Config(overflow=config.overflow, strict=True)
    return config


def read_components(components: Sequence[int]) -> Tuple[int, int, int, int]:
    if components:
        if len(components) != 4:
            raise ValueError(f"expected 4 integers (N1 D1 N2 D2), got {len(components)}")
        return tuple(components)
    values: List[int] = []
    for prompt in PROMPTS:
        raw = input(prompt)
        try:
            values.append(int(raw.strip()))
        except ValueError:
            raise ValueError(f"not an integer: {raw!r}") from None
    return tuple(values)


def report(first: Rational, second: Rational) -> List[str]:
    lines = [
        "Fractions:",
        f"  first:  {first}",
        f"  second: {second}",
        "",
        "Arithmetic:",
    ]
    results = [
        ("+", first + second),
        ("-", first - second),
        ("*", first * second),
    ]
    for symbol, value in results:
        lines.append(f"  {first} {symbol} {second} = {value} = {value.to_float()}")
    if second:
        quotient = first / second
        lines.append(f"  {first} / {second} = {quotient} = {quotient.to_float()}")
    else:
        lines.append(f"  {first} / {second} = error: division by zero")

    lines += ["", "Comparisons:"]
    comparisons = [
        ("==", first == second),
        ("!=", first != second),
        ("< ", first < second),
        ("> ", first > second),
        ("<=", first <= second),
        (">=", first >= second),
    ]
    for symbol, outcome in comparisons:
        lines.append(f"  {first} {symbol} {second} : {str(outcome).lower()}")
    return lines


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = resolve_config(args)
    n1, d1, n2, d2 = read_components(args.components)
    first = Rational.from_fraction(n1, d1, config=config)
    second = Rational.from_fraction(n2, d2, config=config)

    for line in report(first, second):
        print(line)
    return 0


def main() -> None:
    try:
        sys.exit(run())
    except (RationalError, OSError, ValueError, EOFError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
