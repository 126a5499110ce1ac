"""Write a random comma-separated list of numbers and read it back."""

from __future__ import annotations

import argparse
import random
import re
import sys
from typing import Iterator, List, Optional, Sequence, TextIO

_NUMBER = re.compile(r"\s*([+-]?)(\d*)")


def write_random_numbers(stream: TextIO, rng: random.Random) -> List[int]:
    """Write 10 to 14 random values in 0..99 separated by commas; return them."""
    count = rng.randrange(10, 15)
    values = [rng.randrange(100) for _ in range(count)]
    stream.write(",".join(str(value) for value in values))
    return values


def read_numbers(stream: TextIO) -> Iterator[int]:
    """Yield every integer in the stream, skipping characters that start none."""
    text = stream.read()
    pos = 0
    while True:
        match = _NUMBER.match(text, pos)
        sign, digits = match.groups()
        pos = match.end()
        if digits:
            yield int(sign + digits)
            continue
        if pos >= len(text):
            return
        # A lone sign is consumed along with the character after it.
        pos += 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Write random numbers to a file and print them back.")
    parser.add_argument("path", nargs="?", default="random.txt")
    args = parser.parse_args(argv)
    try:
        with open(args.path, "w+", encoding="ascii") as stream:
            write_random_numbers(stream, random.Random())
            stream.seek(0)
            numbers = list(read_numbers(stream))
    except OSError as exc:
        print(f"open: {exc}", file=sys.stderr)
        return 1
    print("".join(f"{value} " for value in numbers))
    return 0