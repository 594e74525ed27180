#!/usr/bin/env python3
"""
main.py : decode keyed messages

Every data set starts on a new line: the header characters, then the encoded
message as '0'/'1' characters. The line is split at its first '0' or '1'. The
message may wrap onto the following lines and ends at its empty terminal
segment ("000"). A line without any '0'/'1' is a header alone, and its message
starts on the next line. Each decoded message is printed on its own line.

Usage:
    python main.py input.txt                    #Decode every data set
    python main.py --verify < input.txt         #Also re-encode and confirm round-trip integrity
    python main.py input.txt --stats stats.csv  #Record per data set timings to CSV
"""

import argparse
import csv
import sys
import time
import tracemalloc
from itertools import chain
from typing import Iterable, Iterator, TextIO, Tuple

from keying.encoder import MessageEncoder
from keying.errors import DecodeError
from keying.header import Encoding
from keying.segments import TAG_WIDTH

#
#Utility helpers
#

def warn(msg: str) -> None:
    print(f"[warn] {msg}", file=sys.stderr)


def info(msg: str) -> None:
    print(f"[info] {msg}", file=sys.stderr)


def message_bits(lines: Iterable[str]) -> Iterator[str]:
    #Line endings and stray whitespace never reach the partitioner
    for line in lines:
        for c in line:
            if c == "0" or c == "1":
                yield c


def split_line(line: str) -> Tuple[str, str]:
    #Header is everything before the first '0' or '1'
    for i, c in enumerate(line):
        if c == "0" or c == "1":
            return line[:i], line[i:]
    return line, ""


def read_headers(lines: Iterator[str]) -> Iterator[Tuple[str, str]]:
    """Yield (header, message head) per data set, skipping blank lines.

    The caller must consume the message that follows from the same line
    iterator before asking for the next header.
    """
    for line in lines:
        line = line.rstrip("\r\n")
        if line:
            yield split_line(line)


def measure(encoding: Encoding, bits: Iterable[str]) -> dict:
    """Decode one message and record time and peak memory.

    Returns a dict whose keys land directly in the stats CSV.
    """
    seen = 0

    def tap(it: Iterable[str]) -> Iterator[str]:
        nonlocal seen
        for b in it:
            seen += 1
            yield b

    tracemalloc.start()
    t0 = time.perf_counter()
    try:
        words = list(encoding.partitioner.iter_words(tap(bits)))
        decoded = encoding.decode(words)
    finally:
        t1 = time.perf_counter()
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

    return{
        "decoded": decoded,
        "encoded_bits": seen,
        "word_count": len(words),
        "decode_time_ms": round((t1-t0)*1000, 3),
        "decode_mem_kb": round(peak/1024, 2),
    }


def verify(header: str, decoded: str, tag_width: int) -> None:
    #Re-encoding must decode back to the same text
    encoded = MessageEncoder(header, tag_width).encode(decoded)
    again = Encoding(header, tag_width).decode_message(encoded)
    if again != decoded:
        raise ValueError(f"round-trip failed, got {again!r}")


def run(fp: TextIO, out: TextIO, tag_width: int, check: bool, stats_writer=None) -> int:
    """Decode every data set in fp, returning the number that failed."""
    lines = iter(fp)
    failures = 0
    for idx, (header, head) in enumerate(read_headers(lines), 1):
        encoding = Encoding(header, tag_width)
        try:
            metrics = measure(encoding, message_bits(chain([head], lines)))
        except DecodeError as exc:
            #Skip this data set and carry on with the next header
            warn(f"data set {idx}: {exc}")
            failures += 1
            continue

        decoded = metrics["decoded"]
        if check:
            try:
                verify(header, decoded, tag_width)
            except ValueError as exc:
                warn(f"data set {idx}: {exc}")
                failures += 1

        print(decoded, file=out)

        if stats_writer is not None:
            stats_writer.writerow({
                "data_set": idx,
                "header_length": len(header),
                "encoded_bits": metrics["encoded_bits"],
                "word_count": metrics["word_count"],
                "decoded_length": len(decoded),
                "decode_time_ms": metrics["decode_time_ms"],
                "decode_mem_kb": metrics["decode_mem_kb"],
            })
    return failures


STATS_FIELDS = [
    "data_set", "header_length", "encoded_bits", "word_count",
    "decoded_length", "decode_time_ms", "decode_mem_kb",
]

#
#Main driver
#

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Decode messages written with a header keyed prefix code.")
    parser.add_argument(
        "input", nargs="?", type=argparse.FileType("r"), default=sys.stdin,
        help="file holding the data sets(default: stdin)"
    )
    parser.add_argument(
        "--verify", action="store_true",
        help="re-encode every decoded message and confirm it decodes to the same text"
    )
    parser.add_argument(
        "--stats", metavar="PATH",
        help="write per data set decode time and peak memory to a CSV file"
    )
    parser.add_argument(
        "--tag-width", type=int, default=TAG_WIDTH,
        help=f"width in bits of each segment start tag(default: {TAG_WIDTH})"
    )
    args = parser.parse_args(argv)

    if args.tag_width < 1:
        parser.error("--tag-width must be at least 1")

    with args.input as fp:
        if args.stats:
            with open(args.stats, "w", newline="") as sp:
                writer = csv.DictWriter(sp, fieldnames=STATS_FIELDS)
                writer.writeheader()
                failures = run(fp, sys.stdout, args.tag_width, args.verify, writer)
            info(f"stats saved to {args.stats}")
        else:
            failures = run(fp, sys.stdout, args.tag_width, args.verify)

    if failures:
        warn(f"{failures} data set(s) failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
