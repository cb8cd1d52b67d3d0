"""
Count words in a byte stream split by a delimiter pattern.
Reads stdin by default:

    cat book.txt | python -m regex_splitter.word_count --top 20
"""
import argparse
import json
import logging
import sys
from collections import Counter
from typing import BinaryIO

import psutil
from tqdm import tqdm

from regex_splitter.errors import PatternCompileError
from regex_splitter.pattern import compile_delimiter
from regex_splitter.splitter import DEFAULT_CAPACITY, RegexSplitter

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = r'[ "\r\n.,!?:;/]+'


def count_words(
    source: BinaryIO,
    delimiter=DEFAULT_DELIMITER,
    read_size: int = DEFAULT_CAPACITY,
    show_progress: bool = False,
) -> Counter:
    """Count lowercased words between delimiter matches.

    Args:
        source: Binary stream to read.
        delimiter: Pattern separating words.
        read_size: Bytes requested per read.
        show_progress: Display a tqdm bar with the process RSS.

    Returns:
        A Counter mapping each word to its number of occurrences.
    """
    counts = Counter()
    splitter = RegexSplitter(source, delimiter, capacity=read_size)
    process = psutil.Process()
    pbar = tqdm(splitter, desc="Words", unit="word", disable=not show_progress)
    for i, chunk in enumerate(pbar):
        # A delimiter at the very start of the stream produces one empty chunk.
        if not chunk:
            continue
        counts[chunk.decode("utf-8", errors="replace").lower()] += 1
        if show_progress and i % 10_000 == 0:
            # Show current process RSS in MiB
            rss_mib = process.memory_info().rss / (1024 * 1024)
            pbar.set_postfix(mem_mib=f"{rss_mib:.1f}")
    pbar.close()
    return counts


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--input", dest="input_path", default=None,
        help="File to read (default: stdin)")
    parser.add_argument("--delimiter", default=DEFAULT_DELIMITER,
        help="Regular expression separating words")
    parser.add_argument("--read_size", "--read-size", type=int, default=DEFAULT_CAPACITY,
        help="Bytes requested from the input per read")
    parser.add_argument("--top", type=int, default=None,
        help="Only report the TOP most frequent words")
    parser.add_argument("--output", dest="output_path", default=None,
        help="Write the counts as JSON to this file instead of stdout")
    parser.add_argument("--progress", action="store_true",
        help="Show a progress bar on stderr")
    parser.add_argument("--verbose", action="store_true",
        help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.read_size <= 0:
        parser.error("--read_size must be positive")
    try:
        delimiter = compile_delimiter(args.delimiter)
    except PatternCompileError as exc:
        parser.error(str(exc))

    if args.input_path is None:
        counts = count_words(sys.stdin.buffer, delimiter, args.read_size, args.progress)
    else:
        with open(args.input_path, "rb") as f:
            counts = count_words(f, delimiter, args.read_size, args.progress)
    logger.info("counted %d distinct words", len(counts))

    if args.top is not None:
        report = dict(counts.most_common(args.top))
    else:
        report = dict(sorted(counts.items()))

    if args.output_path is None:
        json.dump(report, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        with open(args.output_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
