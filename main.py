#!/usr/bin/env python3
"""
torrentcodec - BitTorrent metainfo decoder and info-hash calculator
Main entry point for the application.
"""

import argparse
import sys
import time
from pathlib import Path
from torrentcodec.bencode.errors import DecodeError
from torrentcodec.torrent.parser import decode, parse_torrent_file
from torrentcodec.torrent.info_hash import info_hash_hex
from torrentcodec.torrent.metadata import Metainfo
from torrentcodec.common.logging import config_logging
import logging

logger = logging.getLogger(__name__)


def show_metainfo(metainfo: Metainfo):
    """Print a summary of a decoded torrent."""
    info = metainfo.info
    print(f"\n{'='*60}")
    print(f"Torrent: {info.name}")
    print(f"Size: {info.total_length / (1024*1024):.2f} MB ({info.total_length} bytes)")
    print(f"Pieces: {info.piece_count} x {info.piece_length / 1024:.0f} KB")
    print(f"Tracker: {metainfo.announce}")
    print(f"Info hash: {info_hash_hex(info)}")
    if info.is_multi_file:
        print(f"Files ({len(info.layout.files)}):")
        for entry in info.layout.files:
            print(f"  {entry.relative_path} ({entry.length} bytes)")
    print(f"{'='*60}\n")


def benchmark(data: bytes, iterations: int) -> float:
    """
    Decode the same buffer repeatedly.

    Returns:
        Elapsed wall-clock seconds for all iterations.
    """
    logger.info(f"Benchmarking {iterations} decodes of {len(data)} bytes")
    start = time.perf_counter()
    for _ in range(iterations):
        decode(data)
    elapsed = time.perf_counter() - start
    logger.info(f"Benchmark finished in {elapsed:.3f}s")
    return elapsed


def main():
    """Main entry point for torrentcodec."""
    parser = argparse.ArgumentParser(
        description="Decode a .torrent file and print its info hash",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ubuntu.torrent
  %(prog)s movie.torrent -v
  %(prog)s movie.torrent --benchmark 100000
        """
    )

    parser.add_argument(
        "torrent",
        type=Path,
        help="Path to the .torrent file"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--log-file",
        default="torrentcodec.log",
        help="Log file name (default: torrentcodec.log)"
    )

    parser.add_argument(
        "--log-dir",
        type=Path,
        default=Path("data") / "logs",
        help="Directory for log files (default: data/logs/)"
    )

    parser.add_argument(
        "--benchmark",
        type=int,
        metavar="N",
        help="Decode the file N times and report the elapsed time"
    )

    args = parser.parse_args()

    if not args.torrent.exists():
        print(f"Error: Torrent file '{args.torrent}' not found")
        sys.exit(1)

    config_logging(args.log_file, args.log_dir, args.verbose)

    try:
        metainfo = parse_torrent_file(args.torrent)
    except DecodeError as e:
        print(f"\n✗ Could not decode {args.torrent}: {e}")
        sys.exit(1)

    show_metainfo(metainfo)

    if args.benchmark:
        elapsed = benchmark(args.torrent.read_bytes(), args.benchmark)
        print(f"Decoded {args.benchmark} times in {elapsed:.3f}s "
              f"({elapsed / args.benchmark * 1e6:.2f} µs per decode)")


if __name__ == "__main__":
    main()
