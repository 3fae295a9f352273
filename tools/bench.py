#!/usr/bin/env python3
"""
Benchmark: time windowed legal-move queries at growing window sizes.

Each legality check scans the whole piece arena, and touching a pawn rank
materializes pawns, so cost grows with both the window and the number of
pieces created so far. Run before and after changes to the board lookup to
quantify the effect.

Usage: python3 tools/bench.py
"""
import json
import os
import subprocess
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PYTHON = sys.executable
CONSOLE = os.path.join(REPO, "interface", "console.py")

# (label, origin rank, origin file, window size). The window is centred on the
# origin. Fixed so that runs stay comparable.
QUERIES = [
    ("Knight b8",    0, 1, 8),
    ("Queen d1",     7, 3, 16),
    ("Pawn e2",      6, 4, 16),
    ("Far pawn",     6, 10_000, 32),
    ("Rook a8 wide", 0, 0, 64),
]


def run_query(label: str, rank: int, file: int, size: int) -> dict:
    """Run one legal-move query through a fresh console and time it.

    Args:
        label: Human-readable query name for display.
        rank: Origin rank.
        file: Origin file.
        size: Side length of the window.

    Returns:
        Dict with keys: label, size, moves, time_ms.
    """
    env = {**os.environ, "PYTHONPATH": REPO}
    proc = subprocess.Popen(
        [PYTHON, CONSOLE],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        env=env,
    )
    half = size // 2
    start = time.monotonic()
    proc.stdin.write(f"legal {rank} {file} {rank - half} {file - half} {size}\n")
    proc.stdin.flush()
    reply = proc.stdout.readline()
    elapsed_ms = int((time.monotonic() - start) * 1000)

    proc.stdin.write("quit\n")
    proc.stdin.flush()
    proc.wait(timeout=5)

    return {
        "label": label,
        "size": size,
        "moves": len(json.loads(reply)),
        "time_ms": elapsed_ms,
    }


def main() -> None:
    """Run all benchmark queries and print a summary table."""
    print(f"Infinite chess legal-move benchmark — {PYTHON}")
    print(f"Console: {CONSOLE}")
    print()
    print(f"{'Query':<14} {'Window':>6} {'Moves':>6} {'Time(ms)':>9}")
    print("-" * 38)

    for label, rank, file, size in QUERIES:
        r = run_query(label, rank, file, size)
        print(f"{r['label']:<14} {r['size']:>6} {r['moves']:>6} {r['time_ms']:>9,}")


if __name__ == "__main__":
    main()
