"""Per-color record of which files already received their default pawn."""

from collections.abc import Iterator


class PawnRankTracker:
    """
    Sparse map from file to "pawn already materialized".

    Files are unbounded and may be negative, so the backing store is a dict
    rather than a fixed array. Once a file is marked it stays marked, even if
    its pawn later moves away or is captured.
    """

    def __init__(self) -> None:
        self._files: dict[int, bool] = {}

    def has_materialized(self, file: int) -> bool:
        return self._files.get(file, False)

    def mark_materialized(self, file: int) -> None:
        self._files[file] = True

    def __iter__(self) -> Iterator[int]:
        return (file for file, marked in self._files.items() if marked)

    def __len__(self) -> int:
        return sum(1 for _ in self)
