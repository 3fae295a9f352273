"""
Infinite chess engine package.

This package holds the authoritative game state for chess played on an
unbounded rank/file grid, plus the pieces the server needs around it.

Modules:
    constants      — Start ranks, castling files, server limits
    piece          — Square, Color, and the mutable Piece record
    pawn_rank      — Per-color tracker of lazily created default pawns
    moves          — Append-only move history
    board          — Lookup, line of sight, move application, legality
    rules          — Pluggable movement-shape rules (StandardChess)
    serializer     — JSON snapshots of pieces and boards
    setup_position — Back-rank placement at game start
    shared         — Lock-guarded board with version-gated reads
"""
