"""
Move-table export: the computer's choice for every reachable position.

Every non-terminal board reachable from the empty board is searched with
the side to move as maximizer. Rows are written to CSV (and optionally
Parquet) together with a manifest describing the run.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from .board import O, X, empty_cells, side_to_move
from .solver import best_move, solve_all_reachable
from .symmetry import canonical_form, cell_class
from .tactics import immediate_winning_moves

TABLE_VERSION = "1.0.0"
FIELDNAMES = [
    "board",
    "to_move",
    "best_index",
    "score",
    "cell_class",
    "canonical_form",
    "empty_cells",
    "winning_moves",
]


@dataclass
class ExportArgs:
    out: Path
    canonical_only: bool = False
    format: str = "csv"  # one of: "csv", "parquet", "both"
    verbose: bool = False
    cli_argv: List[str] | None = None


def _schema_hash(fieldnames: List[str]) -> str:
    payload = "\n".join(sorted(fieldnames)).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def build_rows(canonical_only: bool = False) -> List[Dict[str, Any]]:
    solved = solve_all_reachable(X, O)
    rows: List[Dict[str, Any]] = []
    for key, board in solved.items():
        moves = empty_cells(board)
        mover = side_to_move(board, X, O)
        opponent = O if mover == X else X
        result = best_move(board, mover, opponent, True)
        if result.index is None:
            continue  # terminal
        canon = canonical_form(board)
        if canonical_only and key != canon:
            continue
        rows.append({
            "board": key,
            "to_move": mover,
            "best_index": result.index,
            "score": result.score,
            "cell_class": cell_class(result.index),
            "canonical_form": canon,
            "empty_cells": len(moves),
            "winning_moves": " ".join(map(str, immediate_winning_moves(board, mover))),
        })
    rows.sort(key=lambda r: r["board"])
    return rows


def cell_preference(rows: List[Dict[str, Any]]) -> np.ndarray:
    """3x3 grid counting how often each cell is the chosen move."""
    chosen = np.array([r["best_index"] for r in rows], dtype=np.int64)
    return np.bincount(chosen, minlength=9).reshape(3, 3)


def run_export(args: ExportArgs) -> Path:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    have_parquet = (
        importlib.util.find_spec('pandas') is not None
        and importlib.util.find_spec('pyarrow') is not None
    )
    msg = (
        "Parquet dependencies not available (install pandas and pyarrow). "
        "Use pip install .[parquet] to enable parquet support."
    )
    if fmt == "parquet" and not have_parquet:
        # nothing may be written when only parquet was requested
        raise RuntimeError(msg)

    args.out.mkdir(parents=True, exist_ok=True)
    logging.info("Searching all reachable positions…")
    rows = build_rows(canonical_only=args.canonical_only)
    logging.info("Built %d move-table rows", len(rows))

    table_csv = args.out / 'move_table.csv'
    table_parquet = args.out / 'move_table.parquet'
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        with table_csv.open('w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=FIELDNAMES)
            w.writeheader()
            for r in rows:
                w.writerow(r)
        wrote_csv = True
        logging.info("Wrote CSV: %s (%d rows)", table_csv, len(rows))

    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            pd.DataFrame(rows, columns=FIELDNAMES).to_parquet(table_parquet)
            wrote_parquet = True
            logging.info("Wrote Parquet file: %s", table_parquet)
        else:
            logging.warning("%s Proceeding with CSV only; manifest will record parquet_written=false.", msg)

    grid = cell_preference(rows)
    score_counts = Counter(r["score"] for r in rows)
    files: Dict[str, Any] = {
        "table_csv": str(table_csv) if wrote_csv else None,
        "table_parquet": str(table_parquet) if wrote_parquet else None,
    }
    checksums = {label: sha256_file(Path(p)) for label, p in files.items() if p is not None}

    manifest = {
        "table_version": TABLE_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "canonical_only": args.canonical_only,
            "format": fmt,
        },
        "cli_argv": args.cli_argv,
        "row_count": len(rows),
        "score_distribution": {str(k): v for k, v in sorted(score_counts.items())},
        "cell_preference": grid.tolist(),
        "schema_hash": _schema_hash(FIELDNAMES),
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    (args.out / "manifest.json").write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json")
    return args.out
