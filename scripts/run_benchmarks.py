#!/usr/bin/env python3
from __future__ import annotations

import math
import statistics as stats
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from tictacbot.board import new_board
from tictacbot.solver import best_move, clear_cache
from tictacbot.table import ExportArgs, run_export


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    rounds: int = 10


def main() -> int:
    cfg = Config()
    search_times: List[float] = []
    export_times: List[float] = []
    with tempfile.TemporaryDirectory() as tmp:
        for r in range(cfg.rounds):
            clear_cache()
            t0 = time.perf_counter()
            best_move(new_board(), "X", "O", True)
            t1 = time.perf_counter()
            search_times.append(t1 - t0)
            outdir = Path(tmp) / f"bench_{r:03d}"
            t2 = time.perf_counter()
            run_export(ExportArgs(out=outdir, canonical_only=True))
            t3 = time.perf_counter()
            export_times.append(t3 - t2)
    m_search, h_search = ci95(search_times)
    m_export, h_export = ci95(export_times)
    print(f"cold best_move(empty board): mean={m_search:.4f}s ± {h_search:.4f}s (95% CI, N={cfg.rounds})")
    print(f"table export(canonical-only,csv): mean={m_export:.4f}s ± {h_export:.4f}s (95% CI, N={cfg.rounds})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
