#!/usr/bin/env python3
"""
Verify a move-table export directory.

Checks performed:
- manifest.json exists and is parseable
- row_count in manifest is positive
- Files listed in manifest exist (if not None) and match their SHA256 checksums
- Row count of move_table.csv matches manifest.row_count
- schema_hash matches the CSV header (sorted column names)
- Every row's best_index is a free cell of its board

Exit codes:
 0 on success, non-zero on any validation failure.
"""
from __future__ import annotations

import argparse
import csv
import hashlib
import json
from pathlib import Path
import sys
from typing import Any, Dict

from tictacbot.table import sha256_file


def schema_hash_from_csv_header(path: Path) -> str:
    with path.open('r', newline='') as f:
        header = next(csv.reader(f))
    payload = "\n".join(sorted(header)).encode('utf-8')
    return hashlib.sha256(payload).hexdigest()


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Verify tic-tac-toe move-table export")
    ap.add_argument("out", type=Path, help="Export directory (contains manifest.json)")
    ns = ap.parse_args(argv)
    manifest_path = ns.out / "manifest.json"
    if not manifest_path.exists():
        print(f"ERROR: manifest not found: {manifest_path}", file=sys.stderr)
        return 2
    try:
        manifest = json.loads(manifest_path.read_text())
    except json.JSONDecodeError as e:
        print(f"ERROR: failed to parse manifest: {e}", file=sys.stderr)
        return 2

    ok = True
    files: Dict[str, Any] = manifest.get("files", {}) or {}
    checksums: Dict[str, Any] = manifest.get("checksums", {}) or {}
    row_count = manifest.get("row_count")
    if not isinstance(row_count, int) or row_count <= 0:
        print("ERROR: manifest.row_count must be a positive integer", file=sys.stderr)
        ok = False

    for label, p in files.items():
        if p is None:
            continue
        fp = Path(p)
        if not fp.exists():
            print(f"ERROR: missing file listed in manifest: {label} -> {fp}", file=sys.stderr)
            ok = False
            continue
        want = checksums.get(label)
        have = sha256_file(fp)
        if want and want != have:
            print(f"ERROR: checksum mismatch for {label}: manifest={want} computed={have}", file=sys.stderr)
            ok = False

    table_csv = files.get("table_csv")
    if table_csv and Path(table_csv).exists():
        with Path(table_csv).open('r', newline='') as f:
            rows = list(csv.DictReader(f))
        if row_count != len(rows):
            print(f"ERROR: row count mismatch: manifest={row_count} actual={len(rows)}", file=sys.stderr)
            ok = False
        want = manifest.get("schema_hash")
        have = schema_hash_from_csv_header(Path(table_csv))
        if want and want != have:
            print(f"ERROR: schema_hash mismatch: manifest={want} computed={have}", file=sys.stderr)
            ok = False
        for r in rows:
            idx = int(r["best_index"])
            if r["board"][idx] != ".":
                print(f"ERROR: {r['board']} chooses occupied cell {idx}", file=sys.stderr)
                ok = False

    if not ok:
        return 1
    print("OK: export verified", file=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
