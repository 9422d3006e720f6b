"""
Schema detection & validation for hypothesis tables.

Hypothesis tables are exported by hand from extraction spreadsheets, so headers
drift ("Node 1", "node1", "Hypothesis #", ...). These checks run BEFORE
preprocessing to prevent silent bugs:
- wrong file / unreadable encoding
- required columns missing or undetectable
- empty inputs
"""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path
from typing import Any

import pandas as pd

from causal_prep.config import CausalPrepConfig


class SchemaError(ValueError):
    pass


_EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def normalize_col_name(name: str) -> str:
    """
    Normalize a column name to ASCII snake-ish form for robust matching:
      "Node 1"       -> "node_1"
      "Hypothesis #" -> "hypothesis"
      "File Name"    -> "file_name"
    """
    s = unicodedata.normalize("NFKD", str(name))
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = s.lower()
    s = re.sub(r"[^a-z0-9]+", "_", s).strip("_")
    return s


def validate_file_exists(path: str | Path) -> None:
    p = Path(path)
    if not p.exists():
        raise SchemaError(f"Missing file: {p}")


def read_csv_robust(path: str | Path, **kwargs: Any) -> pd.DataFrame:
    """
    Read CSV with a small encoding fallback chain (exports come from different OS defaults).
    """
    p = Path(path)
    for enc in ("utf-8", "utf-8-sig", "cp1252"):
        try:
            return pd.read_csv(p, encoding=enc, **kwargs)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte, so this last pass always decodes.
    return pd.read_csv(p, encoding="latin-1", **kwargs)


def read_table(path: str | Path, *, sheet_name: str | int = 0) -> pd.DataFrame:
    """
    Read a hypothesis table from CSV or a spreadsheet (by file suffix).
    """
    p = Path(path)
    validate_file_exists(p)
    if p.suffix.lower() in _EXCEL_SUFFIXES:
        return pd.read_excel(p, sheet_name=sheet_name)
    return read_csv_robust(p)


# Normalized header variants accepted for each canonical column.
_HEADER_CANDIDATES: dict[str, set[str]] = {
    "sentence": {"sentence", "sentences", "text", "sentence_text", "hypothesis_text"},
    "node_1": {"node_1", "node1", "entity_1", "entity1", "cause"},
    "node_2": {"node_2", "node2", "entity_2", "entity2", "effect"},
    "file_name": {"file_name", "filename", "file", "source_file", "document"},
    "hypothesis_num": {"hypothesis_num", "hypothesis_number", "hypothesis_no", "hypothesis", "hyp_num", "hyp"},
}


def guess_raw_to_canon(df: pd.DataFrame, cfg: CausalPrepConfig) -> dict[str, str]:
    cols = list(df.columns)
    norm_map = {c: normalize_col_name(c) for c in cols}

    canon_by_key = {
        "sentence": cfg.sentence_col,
        "node_1": cfg.node1_col,
        "node_2": cfg.node2_col,
        "file_name": cfg.file_col,
        "hypothesis_num": cfg.hyp_num_col,
    }

    mapping: dict[str, str] = {}
    missing: list[str] = []
    for key, canon in canon_by_key.items():
        candidates = _HEADER_CANDIDATES[key] | {normalize_col_name(canon)}
        # Exact canonical name wins over any variant.
        raw = canon if canon in cols else next((c for c in cols if norm_map[c] in candidates), None)
        if raw is None:
            missing.append(canon)
            continue
        mapping[str(raw)] = canon

    if missing:
        raise SchemaError(
            "Unable to detect required columns. "
            f"Missing: {missing}. "
            f"Columns={cols} Normalized={norm_map}"
        )
    return mapping


def rename_raw_columns(df: pd.DataFrame, cfg: CausalPrepConfig) -> pd.DataFrame:
    """
    Rename raw columns to canonical names (sentence/node_1/node_2/file_name/hypothesis_num).
    """
    mapping = guess_raw_to_canon(df, cfg)
    return df.copy().rename(columns=mapping)


def validate_required_columns(df: pd.DataFrame, cfg: CausalPrepConfig) -> None:
    missing = [c for c in cfg.required_cols if c not in df.columns]
    if missing:
        raise SchemaError(f"Missing required columns: {missing}. Columns={df.columns.tolist()}")


def run_all_checks(df: pd.DataFrame, cfg: CausalPrepConfig) -> dict[str, Any]:
    """
    Checks on a canonical (renamed) table. Raises SchemaError on hard failures,
    returns soft statistics for the run summary.
    """
    validate_required_columns(df, cfg)
    if len(df) == 0:
        raise SchemaError("Input table has no rows.")

    required = list(cfg.required_cols)
    missing_any = df[required].isna().any(axis=1)
    dup_keys = df.dropna(subset=cfg.group_cols).duplicated(subset=cfg.group_cols)

    return {
        "rows": int(len(df)),
        "missing_by_col": {c: int(df[c].isna().sum()) for c in required},
        "rows_with_missing": int(missing_any.sum()),
        "duplicate_hypothesis_keys": int(dup_keys.sum()),
    }
