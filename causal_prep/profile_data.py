"""
Quick profiling of a hypothesis table: how much survives cleaning, how often the
entities are actually found in their sentence, and which trim branch each
processed hypothesis takes.

Usage (local repo)
------------------
python -m causal_prep.profile_data --input data/hypotheses.xlsx
python -m causal_prep.profile_data --input data/hypotheses.csv --lemmatizer none
"""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Any

import pandas as pd

from causal_prep import preprocess, schema
from causal_prep.config import CausalPrepConfig, load_config_json
from causal_prep.text_tokens import LEMMATIZER_SOURCES, STOP_WORD_SOURCES, load_lemmatizer, load_stop_words
from causal_prep.trim import TRIM_OUTCOMES, classify_trim


def _length_stats(texts: pd.Series) -> dict[str, Any]:
    lengths = texts.astype("string").fillna("").str.split().str.len()
    q = lengths.quantile([0, 0.25, 0.5, 0.75, 0.9, 1.0]).to_dict() if len(lengths) else {}
    return {
        "min_tokens": int(lengths.min()) if len(lengths) else 0,
        "max_tokens": int(lengths.max()) if len(lengths) else 0,
        "mean_tokens": float(lengths.mean()) if len(lengths) else 0.0,
        "quantiles": {str(k): float(v) for k, v in q.items()},
    }


def entity_hit_stats(df: pd.DataFrame, cfg: CausalPrepConfig) -> dict[str, int]:
    """
    Count normalized sentences that contain each placeholder (before tokenization).
    """
    norm = preprocess.normalize_entities(preprocess.drop_missing(df, cfg), cfg)
    s = norm[cfg.sentence_col].astype("string")
    has1 = s.str.contains(cfg.node1_token, regex=False)
    has2 = s.str.contains(cfg.node2_token, regex=False)
    return {
        "rows": int(len(norm)),
        "with_node1": int(has1.sum()),
        "with_node2": int(has2.sum()),
        "with_both": int((has1 & has2).sum()),
        "with_neither": int((~has1 & ~has2).sum()),
    }


def trim_outcome_counts(sentences: pd.Series, cfg: CausalPrepConfig) -> dict[str, int]:
    outcomes = sentences.map(lambda x: classify_trim(x, cfg.node1_token, cfg.node2_token))
    counts = outcomes.value_counts().to_dict()
    return {k: int(counts.get(k, 0)) for k in TRIM_OUTCOMES}


def profile(*, input_path: Path, cfg: CausalPrepConfig, sheet_name: str | int = 0) -> dict[str, Any]:
    df_raw = schema.read_table(input_path, sheet_name=sheet_name)
    df = schema.rename_raw_columns(df_raw, cfg)
    checks = schema.run_all_checks(df, cfg)

    out: dict[str, Any] = {"input": str(input_path), "checks": checks}
    out["raw"] = {
        "rows": int(len(df_raw)),
        "cols": [str(c) for c in df_raw.columns],
        "length": _length_stats(df[cfg.sentence_col]),
        "files": int(df[cfg.file_col].nunique()),
    }
    out["entities"] = entity_hit_stats(df, cfg)

    # Outcomes are classified on the rejoined (pre-trim) sentences.
    dropped = preprocess.drop_missing(df, cfg)
    words = preprocess.explode_words(preprocess.normalize_entities(dropped, cfg), cfg)
    words = preprocess.filter_and_lemmatize(
        words,
        cfg,
        stop_words=load_stop_words(cfg.stop_words),
        lemmatizer=load_lemmatizer(cfg.lemmatizer),
    )
    rejoined = preprocess.rejoin_sentences(words, cfg)
    out["processed"] = {
        "rows": int(len(rejoined)),
        "length": _length_stats(rejoined[cfg.sentence_col]),
        "trim_outcomes": trim_outcome_counts(rejoined[cfg.sentence_col], cfg),
    }
    return out


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--input", type=str, required=True)
    parser.add_argument("--sheet", type=str, default=None)
    parser.add_argument("--config_json", type=str, default=None)
    parser.add_argument("--stop_words", type=str, default=None, choices=STOP_WORD_SOURCES)
    parser.add_argument("--lemmatizer", type=str, default=None, choices=LEMMATIZER_SOURCES)
    parser.add_argument("--out_json", type=str, default=None)
    args = parser.parse_args()

    base = load_config_json(args.config_json) if args.config_json else CausalPrepConfig()
    overrides = {k: getattr(args, k) for k in ("stop_words", "lemmatizer") if getattr(args, k) is not None}
    cfg = replace(base, **overrides)
    report = profile(input_path=Path(args.input), cfg=cfg, sheet_name=args.sheet if args.sheet is not None else 0)

    text = json.dumps(report, ensure_ascii=False, indent=2)
    print(text)
    if args.out_json:
        p = Path(args.out_json)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        print(f"\nSaved -> {p}")


if __name__ == "__main__":
    main()
