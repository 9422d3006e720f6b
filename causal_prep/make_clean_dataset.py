"""
Clean dataset + document-term matrix generator for causal hypotheses.

Source of truth
---------------
This file does NOT implement its own cleaning/feature logic.
It calls:
- `schema.read_table()` / `schema.rename_raw_columns()`  (raw file -> canonical df)
- `preprocess.process_data_with_meta()`                  (canonical df -> trimmed df with hyp_id)
- `split.split_train_test()`                             (Bernoulli train/test partition)
- `features.fit_dtm()` / `features.transform_dtm()`      (3-gram bag-of-words matrices)

Outputs (default)
-----------------
<repo>/outputs/clean/
  - processed.csv
  - train_clean.csv / test_clean.csv
  - dtm_train.npz / dtm_test.npz    (scipy sparse, rows follow dtm_index.json doc ids)
  - dtm_index.json                  (doc ids per split + feature names)
  - vectorizer.joblib
  - run_summary.json

Usage
-----
python -m causal_prep.make_clean_dataset --input data/hypotheses.xlsx
python -m causal_prep.make_clean_dataset --input data/hypotheses.csv --output_dir out --lemmatizer none
python -m causal_prep.make_clean_dataset --input data/new.csv --config_json outputs/clean/run_summary.json
"""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

import joblib
from scipy import sparse

from causal_prep import features, preprocess, schema
from causal_prep.config import CausalPrepConfig, cfg_to_dict, load_config_json, resolve_output_dir
from causal_prep.split import split_train_test
from causal_prep.text_tokens import LEMMATIZER_SOURCES, STOP_WORD_SOURCES, Lemmatizer


def make_clean_dataset(
    *,
    input_path: str | Path,
    output_dir: str | Path | None = None,
    cfg: CausalPrepConfig | None = None,
    sheet_name: str | int = 0,
    stop_words: Iterable[str] | None = None,
    lemmatizer: Lemmatizer | None = None,
) -> dict[str, str]:
    """
    Run the whole preparation and write artifacts to an output folder.
    Returns a dict with output paths (as strings).
    """
    cfg = cfg or CausalPrepConfig()
    input_path = Path(input_path)
    out_dir = Path(output_dir) if output_dir is not None else resolve_output_dir()
    out_dir.mkdir(parents=True, exist_ok=True)

    # ----- Read raw + validate schema -----
    df_raw = schema.read_table(input_path, sheet_name=sheet_name)
    df = schema.rename_raw_columns(df_raw, cfg)
    checks = schema.run_all_checks(df, cfg)
    print(f"[load] rows={checks['rows']} rows_with_missing={checks['rows_with_missing']} <- {input_path}")

    # ----- Clean -----
    processed, stages = preprocess.process_data_with_meta(df, cfg, stop_words=stop_words, lemmatizer=lemmatizer)
    print(f"[process] rows_out={stages['rows_out']} (dropped_missing={stages['rows_in'] - stages['rows_after_drop_missing']})")

    # ----- Split + vectorize (vocabulary from train only) -----
    parts = split_train_test(processed, cfg.train_split_ratio, seed=cfg.seed)
    train_df, test_df = parts["train"], parts["test"]
    print(f"[split] train={len(train_df)} test={len(test_df)} ratio={cfg.train_split_ratio} seed={cfg.seed}")

    dtm_train, vectorizer = features.fit_dtm(train_df, cfg)
    dtm_test = features.transform_dtm(test_df, vectorizer, cfg)
    print(f"[dtm] features={len(dtm_train.features)} train_shape={dtm_train.shape} test_shape={dtm_test.shape}")

    # ----- Write outputs -----
    paths = {
        "processed": out_dir / cfg.processed_name,
        "train_clean": out_dir / cfg.clean_train_name,
        "test_clean": out_dir / cfg.clean_test_name,
        "dtm_train": out_dir / cfg.dtm_train_name,
        "dtm_test": out_dir / cfg.dtm_test_name,
        "dtm_index": out_dir / cfg.dtm_index_name,
        "vectorizer": out_dir / cfg.vectorizer_name,
        "summary": out_dir / cfg.run_summary_name,
    }

    processed.to_csv(paths["processed"], index=False, encoding="utf-8")
    train_df.to_csv(paths["train_clean"], index=False, encoding="utf-8")
    test_df.to_csv(paths["test_clean"], index=False, encoding="utf-8")
    sparse.save_npz(paths["dtm_train"], dtm_train.matrix)
    sparse.save_npz(paths["dtm_test"], dtm_test.matrix)
    paths["dtm_index"].write_text(
        json.dumps(
            {"train_doc_ids": dtm_train.doc_ids, "test_doc_ids": dtm_test.doc_ids, "features": dtm_train.features},
            ensure_ascii=False,
            indent=2,
        ),
        encoding="utf-8",
    )
    joblib.dump(vectorizer, paths["vectorizer"])

    summary: dict[str, Any] = {
        "task": "causal_prep_clean",
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "inputs": {"table": str(input_path), "sheet": sheet_name},
        "outputs": {k: str(v) for k, v in paths.items() if k != "summary"},
        "checks": checks,
        "stages": stages,
        "split": {"train": int(len(train_df)), "test": int(len(test_df))},
        "dtm": {"n_features": len(dtm_train.features), "nnz_train": int(dtm_train.matrix.nnz)},
        "config": cfg_to_dict(cfg),
    }
    paths["summary"].write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding="utf-8")

    return {k: str(v) for k, v in paths.items()}


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--input", type=str, required=True)
    parser.add_argument("--sheet", type=str, default=None)
    parser.add_argument("--output_dir", type=str, default=None)
    # Repeat a previous run: its run_summary.json (or a config dump) becomes the base config.
    parser.add_argument("--config_json", type=str, default=None)
    # Unset flags keep the base config value.
    parser.add_argument("--train_split_ratio", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--ngram_n", type=int, default=None)
    parser.add_argument("--stop_words", type=str, default=None, choices=STOP_WORD_SOURCES)
    parser.add_argument("--lemmatizer", type=str, default=None, choices=LEMMATIZER_SOURCES)
    args = parser.parse_args()

    base = load_config_json(args.config_json) if args.config_json else CausalPrepConfig()
    overrides = {
        k: getattr(args, k)
        for k in ("train_split_ratio", "seed", "ngram_n", "stop_words", "lemmatizer")
        if getattr(args, k) is not None
    }
    cfg = replace(base, **overrides)

    paths = make_clean_dataset(
        input_path=args.input,
        output_dir=args.output_dir,
        cfg=cfg,
        sheet_name=args.sheet if args.sheet is not None else 0,
    )
    print(json.dumps(paths, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
