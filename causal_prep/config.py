"""
Causal relation extraction configuration.

Why this exists
---------------
Hypothesis tables arrive from different extraction runs (spreadsheets, CSV exports)
with slightly different headers, and every downstream step depends on the same
column names and marker tokens.

This module centralizes:
- canonical column names used by OUR pipeline
- preprocessing switches (so experiments stay reproducible)
- path helpers (local repo data / output folders)
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path


@dataclass(frozen=True)
class CausalPrepConfig:
    # ----- Canonical column names (after schema normalization) -----
    sentence_col: str = "sentence"
    node1_col: str = "node_1"
    node2_col: str = "node_2"
    file_col: str = "file_name"
    hyp_num_col: str = "hypothesis_num"
    id_col: str = "hyp_id"

    # ----- Entity anonymization -----
    node1_token: str = "node1"
    node2_token: str = "node2"
    # Characters stripped from the entity strings (never from the sentence).
    entity_punct_pattern: str = r"[.!?]"

    # ----- Token filtering -----
    # "sklearn" (bundled list), "nltk" (needs the stopwords corpus) or "none"
    stop_words: str = "sklearn"
    # "wordnet" (needs the NLTK wordnet corpus) or "none"
    lemmatizer: str = "wordnet"

    # ----- Vectorization -----
    ngram_n: int = 3
    ngram_sep: str = "_"

    # ----- Train/test split -----
    train_split_ratio: float = 0.75
    seed: int = 42

    # ----- Output filenames -----
    processed_name: str = "processed.csv"
    clean_train_name: str = "train_clean.csv"
    clean_test_name: str = "test_clean.csv"
    dtm_train_name: str = "dtm_train.npz"
    dtm_test_name: str = "dtm_test.npz"
    dtm_index_name: str = "dtm_index.json"
    vectorizer_name: str = "vectorizer.joblib"
    run_summary_name: str = "run_summary.json"

    @property
    def required_cols(self) -> tuple[str, ...]:
        return (self.sentence_col, self.node1_col, self.node2_col, self.file_col, self.hyp_num_col)

    @property
    def group_cols(self) -> list[str]:
        return [self.file_col, self.hyp_num_col]


def cfg_to_dict(cfg: CausalPrepConfig) -> dict:
    """
    Serialize config to a JSON-friendly dict (for reproducibility).
    """
    return asdict(cfg)


def cfg_from_dict(data: dict) -> CausalPrepConfig:
    """
    Restore config from a dict produced by cfg_to_dict().
    """
    return CausalPrepConfig(**data)


def load_config_json(path: str | Path) -> CausalPrepConfig:
    """
    Restore config from a JSON file: either a bare cfg_to_dict() dump or a
    run_summary.json (its "config" block), so a previous run can be repeated.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if "config" in data and isinstance(data["config"], dict):
        data = data["config"]
    return cfg_from_dict(data)


def guess_repo_root() -> Path:
    """
    Guess repo root from this file location: <repo>/causal_prep/config.py
    """
    return Path(__file__).resolve().parents[1]


def resolve_output_dir(base_dir: Path | None = None) -> Path:
    """
    Output dir for cleaned artifacts:
      <base_dir or repo>/outputs/clean/
    """
    root = base_dir if base_dir is not None else guess_repo_root()
    return root / "outputs" / "clean"
