"""
Causal hypothesis preprocessing.

Goals
-----
- Drop incomplete hypotheses (any required field missing or blank)
- Anonymize the two entities so the model learns the relation wording, not the names:
    "Acme Corp. reported profits." (node_1="Acme Corp.") -> "node1 reported profits."
- Reduce vocabulary: word tokens, stop words removed, lemmatized
- Re-join one sentence per (file_name, hypothesis_num) and trim the tail after node2
- Assign a unique hyp_id per output row

Entity replacement is a literal substring match, NOT word-boundary aware:
an entity "art" also hits "start". This mirrors how the hypothesis tables were
annotated and is kept as-is.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

import pandas as pd

from causal_prep.config import CausalPrepConfig
from causal_prep.text_tokens import Lemmatizer, load_lemmatizer, load_stop_words, tokenize_words
from causal_prep.trim import trim_strings

_WORD_COL = "__word"


def _require_cols(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"Missing required columns in df: {missing}")


def _replace_literal(text: str, entity: str, token: str) -> str:
    # An empty entity would match between every character.
    if not entity:
        return text
    return text.replace(entity, token)


def normalize_record(sentence: str, node_1: str, node_2: str, cfg: CausalPrepConfig) -> tuple[str, str, str]:
    """
    Normalize one hypothesis: lower-case, strip [.!?] from the entities only,
    then replace node_1 and node_2 (in that order) inside the sentence.
    """
    punct = re.compile(cfg.entity_punct_pattern)
    sentence = str(sentence).lower()
    node_1 = punct.sub("", str(node_1).lower())
    node_2 = punct.sub("", str(node_2).lower())

    sentence = _replace_literal(sentence, node_1, cfg.node1_token)
    sentence = _replace_literal(sentence, node_2, cfg.node2_token)
    return sentence, node_1, node_2


def drop_missing(df: pd.DataFrame, cfg: CausalPrepConfig) -> pd.DataFrame:
    """
    Drop rows where any required field is missing or whitespace-only.
    """
    required = list(cfg.required_cols)
    _require_cols(df, required)

    out = df.copy()
    keep = pd.Series(True, index=out.index)
    for c in required:
        filled = out[c].astype("string").str.strip().ne("").fillna(False).astype(bool)
        keep &= out[c].notna() & filled
    return out.loc[keep].reset_index(drop=True)


def normalize_entities(df: pd.DataFrame, cfg: CausalPrepConfig) -> pd.DataFrame:
    """
    Apply normalize_record() row by row. Rows with zero entity matches are kept
    untouched; trimming tolerates sentences without markers.
    """
    cols = [cfg.sentence_col, cfg.node1_col, cfg.node2_col]
    _require_cols(df, cols)

    out = df.copy()
    normalized = [
        normalize_record(s, n1, n2, cfg)
        for s, n1, n2 in zip(out[cfg.sentence_col], out[cfg.node1_col], out[cfg.node2_col])
    ]
    out[cfg.sentence_col] = [r[0] for r in normalized]
    out[cfg.node1_col] = [r[1] for r in normalized]
    out[cfg.node2_col] = [r[2] for r in normalized]
    return out


def explode_words(df: pd.DataFrame, cfg: CausalPrepConfig) -> pd.DataFrame:
    """
    One row per word token (sentence column replaced by a word column).
    Sentences with no word tokens produce no rows.
    """
    _require_cols(df, [cfg.sentence_col])
    out = df.copy()
    out[_WORD_COL] = out[cfg.sentence_col].map(tokenize_words)
    out = out.drop(columns=[cfg.sentence_col]).explode(_WORD_COL)
    out = out.dropna(subset=[_WORD_COL])
    return out.reset_index(drop=True)


def filter_and_lemmatize(
    words: pd.DataFrame,
    cfg: CausalPrepConfig,
    *,
    stop_words: Iterable[str],
    lemmatizer: Lemmatizer,
) -> pd.DataFrame:
    """
    Remove stop words (exact match) and lemmatize what remains.
    Marker tokens are neither filtered nor lemmatized.
    """
    markers = {cfg.node1_token, cfg.node2_token}
    stop = set(stop_words) - markers

    out = words.loc[~words[_WORD_COL].isin(stop)].copy()
    out[_WORD_COL] = out[_WORD_COL].map(lambda w: w if w in markers else lemmatizer(w))
    return out.reset_index(drop=True)


def rejoin_sentences(words: pd.DataFrame, cfg: CausalPrepConfig) -> pd.DataFrame:
    """
    Re-join surviving words (original order) into one sentence per
    (file_name, hypothesis_num), then drop duplicate rows.
    """
    _require_cols(words, [_WORD_COL, *cfg.group_cols])
    out = words.copy()
    out[cfg.sentence_col] = out.groupby(cfg.group_cols, sort=False)[_WORD_COL].transform(" ".join)
    out = out.drop(columns=[_WORD_COL]).drop_duplicates()
    return out.reset_index(drop=True)


def _id_part(value: Any) -> str:
    # Spreadsheet readers turn hypothesis numbers into floats (3 -> 3.0).
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def assign_hyp_ids(df: pd.DataFrame, cfg: CausalPrepConfig) -> pd.DataFrame:
    """
    hyp_id = <file_name>_<hypothesis_num>_<1-based row ordinal>
    """
    _require_cols(df, cfg.group_cols)
    out = df.reset_index(drop=True)
    out[cfg.id_col] = [
        f"{_id_part(f)}_{_id_part(h)}_{i}"
        for i, (f, h) in enumerate(zip(out[cfg.file_col], out[cfg.hyp_num_col]), start=1)
    ]
    return out


def process_data_with_meta(
    df: pd.DataFrame,
    cfg: CausalPrepConfig,
    *,
    stop_words: Iterable[str] | None = None,
    lemmatizer: Lemmatizer | None = None,
) -> tuple[pd.DataFrame, dict[str, Any]]:
    """
    Full preprocessing pipeline (canonical raw df -> trimmed df with hyp_id).
    Returns (df, meta) where meta holds row counts per stage.
    """
    if stop_words is None:
        stop_words = load_stop_words(cfg.stop_words)
    if lemmatizer is None:
        lemmatizer = load_lemmatizer(cfg.lemmatizer)

    meta: dict[str, Any] = {"rows_in": int(len(df))}

    out = drop_missing(df, cfg)
    meta["rows_after_drop_missing"] = int(len(out))

    out = normalize_entities(out, cfg)

    words = explode_words(out, cfg)
    meta["words"] = int(len(words))
    words = filter_and_lemmatize(words, cfg, stop_words=stop_words, lemmatizer=lemmatizer)
    meta["words_after_stop_words"] = int(len(words))

    out = rejoin_sentences(words, cfg)
    # Keep the input column order (rejoin appends the sentence column last).
    out = out[[c for c in df.columns if c in out.columns]].copy()
    meta["rows_after_rejoin"] = int(len(out))

    out[cfg.sentence_col] = trim_strings(out[cfg.sentence_col], cfg.node1_token, cfg.node2_token)
    out = assign_hyp_ids(out, cfg)
    meta["rows_out"] = int(len(out))
    return out, meta


def process_data(
    df: pd.DataFrame,
    cfg: CausalPrepConfig | None = None,
    *,
    stop_words: Iterable[str] | None = None,
    lemmatizer: Lemmatizer | None = None,
) -> pd.DataFrame:
    """
    All processing steps that precede vectorization into a DTM.

    Input columns (canonical names, see CausalPrepConfig):
      sentence, node_1, node_2, file_name, hypothesis_num
    """
    cfg = cfg or CausalPrepConfig()
    out, _ = process_data_with_meta(df, cfg, stop_words=stop_words, lemmatizer=lemmatizer)
    return out
