"""
Bag-of-words n-gram document-term matrices for trimmed hypotheses.

One document per hyp_id, features are contiguous n-grams (n=3 by default) of the
whitespace tokens of the trimmed sentence. Tokens are lower-cased; feature names
join the n-gram tokens with "_" ("node1_cause_node2").

The vectorizer is fitted on the training split only and reused for the test
split, so both matrices share one column space.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.feature_extraction.text import CountVectorizer

from causal_prep.config import CausalPrepConfig


def whitespace_tokenize(text: str) -> list[str]:
    # Sentences are already word-tokenized upstream; the collapsed tail stays one token.
    return text.split()


@dataclass(frozen=True)
class DocumentTermMatrix:
    matrix: sparse.csr_matrix
    doc_ids: list[str]
    features: list[str]

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape

    def to_frame(self) -> pd.DataFrame:
        """
        Dense table: doc_id column followed by one count column per feature.
        """
        dense = pd.DataFrame(self.matrix.toarray(), columns=self.features)
        dense.insert(0, "doc_id", self.doc_ids)
        return dense


def build_vectorizer(cfg: CausalPrepConfig) -> CountVectorizer:
    n = int(cfg.ngram_n)
    if n < 1:
        raise ValueError(f"ngram_n must be >= 1, got {cfg.ngram_n}")
    return CountVectorizer(
        tokenizer=whitespace_tokenize,
        token_pattern=None,
        lowercase=True,
        ngram_range=(n, n),
    )


def _docs_and_ids(df: pd.DataFrame, cfg: CausalPrepConfig) -> tuple[list[str], list[str]]:
    for c in (cfg.sentence_col, cfg.id_col):
        if c not in df.columns:
            raise KeyError(f"Missing column '{c}' in df.")
    ids = df[cfg.id_col].astype(str).tolist()
    if len(set(ids)) != len(ids):
        dupes = df.loc[df[cfg.id_col].astype(str).duplicated(), cfg.id_col].head(10).tolist()
        raise ValueError(f"Document ids must be unique. Examples of duplicates: {dupes}")
    docs = df[cfg.sentence_col].astype(str).tolist()
    return docs, ids


def _feature_names(vectorizer: CountVectorizer, cfg: CausalPrepConfig) -> list[str]:
    # Tokens never contain spaces, so " " only appears between n-gram parts.
    return [str(f).replace(" ", cfg.ngram_sep) for f in vectorizer.get_feature_names_out()]


def fit_dtm(df: pd.DataFrame, cfg: CausalPrepConfig) -> tuple[DocumentTermMatrix, CountVectorizer]:
    """
    Fit a fresh n-gram vectorizer on df and return (dtm, fitted vectorizer).
    """
    docs, ids = _docs_and_ids(df, cfg)
    n = int(cfg.ngram_n)
    if not any(len(whitespace_tokenize(d)) >= n for d in docs):
        raise ValueError(f"No document has at least {n} tokens; cannot build a {n}-gram vocabulary.")

    vectorizer = build_vectorizer(cfg)
    X = vectorizer.fit_transform(docs)
    dtm = DocumentTermMatrix(matrix=sparse.csr_matrix(X, dtype=np.int64), doc_ids=ids, features=_feature_names(vectorizer, cfg))
    return dtm, vectorizer


def transform_dtm(df: pd.DataFrame, vectorizer: CountVectorizer, cfg: CausalPrepConfig) -> DocumentTermMatrix:
    """
    Project df onto an already fitted vocabulary (unseen n-grams are ignored).
    """
    docs, ids = _docs_and_ids(df, cfg)
    X = vectorizer.transform(docs)
    return DocumentTermMatrix(matrix=sparse.csr_matrix(X, dtype=np.int64), doc_ids=ids, features=_feature_names(vectorizer, cfg))


def gen_dtm_bow(df: pd.DataFrame, cfg: CausalPrepConfig | None = None) -> DocumentTermMatrix:
    """
    One-shot document-term matrix (bag of words, n-grams of size cfg.ngram_n).
    """
    cfg = cfg or CausalPrepConfig()
    dtm, _ = fit_dtm(df, cfg)
    return dtm
