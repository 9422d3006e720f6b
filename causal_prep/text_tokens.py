"""
Word tokenization, stop-word lists and lemmatizers for hypothesis sentences.

The pipeline only needs three small collaborators:
- a word tokenizer (lower-case words, punctuation dropped)
- a stop-word set (exact-match membership)
- a lemmatizer (word -> canonical word)

NLTK resources are never downloaded at runtime. If a source needs a corpus that
is not installed, we fail with the downloader command to run.
"""

from __future__ import annotations

import re
from typing import Callable

Lemmatizer = Callable[[str], str]

# Words with inner apostrophes stay whole ("don't", "company's").
_WORD_RE = re.compile(r"\w+(?:['’]\w+)*")

STOP_WORD_SOURCES: tuple[str, ...] = ("sklearn", "nltk", "none")
LEMMATIZER_SOURCES: tuple[str, ...] = ("wordnet", "none")


def tokenize_words(text: str) -> list[str]:
    """
    Split a sentence into lower-case word tokens, dropping punctuation.
      "Node1 raised costs, sharply." -> ["node1", "raised", "costs", "sharply"]
    """
    return _WORD_RE.findall(str(text).lower())


def load_stop_words(source: str = "sklearn") -> frozenset[str]:
    if source == "none":
        return frozenset()
    if source == "sklearn":
        from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

        return frozenset(ENGLISH_STOP_WORDS)
    if source == "nltk":
        from nltk.corpus import stopwords

        try:
            return frozenset(w.lower() for w in stopwords.words("english"))
        except LookupError as e:
            raise LookupError(
                "Missing NLTK stopwords corpus. Install with: python -m nltk.downloader stopwords"
            ) from e
    raise ValueError(f"Unknown stop-word source {source!r}. Expected one of {STOP_WORD_SOURCES}.")


def _identity(word: str) -> str:
    return word


def load_lemmatizer(source: str = "wordnet") -> Lemmatizer:
    if source == "none":
        return _identity
    if source == "wordnet":
        from nltk.stem import WordNetLemmatizer

        wnl = WordNetLemmatizer()
        # WordNet loads lazily; probe once so a missing corpus fails here, not mid-pipeline.
        try:
            wnl.lemmatize("tests")
        except LookupError as e:
            raise LookupError(
                "Missing NLTK wordnet corpus. Install with: python -m nltk.downloader wordnet omw-1.4"
            ) from e
        return wnl.lemmatize
    raise ValueError(f"Unknown lemmatizer {source!r}. Expected one of {LEMMATIZER_SOURCES}.")
