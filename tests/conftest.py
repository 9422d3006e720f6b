"""
Shared fixtures: a small hypothesis table plus injected stop words and a
dictionary lemmatizer, so no NLTK corpora are needed to run the suite.
"""

import pandas as pd
import pytest

from causal_prep.config import CausalPrepConfig

STOP_WORDS = frozenset({"the", "to", "over", "of", "a", "on", "by", "is", "an"})

LEMMAS = {
    "years": "year",
    "leads": "lead",
    "costs": "cost",
    "increases": "increase",
    "profits": "profit",
}


def dict_lemmatizer(word: str) -> str:
    return LEMMAS.get(word, word)


@pytest.fixture
def cfg():
    return CausalPrepConfig(lemmatizer="none")


@pytest.fixture
def raw_df():
    return pd.DataFrame(
        {
            "sentence": [
                "Higher Taxes lead to lower Consumer Spending over the next years.",
                "Inflation is driven by Wages.",
                "Subsidies raise output.",
                "Costs rise.",
            ],
            "node_1": ["Higher taxes", "wages", "Subsidies", "Costs"],
            "node_2": ["consumer spending.", "inflation", None, "profit"],
            "file_name": ["f1.pdf", "f1.pdf", "f1.pdf", "f2.pdf"],
            "hypothesis_num": [1, 2, 3, 1],
        }
    )
