"""
Hypothesis trimming around the entity markers.

After anonymization a hypothesis reads like
    "the node1 effect on node2 output increases risk significantly"
Everything up to and including the first node2 that follows the first node1 is
the signal region. The tail is glued into ONE run-on token, so a fixed-width
n-gram vectorizer sees it as a single rare feature instead of a long list of
trailing n-grams:
    "the node1 effect on node2 outputincreasesrisksignificantly"

Sentences without a usable node1 -> node2 pair pass through unchanged.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd


class InvalidInputError(TypeError):
    pass


TRIM_OUTCOMES: tuple[str, ...] = ("no_marker", "wrong_order", "marker_at_end", "trimmed")


def _check_str(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(f"{name} must be a str, got {type(value).__name__}: {value!r}")
    return value


def _find_cut(tokens: list[str], key_1: str, key_2: str) -> tuple[str, int | None]:
    """
    Returns (outcome, cut) where cut is the 0-based position of the first key_2
    strictly after the first key_1, or None when there is nothing to trim.
    """
    idx1 = [i for i, tok in enumerate(tokens) if tok == key_1]
    idx2 = [i for i, tok in enumerate(tokens) if tok == key_2]
    if not idx1 or not idx2:
        return "no_marker", None

    first1 = idx1[0]
    after = [i for i in idx2 if i > first1]
    if not after:
        return "wrong_order", None

    cut = after[0]
    if cut == len(tokens) - 1:
        return "marker_at_end", None
    return "trimmed", cut


def classify_trim(text: str, key_1: str = "node1", key_2: str = "node2") -> str:
    """
    Which branch trim_string() takes for this sentence (one of TRIM_OUTCOMES).
    """
    text = _check_str(text, "text")
    outcome, _ = _find_cut(text.split(" "), _check_str(key_1, "key_1"), _check_str(key_2, "key_2"))
    return outcome


def trim_string(text: str, key_1: str = "node1", key_2: str = "node2") -> str:
    """
    Collapse every token after the first key_2 that follows the first key_1.

    Tokens are split on single spaces. The kept prefix is re-joined with spaces,
    the suffix is concatenated with no separator:
      "the node1 effect on node2 output rises" -> "the node1 effect on node2 outputrises"
      "node2 precedes node1 here"              -> unchanged (wrong order)
      "only node1 present"                     -> unchanged (no node2)
    """
    text = _check_str(text, "text")
    tokens = text.split(" ")
    _, cut = _find_cut(tokens, _check_str(key_1, "key_1"), _check_str(key_2, "key_2"))
    if cut is None:
        return text
    kept = " ".join(tokens[: cut + 1])
    collapsed = "".join(tokens[cut + 1 :])
    return f"{kept} {collapsed}"


def trim_strings(
    values: pd.Series | Iterable[str],
    key_1: str = "node1",
    key_2: str = "node2",
) -> pd.Series | list[str]:
    """
    Row-wise trim_string(). A Series keeps its index; other iterables give a list.
    """
    if isinstance(values, pd.Series):
        return values.map(lambda x: trim_string(x, key_1, key_2))
    if isinstance(values, str):
        raise InvalidInputError("trim_strings expects a collection of sentences; use trim_string for one.")
    return [trim_string(v, key_1, key_2) for v in values]
