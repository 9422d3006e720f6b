"""
Train/test split for processed hypothesis tables.

Each row is assigned independently (Bernoulli draw with p = train_split_ratio),
so split sizes are only approximately ratio * n and membership is reproducible
only with the same seed.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def split_train_test(
    df: pd.DataFrame,
    train_split_ratio: float = 0.75,
    *,
    seed: int | None = None,
) -> dict[str, pd.DataFrame]:
    """
    Returns {"train": ..., "test": ...}; the two frames are disjoint and keep
    the original row order and index.
    """
    ratio = float(train_split_ratio)
    if not 0.0 < ratio < 1.0:
        raise ValueError(f"train_split_ratio must be in (0, 1), got {train_split_ratio}")

    rng = np.random.default_rng(seed)
    in_train = rng.random(len(df)) < ratio
    return {"train": df.loc[in_train].copy(), "test": df.loc[~in_train].copy()}
