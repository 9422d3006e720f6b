# -*- coding: utf-8 -*-
"""
Tests for the Bernoulli train/test split.
"""

import pandas as pd
import pytest

from causal_prep.split import split_train_test


@pytest.fixture
def table():
    return pd.DataFrame({"hyp_id": [f"f_{i}_{i}" for i in range(2000)], "value": range(2000)})


class TestSplitTrainTest:

    def test_disjoint_and_complete(self, table):
        parts = split_train_test(table, 0.75, seed=1)
        train_idx = set(parts["train"].index)
        test_idx = set(parts["test"].index)
        assert train_idx.isdisjoint(test_idx)
        assert train_idx | test_idx == set(table.index)

    def test_approximate_ratio(self, table):
        parts = split_train_test(table, 0.75, seed=7)
        share = len(parts["train"]) / len(table)
        assert 0.70 < share < 0.80

    def test_same_seed_same_membership(self, table):
        a = split_train_test(table, 0.6, seed=123)
        b = split_train_test(table, 0.6, seed=123)
        assert a["train"].index.tolist() == b["train"].index.tolist()

    def test_different_seed_differs(self, table):
        a = split_train_test(table, 0.6, seed=1)
        b = split_train_test(table, 0.6, seed=2)
        assert a["train"].index.tolist() != b["train"].index.tolist()

    def test_keeps_row_order(self, table):
        train = split_train_test(table, 0.5, seed=3)["train"]
        assert train["value"].is_monotonic_increasing

    @pytest.mark.parametrize("ratio", [0.0, 1.0, -0.2, 1.5])
    def test_ratio_bounds(self, table, ratio):
        with pytest.raises(ValueError):
            split_train_test(table, ratio)

    def test_empty_table(self):
        parts = split_train_test(pd.DataFrame({"a": []}), 0.75, seed=0)
        assert len(parts["train"]) == 0
        assert len(parts["test"]) == 0
