# -*- coding: utf-8 -*-
"""
Tests for loading hypothesis tables and detecting their columns.
"""

import pandas as pd
import pytest

from causal_prep import schema
from causal_prep.config import CausalPrepConfig


@pytest.fixture
def cfg():
    return CausalPrepConfig()


class TestColumnDetection:

    def test_normalize_col_name(self):
        assert schema.normalize_col_name("Node 1") == "node_1"
        assert schema.normalize_col_name("Hypothesis #") == "hypothesis"
        assert schema.normalize_col_name("Fichier Nommé") == "fichier_nomme"

    def test_header_variants(self, cfg):
        df = pd.DataFrame(columns=["Sentence", "Node 1", "Node 2", "File Name", "Hypothesis #", "Notes"])
        out = schema.rename_raw_columns(df, cfg)
        assert out.columns.tolist() == ["sentence", "node_1", "node_2", "file_name", "hypothesis_num", "Notes"]

    def test_canonical_names_win(self, cfg):
        df = pd.DataFrame(columns=["text", "sentence", "node_1", "node_2", "file_name", "hypothesis_num"])
        mapping = schema.guess_raw_to_canon(df, cfg)
        assert mapping["sentence"] == "sentence"
        assert "text" not in mapping

    def test_missing_column(self, cfg):
        df = pd.DataFrame(columns=["sentence", "node_1", "file_name", "hypothesis_num"])
        with pytest.raises(schema.SchemaError, match="node_2"):
            schema.rename_raw_columns(df, cfg)


class TestReadTable:

    def test_missing_file(self, tmp_path):
        with pytest.raises(schema.SchemaError):
            schema.read_table(tmp_path / "nope.csv")

    def test_cp1252_csv(self, tmp_path):
        p = tmp_path / "hyp.csv"
        p.write_bytes("sentence,node_1\nCafé prices rise,café\n".encode("cp1252"))
        df = schema.read_table(p)
        assert df.loc[0, "node_1"] == "café"

    def test_undecodable_bytes_fall_back_to_latin1(self, tmp_path):
        """0x81 is undefined in cp1252; latin-1 still decodes it."""
        p = tmp_path / "hyp.csv"
        p.write_bytes(b"sentence,node_1\nprices\x81 rise,x\n")
        df = schema.read_table(p)
        assert df.loc[0, "sentence"] == "prices\x81 rise"

    def test_excel(self, tmp_path):
        pytest.importorskip("openpyxl")
        p = tmp_path / "hyp.xlsx"
        pd.DataFrame({"Sentence": ["Oil lifts prices"], "Hypothesis #": [1]}).to_excel(p, index=False)
        df = schema.read_table(p)
        assert df.columns.tolist() == ["Sentence", "Hypothesis #"]
        assert df.loc[0, "Hypothesis #"] == 1


class TestRunAllChecks:

    def test_counts(self, cfg, raw_df):
        df = pd.concat([raw_df, raw_df.iloc[[0]]], ignore_index=True)
        checks = schema.run_all_checks(df, cfg)
        assert checks["rows"] == 5
        assert checks["rows_with_missing"] == 1
        assert checks["missing_by_col"]["node_2"] == 1
        assert checks["duplicate_hypothesis_keys"] == 1

    def test_empty_table(self, cfg, raw_df):
        with pytest.raises(schema.SchemaError):
            schema.run_all_checks(raw_df.iloc[0:0], cfg)

    def test_required_columns(self, cfg, raw_df):
        with pytest.raises(schema.SchemaError):
            schema.run_all_checks(raw_df.drop(columns=["file_name"]), cfg)
