"""Tests for reading, concatenating, splitting and persisting the wine tables."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from pytest_check import check

from data_prep import (
    concat_tables,
    load_data,
    load_partitions,
    read_wine_table,
    save_partitions,
    split_features_target,
    split_train_test,
)


class TestConcatTables:
    def test_row_count_is_sum_and_columns_preserved(self, red_table, white_table) -> None:
        """Concatenation keeps every column and every row of both inputs."""
        combined = concat_tables(red_table, white_table)

        with check:
            assert len(combined) == len(red_table) + len(white_table)
        with check:
            assert list(combined.columns) == list(red_table.columns)
        with check:
            pd.testing.assert_frame_equal(combined.iloc[: len(red_table)], red_table)

    def test_reordered_columns_are_aligned(self, red_table, white_table) -> None:
        """Same column set in a different order is still row-compatible."""
        shuffled = white_table[list(reversed(white_table.columns))]

        combined = concat_tables(red_table, shuffled)

        assert combined.iloc[len(red_table):].reset_index(drop=True).equals(white_table)

    def test_mismatched_columns_raise(self, red_table, white_table) -> None:
        with pytest.raises(ValueError, match="Column mismatch"):
            concat_tables(red_table, white_table.drop(columns=["noise"]))

    def test_empty_table_raises(self, red_table) -> None:
        with pytest.raises(ValueError, match="empty"):
            concat_tables(red_table, red_table.iloc[0:0])


class TestReadWineTable:
    def test_semicolon_files_are_loaded_and_concatenated(self, tmp_path: Path, red_table, white_table) -> None:
        """``load_data`` reads two semicolon-delimited files and stacks them."""
        red_path = tmp_path / "red.csv"
        white_path = tmp_path / "white.csv"
        red_table.to_csv(red_path, sep=";", index=False)
        white_table.to_csv(white_path, sep=";", index=False)

        df = load_data(red_path, white_path)

        with check:
            assert df.shape == (len(red_table) + len(white_table), red_table.shape[1])
        with check:
            assert df["quality"].dtype.kind == "i"

    def test_text_columns_stay_plain_strings(self, tmp_path: Path) -> None:
        path = tmp_path / "typed.csv"
        path.write_text("type;alcohol\nred;9.4\nwhite;10.1\n")

        df = read_wine_table(path)

        with check:
            assert not isinstance(df["type"].dtype, pd.CategoricalDtype)
        with check:
            assert df["type"].tolist() == ["red", "white"]

    def test_missing_file_propagates(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_wine_table(tmp_path / "nope.csv")


class TestSplitTrainTest:
    def test_partitions_are_disjoint_and_exhaustive(self, wine_df) -> None:
        train, test = split_train_test(wine_df, test_size=0.2, seed=42)

        with check:
            assert set(train.index).isdisjoint(test.index)
        with check:
            assert set(train.index) | set(test.index) == set(wine_df.index)
        with check:
            assert len(test) == 60
        with check:
            assert len(train) == 240

    def test_same_seed_gives_same_split(self, wine_df) -> None:
        first_train, first_test = split_train_test(wine_df, seed=123)
        second_train, second_test = split_train_test(wine_df, seed=123)

        with check:
            assert first_train.index.tolist() == second_train.index.tolist()
        with check:
            assert first_test.index.tolist() == second_test.index.tolist()

    def test_different_seed_gives_different_split(self, wine_df) -> None:
        _, first_test = split_train_test(wine_df, seed=1)
        _, second_test = split_train_test(wine_df, seed=2)

        assert set(first_test.index) != set(second_test.index)

    def test_rows_are_unchanged(self, wine_df) -> None:
        train, test = split_train_test(wine_df, seed=42)

        rebuilt = pd.concat([train, test]).sort_index()

        pd.testing.assert_frame_equal(rebuilt, wine_df)

    def test_empty_table_raises(self, wine_df) -> None:
        with pytest.raises(ValueError, match="empty"):
            split_train_test(wine_df.iloc[0:0])

    @pytest.mark.parametrize("test_size", [0.0, 1.0, -0.1, 1.5])
    def test_out_of_range_test_size_raises(self, wine_df, test_size: float) -> None:
        with pytest.raises(ValueError, match="test_size"):
            split_train_test(wine_df, test_size=test_size)


class TestPartitionFiles:
    def test_save_then_load(self, tmp_path: Path, wine_df) -> None:
        train, test = split_train_test(wine_df, seed=42)

        paths = save_partitions(wine_df, train, test, tmp_path)
        df, loaded_train, loaded_test = load_partitions(tmp_path)

        with check:
            assert all(Path(p).exists() for p in paths.values())
        with check:
            assert (len(df), len(loaded_train), len(loaded_test)) == (len(wine_df), len(train), len(test))
        with check:
            assert list(loaded_train.columns) == list(wine_df.columns)

    def test_missing_partition_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_partitions(tmp_path)


def test_split_features_target(wine_df) -> None:
    X, y = split_features_target(wine_df, "quality")

    with check:
        assert "quality" not in X.columns
    with check:
        assert y.name == "quality"
    with pytest.raises(ValueError, match="not found"):
        split_features_target(wine_df, "price")
