"""Shared fixtures: small synthetic tables shaped like the wine-quality data."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

FEATURES = ["fixed acidity", "volatile acidity", "alcohol", "sulphates", "noise"]


def make_wine_table(n_rows: int, seed: int) -> pd.DataFrame:
    """Wine-like table whose integer ``quality`` depends on alcohol and volatile acidity only."""
    rng = np.random.default_rng(seed)
    df = pd.DataFrame(
        {
            "fixed acidity": rng.normal(7.0, 1.0, n_rows),
            "volatile acidity": rng.uniform(0.1, 1.2, n_rows),
            "alcohol": rng.uniform(8.0, 14.0, n_rows),
            "sulphates": rng.normal(0.6, 0.1, n_rows),
            "noise": rng.normal(0.0, 1.0, n_rows),
        }
    )
    signal = 0.6 * (df["alcohol"] - 11.0) - 2.0 * (df["volatile acidity"] - 0.6)
    df["quality"] = np.clip(np.round(6.0 + signal + rng.normal(0.0, 0.3, n_rows)), 3, 9).astype(int)
    return df


@pytest.fixture
def red_table() -> pd.DataFrame:
    return make_wine_table(120, seed=1)


@pytest.fixture
def white_table() -> pd.DataFrame:
    return make_wine_table(180, seed=2)


@pytest.fixture
def wine_df(red_table: pd.DataFrame, white_table: pd.DataFrame) -> pd.DataFrame:
    return pd.concat([red_table, white_table], ignore_index=True)


@pytest.fixture
def linear_table() -> pd.DataFrame:
    """Continuous target driven by ``signal`` only; ``irrelevant`` has no effect."""
    rng = np.random.default_rng(7)
    n_rows = 400
    df = pd.DataFrame({"signal": rng.uniform(0, 1, n_rows), "irrelevant": rng.uniform(0, 1, n_rows)})
    df["quality"] = 5.0 * df["signal"] + rng.normal(0.0, 0.1, n_rows)
    return df
