# data_prep.py
import logging
import os

import pandas as pd
from sklearn.model_selection import train_test_split

import config

logger = logging.getLogger(__name__)


def read_wine_table(source, sep=config.CSV_SEP):
    """Read one wine-quality table from a URL or local path.

    Column types are inferred; text columns stay plain strings, never categorical.
    """
    df = pd.read_csv(source, sep=sep)
    logger.info("Read %d rows x %d cols from %s", df.shape[0], df.shape[1], source)
    return df


def concat_tables(first, second):
    """Stack the rows of two tables that share the same columns."""
    if first.empty or second.empty:
        raise ValueError("Cannot concatenate an empty table")
    missing = set(first.columns) ^ set(second.columns)
    if missing:
        raise ValueError(f"Column mismatch between tables: {sorted(missing)}")
    return pd.concat([first, second[first.columns]], axis=0, ignore_index=True)


def load_data(red_source=config.RED_WINE_URL, white_source=config.WHITE_WINE_URL):
    red = read_wine_table(red_source)
    white = read_wine_table(white_source)
    return concat_tables(red, white)


def basic_info(df):
    print(df.info())
    print(df.head())
    print(df.describe())
    print(df.isnull().sum().sort_values(ascending=False).head(20))


def split_train_test(df, test_size=config.TEST_SIZE, seed=config.SEED):
    """Randomly assign rows to train/holdout partitions.

    The original row index is kept on both partitions, so they are disjoint
    and together cover the input table. Holdout size is ``ceil(test_size * n)``.
    """
    if df.empty:
        raise ValueError("Cannot split an empty table")
    if not 0 < test_size < 1:
        raise ValueError(f"test_size must be in (0, 1), got {test_size}")
    train, test = train_test_split(df, test_size=test_size, random_state=seed, shuffle=True)
    logger.info("Split %d rows into train=%d / test=%d", len(df), len(train), len(test))
    return train, test


def split_features_target(df, target=config.TARGET):
    if target not in df.columns:
        raise ValueError(f"Target column '{target}' not found")
    return df.drop(columns=[target]), df[target]


def save_partitions(df, train, test, out_dir=config.OUTPUT_DIR):
    os.makedirs(out_dir, exist_ok=True)
    paths = {
        "full": os.path.join(out_dir, config.FULL_DATA_FILE),
        "train": os.path.join(out_dir, config.TRAIN_DATA_FILE),
        "test": os.path.join(out_dir, config.TEST_DATA_FILE),
    }
    df.to_csv(paths["full"], index=False)
    train.to_csv(paths["train"], index=False)
    test.to_csv(paths["test"], index=False)
    logger.info("Wrote partitions to %s", out_dir)
    return paths


def load_partitions(out_dir=config.OUTPUT_DIR):
    df = pd.read_csv(os.path.join(out_dir, config.FULL_DATA_FILE))
    train = pd.read_csv(os.path.join(out_dir, config.TRAIN_DATA_FILE))
    test = pd.read_csv(os.path.join(out_dir, config.TEST_DATA_FILE))
    return df, train, test


if __name__ == "__main__":
    df = load_data()
    basic_info(df)
    train, test = split_train_test(df)
    print("Train/Test Split:", train.shape, test.shape)
    save_partitions(df, train, test)
