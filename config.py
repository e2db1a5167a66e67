# config.py
import os

DATA_BASE_URL = "https://archive.ics.uci.edu/ml/machine-learning-databases/wine-quality"
RED_WINE_URL = f"{DATA_BASE_URL}/winequality-red.csv"
WHITE_WINE_URL = f"{DATA_BASE_URL}/winequality-white.csv"
CSV_SEP = ";"

OUTPUT_DIR = os.getenv("WINE_OUTPUT_DIR", "output")
FULL_DATA_FILE = "wine.csv"
TRAIN_DATA_FILE = "wine_train.csv"
TEST_DATA_FILE = "wine_test.csv"
BEST_MODEL_FILE = "best_model.pkl"

SEED = 42
TEST_SIZE = 0.2
NUM_JOBS = -1  # all CPUs

TARGET = "quality"

# Tutorial GBM: mostly defaults, 500 trees
GBM_PARAMS = {
    "n_trees": 500,
    "learning_rate": 0.1,
    "max_depth": 3,
    "min_samples_leaf": 10,
    "subsample": 0.5,
    "cv_folds": 5,
}

XGB_PARAMS = dict(GBM_PARAMS)

GBM_GRID = {
    "n_estimators": [100, 500],
    "learning_rate": [0.01, 0.1],
    "max_depth": [3, 5],
    "min_samples_leaf": [10],
}

XGB_GRID = {
    "n_estimators": [100, 500],
    "learning_rate": [0.01, 0.1],
    "max_depth": [3, 5],
    "min_child_weight": [10],
}

GRID_CV_FOLDS = 5
GRID_SCORING = "neg_mean_squared_error"

# Permutation importance
IMPORTANCE_METRIC = "mse"
IMPORTANCE_KIND = "ratio"
NSIM = 50
