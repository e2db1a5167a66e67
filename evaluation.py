# evaluation.py
import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

import config
from data_prep import split_features_target


def mse(y_true, y_pred):
    return mean_squared_error(y_true, y_pred)


def rmse(y_true, y_pred):
    return np.sqrt(mean_squared_error(y_true, y_pred))


def mae(y_true, y_pred):
    return mean_absolute_error(y_true, y_pred)


def r2(y_true, y_pred):
    return r2_score(y_true, y_pred)


# name -> (function, greater_is_better)
METRICS = {
    "mse": (mse, False),
    "rmse": (rmse, False),
    "mae": (mae, False),
    "r2": (r2, True),
}


def get_metric(name):
    if name not in METRICS:
        raise ValueError(f"Unknown metric '{name}', expected one of {sorted(METRICS)}")
    return METRICS[name]


def evaluate(model, test, target=config.TARGET):
    """Score a fitted model on the holdout partition (R² and MSE)."""
    X, y = split_features_target(test, target)
    pred = model.predict(X)
    return {"r2": float(r2(y, pred)), "mse": float(mse(y, pred))}


def compare_models(results):
    """Tabulate ``{name: {"r2": .., "mse": ..}}`` sorted by MSE."""
    table = pd.DataFrame.from_dict(results, orient="index")
    table.index.name = "model"
    return table.sort_values("mse")
