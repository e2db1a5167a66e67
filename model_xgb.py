# model_xgb.py
import logging

import numpy as np
import xgboost as xgb

import config
from data_prep import split_features_target
from model_gbm import BoostedModel

logger = logging.getLogger(__name__)


def build_xgb(n_trees=500, learning_rate=0.1, max_depth=3, min_samples_leaf=10,
              subsample=0.5, seed=config.SEED, n_jobs=config.NUM_JOBS):
    # min_child_weight is the hessian sum per leaf; with squared error that is the row count
    return xgb.XGBRegressor(
        n_estimators=n_trees,
        learning_rate=learning_rate,
        max_depth=max_depth,
        min_child_weight=min_samples_leaf,
        subsample=subsample,
        objective="reg:squarederror",
        tree_method="hist",
        random_state=seed,
        n_jobs=n_jobs,
    )


def cv_rounds(X, y, n_trees, cv_folds, learning_rate, max_depth, min_samples_leaf,
              subsample, seed=config.SEED):
    """Run ``xgboost.cv`` and return the per-round mean validation MSE."""
    params = {
        "objective": "reg:squarederror",
        "eta": learning_rate,
        "max_depth": max_depth,
        "min_child_weight": min_samples_leaf,
        "subsample": subsample,
        "tree_method": "hist",
        "seed": seed,
    }
    history = xgb.cv(
        params,
        xgb.DMatrix(X, label=y),
        num_boost_round=n_trees,
        nfold=cv_folds,
        metrics="rmse",
        shuffle=True,
        seed=seed,
    )
    # squared fold-mean RMSE
    return history["test-rmse-mean"].to_numpy() ** 2


def fit_xgb(train, target=config.TARGET, n_trees=500, learning_rate=0.1, max_depth=3,
            min_samples_leaf=10, subsample=0.5, cv_folds=5, seed=config.SEED,
            n_jobs=config.NUM_JOBS):
    """Same configuration as ``model_gbm.fit_gbm``, fitted with XGBoost."""
    X, y = split_features_target(train, target)

    est = build_xgb(n_trees=n_trees, learning_rate=learning_rate, max_depth=max_depth,
                    min_samples_leaf=min_samples_leaf, subsample=subsample,
                    seed=seed, n_jobs=n_jobs)
    est.fit(X, y, eval_set=[(X, y)], verbose=False)
    train_error = np.asarray(est.evals_result()["validation_0"]["rmse"]) ** 2

    cv_error = None
    n_iter = n_trees
    if cv_folds and cv_folds > 1:
        cv_error = cv_rounds(X, y, n_trees, cv_folds, learning_rate, max_depth,
                             min_samples_leaf, subsample, seed=seed)
        n_iter = int(np.argmin(cv_error)) + 1
    logger.info("XGBoost fitted: %d rounds, using %d (cv_folds=%s)", n_trees, n_iter, cv_folds)

    return BoostedModel(
        estimator=est,
        features=list(X.columns),
        n_iter=n_iter,
        train_error=train_error,
        cv_error=cv_error,
        library="xgboost",
    )
