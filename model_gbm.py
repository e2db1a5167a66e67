# model_gbm.py
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from sklearn.ensemble import GradientBoostingRegressor
from sklearn.metrics import mean_squared_error
from sklearn.model_selection import KFold

import config
from data_prep import split_features_target

logger = logging.getLogger(__name__)


@dataclass
class BoostedModel:
    """A fitted boosted ensemble plus the iteration count used to predict.

    ``train_error`` and ``cv_error`` hold the MSE after each boosting
    iteration; ``cv_error`` is None when no cross-validation was run.
    """
    estimator: object
    features: List[str]
    n_iter: int
    train_error: np.ndarray
    cv_error: Optional[np.ndarray] = None
    library: str = "sklearn"

    @property
    def n_trees(self):
        return len(self.train_error)

    def predict(self, X):
        X = X[self.features]
        if self.library == "xgboost":
            return self.estimator.predict(X, iteration_range=(0, self.n_iter))
        if self.n_iter < self.n_trees and hasattr(self.estimator, "staged_predict"):
            for i, pred in enumerate(self.estimator.staged_predict(X), start=1):
                if i == self.n_iter:
                    return pred
        return self.estimator.predict(X)


def build_gbm(n_trees=500, learning_rate=0.1, max_depth=3, min_samples_leaf=10,
              subsample=0.5, seed=config.SEED):
    return GradientBoostingRegressor(
        n_estimators=n_trees,
        learning_rate=learning_rate,
        max_depth=max_depth,
        min_samples_leaf=min_samples_leaf,
        subsample=subsample,
        random_state=seed,
    )


def staged_mse(estimator, X, y):
    y = np.asarray(y)
    return np.array([mean_squared_error(y, pred) for pred in estimator.staged_predict(X)])


def cv_error_curve(X, y, cv_folds, seed=config.SEED, **params):
    """Fold-size weighted validation MSE after each boosting iteration."""
    kf = KFold(n_splits=cv_folds, shuffle=True, random_state=seed)
    total = None
    for fold, (train_idx, val_idx) in enumerate(kf.split(X), start=1):
        est = build_gbm(seed=seed, **params)
        est.fit(X.iloc[train_idx], y.iloc[train_idx])
        errors = staged_mse(est, X.iloc[val_idx], y.iloc[val_idx]) * len(val_idx)
        total = errors if total is None else total + errors
        logger.debug("CV fold %d/%d done", fold, cv_folds)
    return total / len(X)


def fit_gbm(train, target=config.TARGET, n_trees=500, learning_rate=0.1, max_depth=3,
            min_samples_leaf=10, subsample=0.5, cv_folds=5, seed=config.SEED):
    """Fit a gradient boosted regressor on the training partition.

    With ``cv_folds > 1`` the number of trees used for prediction is the one
    minimizing the k-fold CV error; otherwise all ``n_trees`` are used.
    """
    X, y = split_features_target(train, target)
    params = dict(n_trees=n_trees, learning_rate=learning_rate, max_depth=max_depth,
                  min_samples_leaf=min_samples_leaf, subsample=subsample)

    est = build_gbm(seed=seed, **params)
    est.fit(X, y)
    train_error = staged_mse(est, X, y)

    cv_error = None
    n_iter = n_trees
    if cv_folds and cv_folds > 1:
        cv_error = cv_error_curve(X, y, cv_folds, seed=seed, **params)
        n_iter = int(np.argmin(cv_error)) + 1
    logger.info("GBM fitted: %d trees, using %d (cv_folds=%s)", n_trees, n_iter, cv_folds)

    return BoostedModel(
        estimator=est,
        features=list(X.columns),
        n_iter=n_iter,
        train_error=train_error,
        cv_error=cv_error,
        library="sklearn",
    )
