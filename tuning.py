# tuning.py
import logging
from dataclasses import dataclass

import pandas as pd
from sklearn.model_selection import GridSearchCV, KFold, ParameterGrid

import config
from data_prep import split_features_target
from model_gbm import build_gbm
from model_xgb import build_xgb

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    best_params: dict
    best_score: float
    best_model: object
    cv_results: pd.DataFrame
    n_fits: int


def grid_search(estimator, train, grid, target=config.TARGET, cv_folds=config.GRID_CV_FOLDS,
                scoring=config.GRID_SCORING, seed=config.SEED, n_jobs=config.NUM_JOBS):
    """Exhaustive k-fold CV over every combination of ``grid``.

    The best combination is refit on the whole training partition. With the
    default ``neg_mean_squared_error`` scoring higher is better; ties go to
    the first combination in ``ParameterGrid`` order.
    """
    X, y = split_features_target(train, target)
    n_candidates = len(ParameterGrid(grid))
    cv_splitter = KFold(n_splits=cv_folds, shuffle=True, random_state=seed)

    search = GridSearchCV(
        estimator=estimator,
        param_grid=grid,
        scoring=scoring,
        n_jobs=n_jobs,
        refit=True,
        cv=cv_splitter,
        error_score="raise",
    )
    search = search.fit(X, y)

    cv_results = pd.DataFrame(search.cv_results_).sort_values("rank_test_score", kind="stable")
    logger.info("Grid search: %d candidates x %d folds, best %s=%.4f with %s",
                n_candidates, cv_folds, scoring, search.best_score_, search.best_params_)
    return SearchResult(
        best_params=search.best_params_,
        best_score=float(search.best_score_),
        best_model=search.best_estimator_,
        cv_results=cv_results,
        n_fits=n_candidates * search.n_splits_,
    )


def gbm_grid_search(train, grid=config.GBM_GRID, **kwargs):
    seed = kwargs.get("seed", config.SEED)
    base = build_gbm(subsample=config.GBM_PARAMS["subsample"], seed=seed)
    return grid_search(base, train, grid, **kwargs)


def xgb_grid_search(train, grid=config.XGB_GRID, **kwargs):
    seed = kwargs.get("seed", config.SEED)
    # GridSearchCV parallelizes across fits
    base = build_xgb(subsample=config.XGB_PARAMS["subsample"], seed=seed, n_jobs=1)
    return grid_search(base, train, grid, **kwargs)
