# importance.py
import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

import config
from data_prep import split_features_target
from evaluation import get_metric

logger = logging.getLogger(__name__)

KINDS = ("ratio", "difference")


@dataclass
class ImportanceReport:
    baseline: float
    raw: pd.DataFrame  # feature, repetition, importance
    summary: pd.DataFrame  # feature, mean, std; descending mean
    kind: str = "ratio"


def degradation(baseline, permuted, greater_is_better, kind="ratio"):
    """Performance loss after permuting a column; larger means more important.

    The ratio form assumes a positive metric; use ``kind="difference"`` for
    scores such as R² that can drop to zero or below.
    """
    if kind == "ratio":
        with np.errstate(divide="ignore", invalid="ignore"):
            if greater_is_better:
                return float(np.divide(baseline, permuted))
            return float(np.divide(permuted, baseline))
    if greater_is_better:
        return float(baseline - permuted)
    return float(permuted - baseline)


def _permute_once(model, X, y, column, metric_fn, baseline, greater_is_better, kind, seed_seq):
    rng = np.random.default_rng(seed_seq)
    X_perm = X.copy()
    X_perm[column] = rng.permutation(X_perm[column].to_numpy())
    permuted = metric_fn(y, model.predict(X_perm))
    return degradation(baseline, permuted, greater_is_better, kind)


def summarize_importance(raw):
    summary = (
        raw.groupby("feature")["importance"]
        .agg(["mean", "std"])
        .sort_values("mean", ascending=False)
        .reset_index()
    )
    return summary


def permutation_importance(model, test, target=config.TARGET, metric=config.IMPORTANCE_METRIC,
                           nsim=config.NSIM, kind=config.IMPORTANCE_KIND, seed=config.SEED,
                           n_jobs=1):
    """Permutation importance of every predictor, measured on the holdout partition.

    Each (feature, repetition) pair shuffles only that feature with its own
    generator spawned from ``seed``, so the result does not depend on ``n_jobs``.
    """
    if nsim < 1:
        raise ValueError(f"nsim must be >= 1, got {nsim}")
    if kind not in KINDS:
        raise ValueError(f"kind must be one of {KINDS}, got '{kind}'")
    if test.empty:
        raise ValueError("Cannot compute importance on an empty holdout")
    metric_fn, greater_is_better = get_metric(metric)

    X, y = split_features_target(test, target)
    baseline = float(metric_fn(y, model.predict(X)))
    features = list(X.columns)
    units = [(feature, rep) for feature in features for rep in range(nsim)]
    seeds = np.random.SeedSequence(seed).spawn(len(units))
    logger.info("Permutation importance: %d features x %d repetitions (baseline %s=%.4f)",
                len(features), nsim, metric, baseline)

    values = Parallel(n_jobs=n_jobs)(
        delayed(_permute_once)(model, X, y, feature, metric_fn, baseline,
                               greater_is_better, kind, seed_seq)
        for (feature, _), seed_seq in zip(units, seeds)
    )

    raw = pd.DataFrame(units, columns=["feature", "repetition"])
    raw["importance"] = values
    return ImportanceReport(baseline=baseline, raw=raw, summary=summarize_importance(raw), kind=kind)
