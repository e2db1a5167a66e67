# eda.py
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

import config


def _finish(fig, save_path=None, show=False):
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path)
    if show:
        plt.show()
    return fig


def plot_target_distribution(df, target=config.TARGET, save_path=None, show=False):
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.histplot(df[target], bins=np.arange(df[target].min(), df[target].max() + 2) - 0.5, ax=ax)
    ax.set_title(f"Distribution of {target}")
    return _finish(fig, save_path, show)


def missing_value_summary(df):
    missing = df.isnull().sum()
    print("Missing Values (top 20):")
    print(missing[missing > 0].sort_values(ascending=False).head(20))


def plot_importance(report, save_path=None, show=False):
    """Boxplot of permutation importances, features ordered by mean."""
    order = report.summary["feature"].tolist()
    fig, ax = plt.subplots(figsize=(8, 0.4 * len(order) + 2))
    sns.boxplot(data=report.raw, x="importance", y="feature", order=order, ax=ax)
    ax.axvline(1.0 if report.kind == "ratio" else 0.0, color="grey", linestyle="--")
    ax.set_title("Permutation importance (holdout)")
    return _finish(fig, save_path, show)


def plot_error_curve(model, save_path=None, show=False):
    """Training (and CV) error versus boosting iteration."""
    fig, ax = plt.subplots(figsize=(8, 5))
    iterations = np.arange(1, model.n_trees + 1)
    ax.plot(iterations, model.train_error, label="train")
    if model.cv_error is not None:
        ax.plot(np.arange(1, len(model.cv_error) + 1), model.cv_error, label="cv")
    ax.axvline(model.n_iter, color="grey", linestyle="--", label=f"selected ({model.n_iter})")
    ax.set_xlabel("Boosting iteration")
    ax.set_ylabel("MSE")
    ax.set_title(f"Error vs iteration ({model.library})")
    ax.legend()
    return _finish(fig, save_path, show)


# ---------------------------------------------------------------------------
# Plotting tutorial: basic plots, then the same plots customized
# ---------------------------------------------------------------------------

def plot_basic(df, x="alcohol", target=config.TARGET, save_path=None, show=False):
    fig, axes = plt.subplots(1, 3, figsize=(15, 4))
    axes[0].scatter(df[x], df[target])
    axes[0].set_xlabel(x)
    axes[0].set_ylabel(target)
    df[target].value_counts().sort_index().plot.bar(ax=axes[1])
    axes[2].hist(df[x], bins=30)
    axes[2].set_xlabel(x)
    return _finish(fig, save_path, show)


def plot_customized(df, x="alcohol", y="volatile acidity", target=config.TARGET,
                    palette="viridis", save_path=None, show=False):
    with sns.axes_style("whitegrid"):
        fig, axes = plt.subplots(1, 2, figsize=(14, 5))
        sns.scatterplot(data=df, x=x, y=y, hue=target, palette=palette, alpha=0.6, ax=axes[0])
        axes[0].set_title(f"{y} vs {x} by {target}")
        sns.regplot(data=df, x=x, y=target, scatter_kws={"alpha": 0.2}, line_kws={"color": "red"},
                    x_jitter=0.05, y_jitter=0.2, ax=axes[1])
        axes[1].set_title(f"{target} vs {x} with linear fit")
    return _finish(fig, save_path, show)


def plot_faceted(df, x="alcohol", target=config.TARGET, save_path=None, show=False):
    """One histogram of ``x`` per target level."""
    grid = sns.displot(data=df, x=x, col=target, col_wrap=4, bins=20, height=2.5)
    grid.set_titles(f"{target} = {{col_name}}")
    return _finish(grid.figure, save_path, show)


def plot_correlation(df, save_path=None, show=False):
    fig, ax = plt.subplots(figsize=(10, 8))
    corr = df.select_dtypes(include="number").corr()
    sns.heatmap(corr, annot=True, fmt=".2f", cmap="coolwarm", center=0, ax=ax)
    ax.set_title("Correlation matrix")
    return _finish(fig, save_path, show)


if __name__ == "__main__":
    from data_prep import load_data

    df = load_data()
    plot_target_distribution(df, show=True)
    missing_value_summary(df)
    plot_basic(df, show=True)
    plot_customized(df, show=True)
    plot_faceted(df, show=True)
    plot_correlation(df, show=True)
