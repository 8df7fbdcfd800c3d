# family_balance/utils.py
from __future__ import annotations

from typing import List, Sequence

import numpy as np


# ------------------------------------------------------------------
# Numerical helpers
# ------------------------------------------------------------------

def clip01(x: float) -> float:
    """
    Clip numeric value to the closed interval [0, 1].

    Keeps simulated probabilities valid.
    """
    if x != x:  # NaN check
        return 0.0
    return float(min(1.0, max(0.0, x)))


def share_percent(part: float, total: float, default: float = 50.0) -> float:
    """
    100 * part / total, or `default` when total is zero or invalid.

    Used for every balance percentage (zero load -> neutral 50/50 split).
    """
    if total == 0 or total != total:
        return default
    return 100.0 * part / total


# ------------------------------------------------------------------
# Sampling helpers
# ------------------------------------------------------------------

def seeded_rng(*entropy: int) -> np.random.Generator:
    """
    Generator seeded from a tuple of non-negative ints.

    Same entropy -> same stream, across calls and processes.
    """
    return np.random.default_rng([int(e) for e in entropy])


def normalize_probs(probs: Sequence[float]) -> np.ndarray:
    """
    Normalize a sequence of non-negative weights into probabilities.

    Falls back to uniform distribution if sum is zero or invalid.
    """
    p = np.array(probs, dtype=float)

    p = np.where(np.isnan(p), 0.0, p)
    p = np.where(p < 0.0, 0.0, p)

    s = p.sum()
    if s <= 0.0:
        return np.ones_like(p) / len(p)
    return p / s


def choice_with_probs(
    rng: np.random.Generator,
    options: List[str],
    probs: Sequence[float],
) -> str:
    """
    Sample one item from `options` given (possibly unnormalized) probabilities.

    Args:
        rng: numpy random generator
        options: list of labels
        probs: list of weights (need not sum to 1)

    Returns:
        Chosen option (str)
    """
    if len(options) != len(probs):
        raise ValueError("options and probs must have the same length")

    p = normalize_probs(probs)
    return str(rng.choice(options, p=p))
