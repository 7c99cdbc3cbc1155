from typing import Sequence, Union

import numpy as np

from .errors import InvalidInputError
from .metrics import AccuracyReport, compute_accuracy
from .records import SalesRecord


def seasonal_naive(values: Sequence[float], horizon: int, season: int = 12) -> np.ndarray:
    """Prediction for the last `horizon` points: the value one season earlier."""
    y = np.asarray(values, dtype=float)
    n = len(y)
    return y[n - horizon - season:n - season]


def holdout_accuracy(history: Sequence[Union[SalesRecord, float]], horizon: int = 12,
                     season: int = 12, strict: bool = False) -> AccuracyReport:
    """Score a seasonal-naive baseline on the last `horizon` months of the history."""
    if horizon < 1 or season < 1:
        raise InvalidInputError(f"horizon and season must be >= 1, got {horizon}, {season}")
    y = [r.sales if isinstance(r, SalesRecord) else r for r in history]
    if len(y) < horizon + season:
        raise InvalidInputError(
            f"Too few points for holdout: {len(y)}. Need >= horizon + season = {horizon + season}.")
    return compute_accuracy(y[-horizon:], seasonal_naive(y, horizon, season), strict=strict)
