"""
Integral length scale from averaged autocovariance.

A field is treated as a set of independent series laid out along one
axis. A coarse grid of series (about ten along each remaining dimension)
is sampled, the biased autocovariance of each series is computed, the
curves are averaged, and the length scale is the lag at which the mean
curve first returns to zero, multiplied by the sample spacing.

Notes:
    * The biased estimator (normalised by the series length, not by the
      number of overlapping samples) is tapered at large lags and has
      lower variance than the unbiased one, which keeps the zero search
      stable.
    * No detrending beyond mean removal is applied.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np
import pandas as pd
from scipy import signal

from .constants import (
    AUTOCOVARIANCE_SCALES,
    GRID_SAMPLES,
    ZERO_SEARCH_METHODS,
    ZERO_TOLERANCE,
)

logger = logging.getLogger(__name__)


@dataclass
class LengthScaleParams:
    """
    Settings for :func:`length_scale`.

    Parameters
    ----------
    grid_samples : int, default ``10``
        Approximate number of series sampled along each non-leading
        dimension.
    tolerance : float, default ``0.01``
        Fraction of the zero-lag covariance below which the mean curve is
        considered to have reached zero (``method="first"`` only).
    method : {'first', 'nearest'}, default ``'first'``
        Zero search strategy, see :func:`zero_crossing_lag`.

    Examples
    --------
    >>> LengthScaleParams(grid_samples=5).tolerance
    0.01
    """

    grid_samples: int = GRID_SAMPLES
    tolerance: float = ZERO_TOLERANCE
    method: str = "first"

    def __post_init__(self):
        """Validate parameters"""
        if int(self.grid_samples) != self.grid_samples or self.grid_samples < 1:
            raise ValueError("grid_samples must be a positive integer")
        if not 0 <= self.tolerance < 1:
            raise ValueError("tolerance must be in the interval [0, 1)")
        if self.method not in ZERO_SEARCH_METHODS:
            raise ValueError(
                f"method must be one of {ZERO_SEARCH_METHODS}, got {self.method!r}"
            )


@dataclass
class AutocovarianceCurve:
    """
    Averaged autocovariance over a symmetric lag axis.

    Parameters
    ----------
    lags : ndarray of int
        Lags from ``-(n - 1)`` to ``n - 1`` in samples.
    covariance : ndarray of float
        Mean autocovariance at each lag.
    n_curves : int
        Number of series that were averaged.
    """

    lags: np.ndarray
    covariance: np.ndarray
    n_curves: int = 1

    def zero_lag(self) -> float:
        """Covariance at lag zero (the mean variance)."""
        return float(self.covariance[self.lags == 0][0])

    def to_series(self) -> pd.Series:
        """Return the curve as a :class:`pandas.Series` indexed by lag."""
        return pd.Series(
            self.covariance,
            index=pd.Index(self.lags, name="lag"),
            name="autocovariance",
        )


def autocovariance(
    x: np.ndarray, scale: str = "biased"
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the **autocovariance** of a 1-D series at every lag.

    The series mean is removed and the full discrete autocorrelation is
    evaluated with :func:`scipy.signal.correlate` (``mode="full"``), giving
    ``2n - 1`` values for lags ``-(n-1) … n-1``.

    Parameters
    ----------
    x : array_like
        One-dimensional numeric series of length *n* (n ≥ 1).
    scale : {'biased', 'unbiased', 'coeff', 'none'}, default ``'biased'``
        Normalisation of the raw lagged sums :math:`S_ℓ`:

        * ``'biased'`` – :math:`S_ℓ / n`
        * ``'unbiased'`` – :math:`S_ℓ / (n - |ℓ|)`
        * ``'coeff'`` – :math:`S_ℓ / S_0` (zero lag equals 1)
        * ``'none'`` – :math:`S_ℓ`

    Returns
    -------
    covariance : ndarray
        Autocovariance at each lag.
    lags : ndarray of int
        Lag of each element of *covariance*, from
        :func:`scipy.signal.correlation_lags`.

    Raises
    ------
    ValueError
        If *x* is empty or not one-dimensional, or *scale* is unknown.

    Notes
    -----
    For ``'coeff'`` a constant series (:math:`S_0 = 0`) yields zeros.

    Examples
    --------
    >>> cov, lags = autocovariance(np.array([1.0, 2.0, 3.0]))
    >>> lags
    array([-2, -1,  0,  1,  2])
    >>> np.round(cov, 4)
    array([-0.3333,  0.    ,  0.6667,  0.    , -0.3333])
    """
    if scale not in AUTOCOVARIANCE_SCALES:
        raise ValueError(
            f"scale must be one of {AUTOCOVARIANCE_SCALES}, got {scale!r}"
        )
    x = np.asarray(x, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"x must be one-dimensional, got shape {x.shape}")
    n = x.size
    if n == 0:
        raise ValueError("x must contain at least one sample")

    anomaly = x - np.mean(x)
    sums = signal.correlate(anomaly, anomaly, mode="full")
    lags = signal.correlation_lags(n, n, mode="full")

    if scale == "biased":
        covariance = sums / n
    elif scale == "unbiased":
        covariance = sums / (n - np.abs(lags))
    elif scale == "coeff":
        zero = sums[lags == 0][0]
        covariance = sums / zero if zero != 0 else np.zeros_like(sums)
    else:
        covariance = sums

    return covariance, lags


def find_approx(values: np.ndarray, target: float = 0.0, n: int = 1) -> np.ndarray:
    """
    Indices of the *n* elements of *values* closest to *target*.

    Ties keep their original order.

    Examples
    --------
    >>> find_approx(np.array([3.0, -0.2, 0.1, 0.5]), 0.0, 2)
    array([2, 1])
    """
    distance = np.abs(np.asarray(values, dtype=float) - target)
    return np.argsort(distance, kind="stable")[:n]


def shift_axis(data: np.ndarray, axis: int = 0) -> np.ndarray:
    """
    Cyclically shift dimensions so that *axis* comes first.

    Dimensions after *axis* follow it, then the ones before it, each in
    their original order; ``(a, b, c)`` shifted by ``axis=1`` becomes
    ``(b, c, a)``.

    Raises
    ------
    ValueError
        If *axis* is out of range for *data*.
    """
    data = np.asarray(data)
    ndim = max(data.ndim, 1)
    if not -ndim <= axis < ndim:
        raise ValueError(f"axis {axis} is out of bounds for array of dimension {ndim}")
    data = np.atleast_1d(data)
    axis %= ndim
    order = np.roll(np.arange(ndim), -axis)
    return np.transpose(data, order)


def _as_volume(data: np.ndarray) -> np.ndarray:
    # (n, d2, d3); missing dims are 1, dims past the third fold into d3
    n = data.shape[0]
    if data.ndim == 1:
        return data.reshape(n, 1, 1)
    if data.ndim == 2:
        return data.reshape(n, data.shape[1], 1)
    return data.reshape(n, data.shape[1], -1)


def mean_autocovariance(
    data: np.ndarray, axis: int = 0, grid_samples: int = GRID_SAMPLES
) -> AutocovarianceCurve:
    """
    Average the biased autocovariance of series sampled from *data*.

    Parameters
    ----------
    data : array_like
        N-dimensional numeric array.
    axis : int, default ``0``
        Axis along which each series runs.
    grid_samples : int, default ``10``
        Approximate number of series taken along each of the two remaining
        dimensions. The stride along a dimension of size *d* is
        ``ceil(d / grid_samples)``, so every index is used when
        ``d <= grid_samples``.

    Returns
    -------
    AutocovarianceCurve
        Mean curve over the symmetric lag axis and the number of series
        averaged.

    Raises
    ------
    ValueError
        If the series axis is empty or *axis* is out of range.

    Examples
    --------
    >>> rng = np.random.default_rng(0)
    >>> curve = mean_autocovariance(rng.normal(size=(200, 7)))
    >>> curve.n_curves
    7
    """
    shifted = shift_axis(np.asarray(data, dtype=float), axis)
    if shifted.size == 0:
        raise ValueError(f"data has an empty dimension, shape {np.shape(data)}")
    volume = _as_volume(shifted)
    n, dim2, dim3 = volume.shape

    jump1 = math.ceil(dim2 / grid_samples)
    jump2 = math.ceil(dim3 / grid_samples)

    curves = []
    lags = None
    for i in range(0, dim2, jump1):
        for j in range(0, dim3, jump2):
            covariance, lags = autocovariance(volume[:, i, j], scale="biased")
            curves.append(covariance)

    logger.debug(
        "Averaging %d autocovariance curves of length %d (strides %d, %d)",
        len(curves),
        n,
        jump1,
        jump2,
    )
    return AutocovarianceCurve(
        lags=lags,
        covariance=np.mean(np.vstack(curves), axis=0),
        n_curves=len(curves),
    )


def zero_crossing_lag(
    curve: AutocovarianceCurve,
    tolerance: float = ZERO_TOLERANCE,
    method: str = "first",
) -> int:
    """
    Find the lag at which an autocovariance curve returns to zero.

    Parameters
    ----------
    curve : AutocovarianceCurve
        Mean autocovariance, symmetric about lag zero.
    tolerance : float, default ``0.01``
        Fraction of :math:`|c(0)|` treated as zero.
    method : {'first', 'nearest'}, default ``'first'``
        * ``'first'`` – scan lags 0, 1, 2, … and stop at the first lag
          with :math:`|c(ℓ)| ≤ \\text{tolerance}\\,|c(0)|`, or at the first
          sign change, in which case the straddling lag nearer to zero is
          taken (the earlier one on ties). If neither occurs the lag of the
          smallest :math:`|c(ℓ)|` is returned and a warning is logged.
        * ``'nearest'`` – lag of the value closest to zero over the whole
          two-sided curve, regardless of position.

    Returns
    -------
    int
        Non-negative lag in samples. A curve that is zero at lag zero
        (constant input) gives ``0``.
    """
    if method not in ZERO_SEARCH_METHODS:
        raise ValueError(f"method must be one of {ZERO_SEARCH_METHODS}, got {method!r}")

    if curve.zero_lag() == 0:
        return 0

    if method == "nearest":
        return int(abs(curve.lags[find_approx(curve.covariance, 0.0, 1)[0]]))

    keep = curve.lags >= 0
    lags = curve.lags[keep]
    half = curve.covariance[keep][np.argsort(lags)]
    lags = np.sort(lags)

    c0 = half[0]
    magnitude = np.abs(half)
    below = magnitude <= tolerance * abs(c0)
    crossed = np.sign(half) != np.sign(c0)
    hits = np.flatnonzero(below | crossed)

    if hits.size == 0:
        k = int(np.argmin(magnitude))
        logger.warning(
            "Autocovariance never reaches zero within %d lags; using the "
            "nearest value at lag %d",
            lags[-1],
            lags[k],
        )
        return int(lags[k])

    k = int(hits[0])
    if not below[k] and magnitude[k - 1] <= magnitude[k]:
        k -= 1
    return int(lags[k])


def length_scale(
    data: np.ndarray,
    axis: int = 0,
    spacing: float = 1.0,
    params: Optional[LengthScaleParams] = None,
    return_curve: bool = False,
) -> Union[float, Tuple[float, pd.Series]]:
    """
    Estimate the integral length scale of *data* along *axis*.

    Parameters
    ----------
    data : array_like
        N-dimensional numeric array; series run along *axis*, the other
        dimensions index independent locations or realisations.
    axis : int, default ``0``
        Series axis.
    spacing : float, default ``1.0``
        Distance (or time) between consecutive samples along *axis*.
    params : LengthScaleParams, optional
        Sampling and zero-search settings; defaults are used when omitted.
    return_curve : bool, default ``False``
        Also return the mean autocovariance as a :class:`pandas.Series`
        indexed by lag.

    Returns
    -------
    float
        Lag of the first return to zero of the mean autocovariance, times
        *spacing*, in the units of *spacing*.
    curve : pandas.Series
        Mean autocovariance by lag, only when *return_curve* is true.

    Examples
    --------
    >>> n = np.arange(400)
    >>> wave = np.sin(2 * np.pi * n / 40.0)          # period of 40 samples
    >>> length_scale(wave, spacing=0.5)               # quarter period
    5.0
    """
    if params is None:
        params = LengthScaleParams()

    curve = mean_autocovariance(data, axis=axis, grid_samples=params.grid_samples)
    lag = zero_crossing_lag(curve, tolerance=params.tolerance, method=params.method)
    scale = abs(lag * spacing)
    if return_curve:
        return scale, curve.to_series()
    return scale
