"""
Shape reconciliation for gridded seawater fields.

Fields are handled as 2-D arrays (profiles x samples). Auxiliary inputs
such as pressure may arrive as a scalar, a row, a column or a full field
and are expanded here to the field shape before any equation of state
is evaluated.
"""

import logging
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from .exceptions import NonUniqueReferencePressureError, ShapeMismatchError

logger = logging.getLogger(__name__)

ArrayLike = Union[float, int, list, tuple, np.ndarray]


def as_field(value: ArrayLike, name: str = "value") -> np.ndarray:
    """
    Convert *value* to a two-dimensional float array.

    Parameters
    ----------
    value : float or array_like
        Scalar, 1-D or 2-D numeric input.
    name : str, default ``"value"``
        Argument name used in error messages.

    Returns
    -------
    ndarray
        A 0-d input becomes ``(1, 1)``; a 1-D input of length *N* becomes a
        ``(1, N)`` row; 2-D input keeps its shape.

    Raises
    ------
    ShapeMismatchError
        If *value* has more than two dimensions.

    Examples
    --------
    >>> as_field(35.0).shape
    (1, 1)
    >>> as_field([0.0, 10.0, 20.0]).shape
    (1, 3)
    """
    arr = np.asarray(value, dtype=float)
    if arr.ndim > 2:
        raise ShapeMismatchError(
            f"{name} must be at most two-dimensional, got shape {arr.shape}"
        )
    return np.atleast_2d(arr)


def reconcile_shape(
    value: ArrayLike, shape: Tuple[int, int], name: str = "value"
) -> np.ndarray:
    """
    Expand a scalar, row, column or full array to a target field shape.

    For a target shape ``(M, N)`` the accepted forms are

    ==========  ==========================================
    Input       Result
    ----------  ------------------------------------------
    ``(1, 1)``  value filled over the whole field
    ``(1, N)``  row replicated down each of the *M* rows
    ``(M, 1)``  column replicated across the *N* columns
    ``(M, N)``  returned unchanged (as a copy)
    ==========  ==========================================

    The forms are tried in the order above, so for a ``1 x 1`` target any
    ``1 x 1`` input is treated as a scalar.

    Parameters
    ----------
    value : float or array_like
        Input to expand. 1-D input is read as a row.
    shape : tuple of int
        Target ``(M, N)`` field shape.
    name : str, default ``"value"``
        Argument name used in error messages.

    Returns
    -------
    ndarray
        Writable float array of shape *shape*.

    Raises
    ------
    ShapeMismatchError
        If *value* matches none of the accepted forms.

    Examples
    --------
    >>> reconcile_shape([[0.0], [100.0]], (2, 3), "p")
    array([[  0.,   0.,   0.],
           [100., 100., 100.]])
    """
    arr = as_field(value, name)
    m, n = shape
    rows, cols = arr.shape

    if rows == 1 and cols == 1:
        out = np.full((m, n), arr[0, 0])
    elif rows == 1 and cols == n:
        out = np.repeat(arr, m, axis=0)
    elif rows == m and cols == 1:
        out = np.repeat(arr, n, axis=1)
    elif rows == m and cols == n:
        out = arr.copy()
    else:
        raise ShapeMismatchError(
            f"{name} with shape {arr.shape} cannot be broadcast to the "
            f"field shape {tuple(shape)}; expected a scalar, a 1x{n} row, "
            f"a {m}x1 column or a {m}x{n} array"
        )

    logger.debug("Reconciled %s from %s to %s", name, arr.shape, out.shape)
    return out


def check_unique(value: ArrayLike, name: str = "pr") -> None:
    """
    Check that *value* holds a single distinct value.

    Raises
    ------
    NonUniqueReferencePressureError
        If the flattened input is empty or holds more than one distinct
        value.
    """
    distinct = np.unique(np.asarray(value, dtype=float).ravel())
    if distinct.size != 1:
        raise NonUniqueReferencePressureError(
            f"The reference pressures differ, {name} must be unique "
            f"(got {distinct.size} distinct values)"
        )


@dataclass(frozen=True)
class Orientation:
    """
    Column-orientation bookkeeping for a single call.

    A field holding a single row (``1 x N``) is transposed to a column
    before evaluation and the result is transposed back afterwards, so the
    equation-of-state routines always see a profiles-by-samples layout.

    Parameters
    ----------
    transposed : bool
        Whether inputs are transposed on the way in.

    Examples
    --------
    >>> orient = Orientation.for_shape((1, 4))
    >>> orient.transposed
    True
    >>> orient.apply(np.zeros((1, 4)))[0].shape
    (4, 1)
    """

    transposed: bool

    @classmethod
    def for_shape(cls, shape: Tuple[int, int]) -> "Orientation":
        return cls(transposed=shape[0] == 1)

    def apply(self, *arrays: np.ndarray):
        """Bring each array to column layout; returns a tuple."""
        if self.transposed:
            return tuple(arr.T for arr in arrays)
        return arrays

    def restore(self, array: np.ndarray) -> np.ndarray:
        """Return *array* in the caller's original layout."""
        return array.T if self.transposed else array
