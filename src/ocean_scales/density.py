"""
Potential density of seawater.

Potential density is the density a parcel would have if moved
adiabatically, at constant Absolute Salinity, to a reference pressure.
It is evaluated in two steps with the TEOS-10 Gibbs-function routines of
the ``gsw`` package: potential temperature at the reference pressure,
then density at that pressure.

References:
    IOC, SCOR and IAPSO (2010) The international thermodynamic equation of
    seawater - 2010: Calculation and use of thermodynamic properties.
    Intergovernmental Oceanographic Commission, Manuals and Guides No. 56,
    section 3.4.
"""

import logging
from typing import Union

import gsw
import numpy as np

from .constants import REFERENCE_DENSITY
from .exceptions import ArityError, ShapeMismatchError
from .shapes import ArrayLike, Orientation, as_field, check_unique, reconcile_shape

logger = logging.getLogger(__name__)


def potential_density(
    SA: ArrayLike, t: ArrayLike, p: ArrayLike, pr: ArrayLike
) -> Union[float, np.ndarray]:
    """
    Calculate potential density of seawater.

    This returns potential density, not potential density anomaly; that
    is, 1000 kg m⁻³ is not subtracted (see
    :func:`potential_density_anomaly`).

    Parameters
    ----------
    SA : float or array_like
        Absolute Salinity, **g kg⁻¹**. Scalar, 1-D or 2-D (``M x N``).
    t : float or array_like
        In-situ temperature (ITS-90), **°C**. Same shape as *SA*.
    p : float or array_like
        Sea pressure (absolute pressure − 10.1325 dbar), **dbar**.
        Scalar, ``1 x N`` row, ``M x 1`` column or ``M x N``.
    pr : float or array_like
        Reference sea pressure, **dbar**. Same accepted shapes as *p*; all
        elements must be equal.

    Returns
    -------
    float or ndarray
        Potential density, **kg m⁻³**, with the shape of *SA*. A float is
        returned when *SA* is a scalar.

    Raises
    ------
    ArityError
        If any input is ``None``.
    ShapeMismatchError
        If *SA* and *t* differ in shape, or *p* / *pr* cannot be broadcast
        to the shape of *SA*.
    NonUniqueReferencePressureError
        If *pr* holds more than one distinct value.

    Notes
    -----
    A single-row field is evaluated as a column and transposed back; the
    result does not depend on the caller's orientation.

    Examples
    --------
    >>> round(potential_density(35.0, 10.0, 1000.0, 0.0), 3)  # doctest: +SKIP
    1026.95...
    >>> import numpy as np
    >>> SA = np.full((2, 3), 35.0)
    >>> t = np.array([[10.0, 8.0, 6.0], [4.0, 3.0, 2.0]])
    >>> potential_density(SA, t, [[0.0], [2000.0]], 0.0).shape
    (2, 3)
    """
    if any(arg is None for arg in (SA, t, p, pr)):
        raise ArityError("potential_density requires four inputs: SA, t, p, pr")

    input_shape = np.shape(SA)
    if input_shape != np.shape(t):
        raise ShapeMismatchError(
            f"SA and t must have the same dimensions, got {input_shape} "
            f"and {np.shape(t)}"
        )
    sa_field = as_field(SA, "SA")
    t_field = as_field(t, "t")

    check_unique(pr, "pr")

    p_field = reconcile_shape(p, sa_field.shape, "p")
    pr_field = reconcile_shape(pr, sa_field.shape, "pr")

    orientation = Orientation.for_shape(sa_field.shape)
    sa_field, t_field, p_field, pr_field = orientation.apply(
        sa_field, t_field, p_field, pr_field
    )
    logger.debug(
        "Evaluating potential density on %s field (transposed=%s)",
        sa_field.shape,
        orientation.transposed,
    )

    pt = gsw.pt_from_t(sa_field, t_field, p_field, pr_field)
    rho = gsw.rho_t_exact(sa_field, pt, pr_field)

    rho = np.asarray(orientation.restore(rho), dtype=float)

    if len(input_shape) < 2:
        rho = rho.reshape(input_shape)
    if rho.ndim == 0:
        return float(rho)
    return rho


# Name used by the TEOS-10 toolboxes
pot_rho = potential_density


def potential_density_anomaly(
    SA: ArrayLike, t: ArrayLike, p: ArrayLike, pr: ArrayLike
) -> Union[float, np.ndarray]:
    """
    Potential density anomaly, potential density minus 1000 kg m⁻³.

    With ``pr = 0`` this is the familiar σ₀. Arguments, shape rules and
    errors are those of :func:`potential_density`.
    """
    return potential_density(SA, t, p, pr) - REFERENCE_DENSITY
