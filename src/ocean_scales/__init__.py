# ocean_scales/__init__.py
import logging

from . import constants
from . import exceptions
from . import shapes
from . import density

from .density import potential_density, potential_density_anomaly, pot_rho
from .exceptions import (
    ArityError,
    NonUniqueReferencePressureError,
    OceanScalesError,
    ShapeMismatchError,
)
from .length_scale import (
    AutocovarianceCurve,
    LengthScaleParams,
    autocovariance,
    find_approx,
    length_scale,
    mean_autocovariance,
    zero_crossing_lag,
)
from .shapes import Orientation, reconcile_shape

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
