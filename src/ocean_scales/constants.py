"""
Physical constants and configuration defaults for ocean_scales.

This module provides:
1. Seawater reference values
2. Length-scale estimator defaults
3. Accepted option names
"""

# Seawater reference values
REFERENCE_DENSITY = 1000.0  # Subtracted to form potential density anomaly (kg/m^3)

# Length-scale estimator defaults
GRID_SAMPLES = 10  # Target number of slices along each non-leading dimension
ZERO_TOLERANCE = 0.01  # Fraction of the zero-lag covariance treated as zero

# Accepted option names
ZERO_SEARCH_METHODS = ("first", "nearest")
AUTOCOVARIANCE_SCALES = ("biased", "unbiased", "coeff", "none")
