"""Muscle usage constants - single source of truth.

Intensity is an absolute classification: the same aggregate score always maps
to the same bucket, whatever else is in the batch.
"""

INTENSITY_MIN = 1
INTENSITY_MAX = 5
# score * 2.5 saturates at INTENSITY_MAX for any score >= 2.0
INTENSITY_SCALE = 2.5

# Sums are rounded before bucketing so float drift cannot cross a boundary
SCORE_PRECISION = 6

DEFAULT_PRIMARY_WEIGHT = 1.0
DEFAULT_SECONDARY_WEIGHT = 0.5
