"""
Configuration & Global Constants
================================
Central registry for the numeric tolerances, file-format constants and
quality thresholds shared by the mesh engine.

Exports:
    GEOM_TOL (float): Tolerance for degenerate-geometry checks.
    FLOAT_FORMAT (str): printf-style format used when writing coordinates.
    COMMENT_PREFIX (str): Leading character of comment lines in surface files.
    DEFAULT_NORMAL_LENGTH (float): Length of face-normal display segments.
    SLIVER_ANGLE, MIN_ANGLE_TARGET (float): Minimum-angle bands, in degrees.
    MAX_ASPECT_RATIO, ASPECT_RATIO_TARGET (float): Aspect-ratio bands.
    LOG_LEVEL (str): Default log level name for the command line tool.
    LOG_FORMAT, LOG_DATE_FORMAT (str): Formatter settings for log handlers.
"""
import os

# Establish a tolerance for avoiding floating point errors in equality checks
GEOM_TOL: float = 1e-12

# 17 significant digits reproduce any float64 exactly on re-read
FLOAT_FORMAT: str = "%.17g"

COMMENT_PREFIX: str = "#"

DEFAULT_NORMAL_LENGTH: float = 0.1

# Triangle quality bands used by MeshQuality
SLIVER_ANGLE: float = 10.0
MIN_ANGLE_TARGET: float = 20.0
MAX_ASPECT_RATIO: float = 10.0
ASPECT_RATIO_TARGET: float = 3.0

LOG_LEVEL: str = os.environ.get("SNAPSURF_LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOG_DATE_FORMAT: str = "%H:%M:%S"
