import logging
import os

import cv2

from .geometry import Size

logger = logging.getLogger(__name__)


def _parse_size(name, default):
    text = os.environ.get(name)
    if not text:
        return default
    w, sep, h = text.lower().partition("x")
    try:
        size = Size(float(w), float(h)) if sep else None
    except ValueError:
        size = None
    if size is None or size.is_empty:
        logger.warning("Ignoring malformed %s=%r, using %gx%g",
                       name, text, default.width, default.height)
        return default
    return size


# preview resolution the quad detector works in
DETECTION_REFERENCE_SIZE = _parse_size("DOCWARP_REFERENCE", Size(400, 400))
# resampling for the perspective warp
WARP_INTERPOLATION = cv2.INTER_CUBIC
# resampling for plain resizes
SHRINK_INTERPOLATION = cv2.INTER_AREA
ENLARGE_INTERPOLATION = cv2.INTER_CUBIC
# quads smaller than this (px^2) are treated as collapsed
MIN_QUAD_AREA = 1.0
# encoder used when a destination has no suffix
DEFAULT_EXT = ".png"
# if set, write quad overlays here
DEBUG_DIR = os.environ.get("DOCWARP_DEBUG_DIR")
