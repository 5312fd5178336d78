"""Plain and aspect-preserving resizes of pixel buffers."""

import logging
import math

import cv2
import numpy as np

from . import config
from .errors import RepresentationUnavailable
from .geometry import Size
from .outcome import Outcome

logger = logging.getLogger(__name__)


def image_size(image) -> Size:
    h, w = image.shape[:2]
    return Size(w, h)


def is_pixel_buffer(image):
    return isinstance(image, np.ndarray) and image.ndim in (2, 3) and image.size > 0


def copy_to_size(image, size: Size) -> Outcome:
    """Return a copy of ``image`` resampled to exactly ``size``."""
    if not is_pixel_buffer(image):
        return Outcome.failure(RepresentationUnavailable("source is not a non-empty pixel buffer"))
    w, h = int(math.floor(size.width)), int(math.floor(size.height))
    if w <= 0 or h <= 0:
        return Outcome.failure(RepresentationUnavailable(f"cannot draw into a {w}x{h} frame"))

    src_h, src_w = image.shape[:2]
    shrinking = w * h < src_w * src_h
    flags = config.SHRINK_INTERPOLATION if shrinking else config.ENLARGE_INTERPOLATION
    try:
        resized = cv2.resize(image, (w, h), interpolation=flags)
    except cv2.error as exc:
        logger.debug("cv2.resize failed for %dx%d: %s", w, h, exc)
        return Outcome.failure(RepresentationUnavailable(str(exc)))
    return Outcome.success(resized)


def aspect_fill_size(source: Size, target: Size) -> Size:
    """Smallest proportional size of ``source`` that covers ``target``.

    ``ratio = max(tw / sw, th / sh)``; both sides are floored. The winning axis
    is computed as ``side * target / source`` so an integer target is hit
    exactly instead of landing one pixel short.
    """
    if source.is_empty:
        raise ValueError(f"source size must be positive, got {source}")
    sw, sh = source.width, source.height
    tw, th = target.width, target.height
    if tw * sh > th * sw:
        return Size(math.floor(sw * tw / sw), math.floor(sh * tw / sw))
    return Size(math.floor(sw * th / sh), math.floor(sh * th / sh))


def resize_preserving_aspect(image, target: Size) -> Outcome:
    """Fill-resize ``image`` so it covers ``target`` on both axes."""
    if not is_pixel_buffer(image):
        return Outcome.failure(RepresentationUnavailable("source is not a non-empty pixel buffer"))
    new_size = aspect_fill_size(image_size(image), target)
    return copy_to_size(image, new_size)
