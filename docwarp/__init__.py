"""Geometric transforms for scanned documents: resize, crop and keystone correction."""

from .crop import clamp_rect, crop, crop_centered
from .encode import encode, save, save_image
from .errors import (DocwarpError, EncodingFailure, FilterRejected, IOFailure,
                     RepresentationUnavailable)
from .geometry import Point, Quadrilateral, Rect, Size, to_cartesian
from .outcome import Outcome
from .perspective import (CARTESIAN_SLOTS, IDENTITY_SLOTS, PerspectiveCorrection,
                          cropped_to_quad, project_quad_to_rect)
from .resize import aspect_fill_size, copy_to_size, image_size, resize_preserving_aspect

__version__ = "0.1.0"
