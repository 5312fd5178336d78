"""Quad-to-rectangle projection (perspective flattening).

The detected quad is scaled from the detector's reference space into the
image, flipped into Cartesian space, canonicalized, and handed to the
perspective-correction primitive. The primitive here is OpenCV's homography
warp, wrapped by :class:`PerspectiveCorrection`.
"""

import logging
from pathlib import Path

import cv2
import numpy as np

from . import config
from .errors import FilterRejected, RepresentationUnavailable
from .geometry import ROLES, Quadrilateral, Size
from .outcome import Outcome
from .resize import is_pixel_buffer, image_size

logger = logging.getLogger(__name__)

# The Cartesian quad is canonicalized with y-down labels, so its "bottom"
# corners are the visual top of the document. The primitive's slots are
# therefore fed from the opposite row.
CARTESIAN_SLOTS = {
    "top_left": "bottom_left",
    "top_right": "bottom_right",
    "bottom_right": "top_right",
    "bottom_left": "top_left",
}
IDENTITY_SLOTS = {role: role for role in ROLES}


class PerspectiveCorrection:
    """Adapter around ``cv2.getPerspectiveTransform`` / ``cv2.warpPerspective``.

    ``slots`` maps each control-point slot of the primitive to the canonical
    role whose corner should fill it.
    """

    def __init__(self, slots=None, interpolation=None, min_area=None):
        self.slots = dict(CARTESIAN_SLOTS if slots is None else slots)
        if set(self.slots) != set(ROLES) or set(self.slots.values()) != set(ROLES):
            raise ValueError(f"slots must map every corner role exactly once: {self.slots}")
        self.interpolation = config.WARP_INTERPOLATION if interpolation is None else interpolation
        self.min_area = config.MIN_QUAD_AREA if min_area is None else min_area

    def control_points(self, quad: Quadrilateral, image_height) -> np.ndarray:
        """Slot-ordered (TL, TR, BR, BL) source points in buffer rows."""
        # OpenCV addresses pixels y-down; the flip is its own inverse.
        rows = quad.to_cartesian(image_height)
        return np.array(
            [getattr(rows, self.slots[slot]).as_tuple() for slot in ROLES],
            dtype=np.float32,
        )

    @staticmethod
    def output_size(pts):
        tl, tr, br, bl = pts
        width = max(np.linalg.norm(tr - tl), np.linalg.norm(br - bl))
        height = max(np.linalg.norm(bl - tl), np.linalg.norm(br - tr))
        return int(round(width)), int(round(height))

    def __call__(self, image, quad: Quadrilateral) -> np.ndarray:
        src = self.control_points(quad, image.shape[0])
        if not np.all(np.isfinite(src)):
            raise FilterRejected(f"non-finite control points: {src.tolist()}")
        area = abs(cv2.contourArea(src))
        if area < self.min_area:
            raise FilterRejected(f"quad area {area:.3f} below {self.min_area}")

        out_w, out_h = self.output_size(src)
        if out_w < 2 or out_h < 2:
            raise FilterRejected(f"quad flattens to a degenerate {out_w}x{out_h} image")
        dst = np.array([[0, 0],
                        [out_w - 1, 0],
                        [out_w - 1, out_h - 1],
                        [0, out_h - 1]], dtype=np.float32)

        try:
            H = cv2.getPerspectiveTransform(src, dst)
            rectified = cv2.warpPerspective(image, H, (out_w, out_h), flags=self.interpolation)
        except cv2.error as exc:
            raise FilterRejected(str(exc)) from exc

        if config.DEBUG_DIR:
            _write_overlay(image, src)
        return rectified


def _write_overlay(image, src):
    out_dir = Path(config.DEBUG_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    dbg = image.copy()
    cv2.polylines(dbg, [src.astype(np.int32)], True, (0, 255, 0), 2)
    cv2.imwrite(str(out_dir / "debug_quad.jpg"), dbg)


def project_quad_to_rect(image, quad: Quadrilateral, reference_size: Size = None,
                         correction: PerspectiveCorrection = None) -> Outcome:
    """Flatten the region under ``quad`` into an axis-aligned image.

    ``quad`` is expressed in ``reference_size`` coordinates (the detector's
    preview space, :data:`docwarp.config.DETECTION_REFERENCE_SIZE` by default).
    """
    if reference_size is None:
        reference_size = config.DETECTION_REFERENCE_SIZE
    if correction is None:
        correction = PerspectiveCorrection()

    if not is_pixel_buffer(image):
        return Outcome.failure(RepresentationUnavailable("source is not a non-empty pixel buffer"))
    if reference_size.is_empty:
        return Outcome.failure(RepresentationUnavailable(
            f"quad reference size must be positive, got {reference_size}"))

    size = image_size(image)
    scaled = quad.scale(reference_size, size)
    canonical = scaled.to_cartesian(size.height).reorganize()

    try:
        rectified = correction(image, canonical)
    except FilterRejected as exc:
        logger.debug("perspective correction rejected %s: %s", canonical, exc)
        return Outcome.failure(exc)
    return Outcome.success(rectified)


def cropped_to_quad(image, quad: Quadrilateral, reference_size: Size = None):
    """Best-effort flatten: on any failure the original image is returned."""
    outcome = project_quad_to_rect(image, quad, reference_size)
    if not outcome.ok:
        logger.warning("Could not flatten quad, keeping original image: %s", outcome.error)
    return outcome.unwrap_or(image)
