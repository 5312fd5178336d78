"""Rectangular crops in pixel-buffer coordinates (origin top-left, y down)."""

import math

from .errors import RepresentationUnavailable
from .geometry import Rect, Size
from .outcome import Outcome
from .resize import image_size, resize_preserving_aspect


def clamp_rect(rect: Rect, bounds: Size) -> Rect:
    """Clamp ``rect`` into ``[0, W] x [0, H]``; oversized requests are truncated."""
    x = min(max(math.floor(rect.x), 0), bounds.width)
    y = min(max(math.floor(rect.y), 0), bounds.height)
    right = min(math.floor(x + rect.width), bounds.width)
    bottom = min(math.floor(y + rect.height), bounds.height)
    return Rect.from_xywh(x, y, max(right - x, 0), max(bottom - y, 0))


def crop(image, rect: Rect):
    """Copy the clamped region of ``image`` into a new buffer."""
    r = clamp_rect(rect, image_size(image))
    x, y, w, h = int(r.x), int(r.y), int(r.width), int(r.height)
    return image[y:y + h, x:x + w].copy()


def crop_centered(image, target: Size) -> Outcome:
    """Fill-resize ``image`` to ``target`` and cut the centered ``target`` frame."""
    resized = resize_preserving_aspect(image, target)
    if not resized.ok:
        return resized

    tw, th = int(math.floor(target.width)), int(math.floor(target.height))
    rh, rw = resized.image.shape[:2]
    x = math.floor((rw - tw) / 2)
    y = math.floor((rh - th) / 2)

    cropped = crop(resized.image, Rect.from_xywh(x, y, tw, th))
    if cropped.shape[:2] != (th, tw):
        return Outcome.failure(RepresentationUnavailable(
            f"crop frame {tw}x{th} at ({x}, {y}) exceeds resized image {rw}x{rh}"))
    return Outcome.success(cropped)
