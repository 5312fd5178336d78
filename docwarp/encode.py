"""Encoding and persistence. Failures here are always raised."""

import logging
import os
import tempfile
from pathlib import Path

import cv2
import numpy as np

from . import config
from .errors import EncodingFailure, IOFailure

logger = logging.getLogger(__name__)


def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)


def encode(image, ext=config.DEFAULT_EXT) -> bytes:
    """Serialize ``image`` with the OpenCV encoder registered for ``ext``."""
    if not isinstance(image, np.ndarray) or image.size == 0:
        raise EncodingFailure("nothing to encode: empty or missing pixel buffer")
    try:
        ok, buf = cv2.imencode(ext, image)
    except cv2.error as exc:
        raise EncodingFailure(f"cannot encode as {ext}: {exc}") from exc
    if not ok:
        raise EncodingFailure(f"cannot encode as {ext}")
    return buf.tobytes()


def _file_mode():
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save(data: bytes, path) -> Path:
    """Atomically write ``data`` to ``path``."""
    path = Path(path)
    tmp_name = None
    try:
        ensure_dir(path.parent)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        # mkstemp creates 0600; match what a plain open() would give
        os.chmod(tmp_name, _file_mode())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise IOFailure(f"cannot write {path}: {exc}") from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    logger.debug("wrote %d bytes to %s", len(data), path)
    return path


def save_image(image, path) -> Path:
    """Encode ``image`` by the destination's suffix (PNG if none) and save it."""
    path = Path(path)
    return save(encode(image, path.suffix or config.DEFAULT_EXT), path)
