from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import DocwarpError


@dataclass(frozen=True, eq=False)
class Outcome:
    """Result of a transform: either an image or the error that prevented it."""

    image: Optional[np.ndarray] = None
    error: Optional[DocwarpError] = None

    @classmethod
    def success(cls, image):
        return cls(image=image)

    @classmethod
    def failure(cls, error):
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> np.ndarray:
        if self.error is not None:
            raise self.error
        return self.image

    def unwrap_or(self, default):
        return self.image if self.error is None else default
