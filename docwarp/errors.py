"""Error taxonomy for docwarp.

Geometric failures (bad frames, rejected control points) are recoverable and
are normally returned inside an :class:`~docwarp.outcome.Outcome`. Encoding and
persistence failures are always raised.
"""


class DocwarpError(Exception):
    """Base class for every error raised by docwarp."""


class RepresentationUnavailable(DocwarpError):
    """No pixel representation exists for the requested frame."""


class FilterRejected(DocwarpError):
    """The perspective-correction primitive refused its control points."""


class EncodingFailure(DocwarpError):
    """An image could not be serialized to bytes."""


class IOFailure(DocwarpError, OSError):
    """Encoded bytes could not be written to their destination."""
