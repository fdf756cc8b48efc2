"""Exception types raised by the batch upload tool."""


class BatchUploadError(Exception):
    """Base class for batch upload errors."""


class ConfigurationError(BatchUploadError, ValueError):
    """Invalid or missing configuration. Raised before any file is touched."""


class ResolutionError(BatchUploadError, OSError):
    """A pattern or pattern file could not be resolved into files."""


class TransportError(BatchUploadError):
    """Network-level failure while talking to the upload server.

    The underlying ``requests`` exception is available as ``__cause__``.
    """
