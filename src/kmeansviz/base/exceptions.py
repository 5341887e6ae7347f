"""Exception types raised by the clustering engine."""


class KMeansEngineError(Exception):
    """Base class for all errors raised by the clustering engine."""


class ConfigurationError(KMeansEngineError, ValueError):
    """Invalid engine configuration or input data.

    Raised for a non-positive cluster count, more clusters than points,
    an empty dataset for an algorithmic initialization, an unknown
    initialization method, or malformed points.
    """


class SequencingError(KMeansEngineError, RuntimeError):
    """An operation was called in a state that does not allow it.

    Raised when stepping before centroids exist, calling ``initialize()``
    in manual mode, or supplying manual centroids in a non-manual mode.
    """
