"""Exception types raised by the pipeline stages."""


class PipelineError(Exception):
    """Base class: any of these aborts the run before output is written."""


class DataError(PipelineError, ValueError):
    """Input is malformed: missing columns, bad types, duplicate player seasons."""


class PersistenceError(PipelineError):
    """Model, scaler or prediction artifacts could not be written or read."""
