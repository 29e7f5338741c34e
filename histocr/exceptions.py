"""
Exception classes for histocr.

All histocr exceptions inherit from HistOCRError, making it easy to
catch all library errors.

Note that the enhancer and trainer do not raise for data-quality reasons:
an unknown word or a low similarity score is a result, not a failure.

Example:
    >>> try:
    ...     config = HistOCRConfig.from_yaml("histocr.yaml")
    ... except histocr.ConfigurationError as e:
    ...     print(f"Bad configuration: {e}")
"""


class HistOCRError(Exception):
    """
    Base exception for all histocr errors.

    Catch this to handle any histocr-specific error.
    """

    pass


class ConfigurationError(HistOCRError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> TrainerConfig(good_threshold=0.99)
        ConfigurationError: thresholds must satisfy 0 <= good <= excellent <= 1
    """

    pass


class StorageError(HistOCRError):
    """
    Raised when a storage backend cannot complete a read or write.

    The enhancer and trainer catch this at each call site and log it;
    it only reaches callers who use a store directly.
    """

    pass
