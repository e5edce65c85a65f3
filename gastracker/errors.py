from __future__ import annotations


class GasTrackerError(Exception):
    """Base class for every failure that ends a tracker cycle."""


class ConfigurationError(GasTrackerError):
    """A required setting is missing or malformed."""


class FetchError(GasTrackerError):
    """The price source was unreachable or returned something unusable."""


class StoreError(GasTrackerError):
    """The history could not be loaded or saved."""


class InsufficientDataError(GasTrackerError):
    """Statistics were requested over an empty window."""


class NotifyError(GasTrackerError):
    """
    A category-change notification could not be delivered.

    When raised from a cycle, `report` holds the cycle report: the sample
    was still recorded and persisted.
    """

    def __init__(self, message: str, report=None):
        super().__init__(message)
        self.report = report
