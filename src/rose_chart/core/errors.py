"""
Exception hierarchy for the rose chart engine.

Input-contract violations are raised eagerly while a dataset is ingested,
before any layout is attempted. Interaction-state transitions never raise.
An all-zero dataset is not an error: geometry falls back to a maximum
count of 1 and every wedge renders at radius 0.
"""


class RoseChartError(Exception):
    """Base class for all rose chart errors."""


class DatasetError(RoseChartError, ValueError):
    """
    The dataset violates the input contract.

    Raised for wrong record counts, negative counts, an hourly sum that does
    not match the summary total, out-of-range mean times, or a document
    that cannot be parsed at all.
    """


class MalformedBlockSpan(DatasetError):
    """Block spans do not partition the 24-hour circle exactly once."""


class InvalidDayIndex(RoseChartError, IndexError):
    """
    A daily view references a day outside ``dataset.days``.

    Attributes:
        day_index: The offending index
        day_count: Number of days available in the dataset
    """

    def __init__(self, day_index: int, day_count: int):
        self.day_index = day_index
        self.day_count = day_count
        super().__init__(
            f"Day index {day_index} out of range (dataset has {day_count} days)"
        )


# Name used by the resolver contract
IndexOutOfRange = InvalidDayIndex


class UnknownVariant(RoseChartError, ValueError):
    """An unknown view-mode or color-scheme name was supplied."""

    def __init__(self, kind: str, value: object, choices=()):
        self.kind = kind
        self.value = value
        self.choices = tuple(choices)
        message = f"Unknown {kind}: {value!r}"
        if self.choices:
            message += f" (expected one of: {', '.join(self.choices)})"
        super().__init__(message)


__all__ = [
    "RoseChartError",
    "DatasetError",
    "MalformedBlockSpan",
    "InvalidDayIndex",
    "IndexOutOfRange",
    "UnknownVariant",
]
