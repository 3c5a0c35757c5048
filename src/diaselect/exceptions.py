"""Exception types raised by diaselect.

All errors derive from ValueError so callers that already guard numeric code
with ``except ValueError`` keep working:

- PreconditionViolation: a single call received malformed input
- ConfigurationError: a parameter combination can never produce a valid run
"""


class SelectionError(ValueError):
    """Base class for all diaselect errors."""


class PreconditionViolation(SelectionError):
    """Raised when a call receives inputs that break its contract.

    Examples are empty score vectors, mismatched row lengths, ``k >= N`` or a
    negative epsilon. The check happens before any computation or random draw.
    """


class ConfigurationError(SelectionError):
    """Raised when selection parameters cannot be satisfied.

    Typical causes are an unknown scheme name or a cohort proportion that does
    not split the population (or the objectives) into equal cohorts.
    """
