"""Exception hierarchy for equitylens.

Degenerate numerical input (empty series, zero variance, mismatched lengths)
never raises; it is encoded as neutral values in the returned models. Only the
conditions below propagate to callers.
"""


class EquityLensError(Exception):
    """Base class for all equitylens errors."""


class SuperBlockError(EquityLensError):
    """Raised when a super block cannot be combined."""


class SuperBlockAlignmentError(SuperBlockError):
    """Raised when date alignment leaves nothing to combine.

    Attributes:
        reason: Machine-readable cause (no-overlap, no-common-start,
            no-common-end, no-components, no-complete-date)
        warnings: Alignment warnings collected before the failure
    """

    def __init__(self, message: str, reason: str, warnings: list[str] | None = None):
        super().__init__(message)
        self.reason = reason
        self.warnings = list(warnings or [])


class EquityCurveLoadError(EquityLensError):
    """Raised when an input file cannot be parsed into entries."""

    def __init__(self, message: str, path: str | None = None, row: int | None = None):
        location = ""
        if path is not None:
            location = f" ({path}" + (f", row {row}" if row is not None else "") + ")"
        super().__init__(f"{message}{location}")
        self.path = path
        self.row = row
