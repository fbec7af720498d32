class MalformedDatasetError(ValueError):
    """Raised when a forecast payload cannot be turned into aligned rows.

    Typical causes are hourly (or daily) arrays of unequal length, missing
    required fields and timestamps that cannot be parsed.
    """

    def __init__(self, message: str, *, field: str | None = None, detail: str = ""):
        """Creates a new MalformedDatasetError instance.

        Args:
            message: the exception message
            field: the payload field that caused the error, if known.
            detail: additional information, e.g. the offending value.
        """
        super().__init__(message)
        self.field = field
        self.detail = detail

    def __str__(self) -> str:
        base = super().__str__()
        parts = []
        if self.field:
            parts.append(f"field={self.field}")
        if self.detail:
            parts.append(f"detail={self.detail}")
        return f"{base} ({', '.join(parts)})" if parts else base


class EmptyDatasetError(ValueError):
    """Raised when a computation needs at least one row, but none are available."""


class DegenerateViewportError(ValueError):
    """Raised when a viewport is too small to hold a plot."""
