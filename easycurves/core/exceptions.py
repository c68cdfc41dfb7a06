"""Exceptions raised by curve construction and evaluation."""


class EasyCurvesError(ValueError):
    """Base class for all curve validation failures."""


class DegenerateGeometryError(EasyCurvesError):
    """Input points coincide, are collinear or cannot define the curve."""


class NumericDomainError(EasyCurvesError):
    """A requested value is outside the reachable range of a curve."""


class DiscontinuityError(EasyCurvesError):
    """Adjacent segments of a composed curve do not meet."""

    def __init__(self, index: int, gap: float) -> None:
        self.index = index
        self.gap = gap
        super().__init__(
            f"Segment {index} does not start where segment {index - 1} ends "
            f"(gap {gap:.6g})"
        )


class RangeError(EasyCurvesError):
    """A parameter or length lies outside the curve domain."""

    def __init__(self, value: float, lower: float, upper: float) -> None:
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(f"Value {value} is outside the domain [{lower}, {upper}]")
