"""Exceptions raised while classifying a single figure."""

from figshape.models import FailureReason


class ClassificationError(Exception):
    """Base exception for per-figure classification failures."""

    reason = None

    def __init__(self, message, figure_id=None):
        super().__init__(message)
        self.figure_id = figure_id


class EmptyFigure(ClassificationError):
    """The figure mask holds no pixel of the figure color."""

    reason = FailureReason.EMPTY_FIGURE


class MalformedAngularRange(ClassificationError):
    """Ray casting was asked for a span other than one full revolution."""

    reason = FailureReason.MALFORMED_ANGULAR_RANGE


class UnboundedRay(ClassificationError):
    """A ray marched past the step cap without reaching a boundary."""

    reason = FailureReason.UNBOUNDED_RAY


class EmptySignal(ClassificationError):
    """Smoothing left nothing to classify."""

    reason = FailureReason.EMPTY_SIGNAL
