# minigrad/errors.py
"""
Exception hierarchy for minigrad.

Every error derives from a built-in exception as well, so callers that only
catch ``ValueError`` / ``ZeroDivisionError`` keep working.
"""


class AutodiffError(Exception):
    """Base class of all minigrad errors."""


class DomainError(AutodiffError, ZeroDivisionError):
    """An operation was applied outside its mathematical domain (e.g. x / 0)."""


class PreconditionError(AutodiffError, ValueError):
    """A call violated a documented precondition (leaf-only op, singleton cast, ...)."""


class ShapeError(PreconditionError):
    """Container operands have incompatible shapes."""


class GraphError(AutodiffError, ValueError):
    """Operands do not belong to the same tape."""


class StaleVariableError(GraphError):
    """The node behind a Variable handle was removed from its tape."""


class GradcheckError(AutodiffError, AssertionError):
    """Analytic and numerical gradients disagree."""
