# --- File: starlogic/exceptions.py ---
# Description: Error taxonomy for board construction and rule application.


class StarBattleError(Exception):
    """Base class for all errors raised by the deduction engine."""


class InvalidInput(StarBattleError, ValueError):
    """Malformed dimensions, tag matrix or reference layout. Raised before any mutation."""


class InvariantViolation(StarBattleError):
    """A rule attempted an impossible mutation. Indicates a solver bug, not bad input."""


class OracleViolation(InvariantViolation):
    """A mutation contradicted the attached reference solution."""
