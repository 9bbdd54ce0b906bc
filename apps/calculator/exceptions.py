"""
Calculation errors raised by the loan calculator.

These are plain exceptions with a stable ``code``; turning them into
user-facing messages and HTTP responses is left to the API layer.
"""


class LoanCalculationError(Exception):
    """Base class for every classified calculator failure."""

    code = 'calculation_error'


class InvalidInputError(LoanCalculationError):
    """An input is non-numeric or outside its domain."""

    code = 'invalid_input'

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class InfeasibleEMIError(LoanCalculationError):
    """The EMI cannot repay the principal even at 0% interest."""

    code = 'infeasible_emi'


class RateOutOfRangeError(LoanCalculationError):
    """The EMI would need an annual rate above the search ceiling."""

    code = 'rate_out_of_range'


class TermOutOfRangeError(LoanCalculationError):
    """The EMI would need more months than the search ceiling."""

    code = 'term_out_of_range'


class NonAmortizingEMIError(LoanCalculationError):
    """The EMI does not exceed the monthly interest, so the loan never shrinks."""

    code = 'non_amortizing_emi'


class ConvergenceError(LoanCalculationError):
    """Bisection hit its iteration cap."""

    code = 'convergence_error'
