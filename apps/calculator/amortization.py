"""
Loan amortization calculator.

Four interchangeable solvers over the standard EMI formula:

    EMI = P × r × (1+r)^n / ((1+r)^n - 1)

Where:
    P = principal (loan amount)
    r = monthly interest rate (annual_rate_percent / 12 / 100)
    n = term in months (term_years × 12)

plus a month-by-month amortization schedule. Everything here is pure:
numbers in, frozen dataclasses out, no I/O and no logging.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from apps.calculator.exceptions import (
    ConvergenceError,
    InfeasibleEMIError,
    InvalidInputError,
    NonAmortizingEMIError,
    RateOutOfRangeError,
    TermOutOfRangeError,
)

# Search brackets
MAX_RATE_PERCENT = 100.0
MIN_TERM_MONTHS = 1
MAX_TERM_MONTHS = 30 * 12

# Bisection stops once the rate bracket is this narrow (in percent)
RATE_TOLERANCE = 1e-4
MAX_ITERATIONS = 200

# Relative slack when comparing a computed EMI against a target EMI
_EMI_EPSILON = 1e-9

CALCULATION_EMI = 'emi'
CALCULATION_RATE = 'rate'
CALCULATION_TERM = 'term'
CALCULATION_BORROW = 'borrow'

CALCULATION_TYPES = (
    CALCULATION_EMI,
    CALCULATION_RATE,
    CALCULATION_TERM,
    CALCULATION_BORROW,
)

# Inputs each calculation type needs; the remaining field is the one solved for.
REQUIRED_FIELDS = {
    CALCULATION_EMI: ('principal', 'annual_rate_percent', 'term_years'),
    CALCULATION_RATE: ('principal', 'emi', 'term_years'),
    CALCULATION_TERM: ('principal', 'annual_rate_percent', 'emi'),
    CALCULATION_BORROW: ('emi', 'annual_rate_percent', 'term_years'),
}


@dataclass(frozen=True)
class LoanResult:
    """
    Outcome of one calculation.

    ``total_payment == total_interest + principal`` holds for every result,
    where ``principal`` is the known amount or, in borrow mode, the solved one.
    Exactly one of the optional fields is populated, depending on the mode.
    """

    calculation_type: str
    principal: float
    emi: float
    total_payment: float
    total_interest: float
    interest_rate_percent: Optional[float] = None
    term_years: Optional[float] = None
    term_months: Optional[int] = None
    max_principal: Optional[float] = None


@dataclass(frozen=True)
class LoanQuery:
    """A single calculation request; fields being solved for stay None."""

    calculation_type: str
    principal: Optional[float] = None
    annual_rate_percent: Optional[float] = None
    term_years: Optional[float] = None
    emi: Optional[float] = None

    def solve(self) -> LoanResult:
        """Run the solver matching ``calculation_type``."""
        if self.calculation_type == CALCULATION_EMI:
            return compute_emi(
                self.principal, self.annual_rate_percent, self.term_years,
            )
        if self.calculation_type == CALCULATION_RATE:
            return compute_rate(self.principal, self.emi, self.term_years)
        if self.calculation_type == CALCULATION_TERM:
            return compute_term(
                self.principal, self.annual_rate_percent, self.emi,
            )
        if self.calculation_type == CALCULATION_BORROW:
            return compute_max_principal(
                self.emi, self.annual_rate_percent, self.term_years,
            )
        raise InvalidInputError(
            'calculation_type',
            f"must be one of {', '.join(CALCULATION_TYPES)}",
        )


@dataclass(frozen=True)
class ScheduleRow:
    """One installment of an amortization schedule."""

    month: int
    payment: float
    principal_component: float
    interest_component: float
    balance: float


@dataclass(frozen=True)
class AmortizationSchedule:
    emi: float
    principal: float
    total_payment: float
    total_interest: float
    rows: List[ScheduleRow] = field(default_factory=list)


def to_number(name: str, value, allow_zero: bool = False) -> float:
    """Validate a numeric input and return it as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidInputError(name, 'must be a number')

    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(name, 'must be a finite number')
    if allow_zero and value < 0:
        raise InvalidInputError(name, 'cannot be negative')
    if not allow_zero and value <= 0:
        raise InvalidInputError(name, 'must be greater than 0')
    return value


def _monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 12 / 100


def _annuity_factor(monthly_rate: float, months: float) -> float:
    """
    Present value of one unit paid monthly for ``months`` months.

    Computed as (1 - (1+r)^-n) / r via log1p/expm1, which equals
    ((1+r)^n - 1) / (r × (1+r)^n) but neither overflows for long terms
    nor loses precision for tiny rates.
    """
    if monthly_rate == 0:
        return months
    return -math.expm1(-months * math.log1p(monthly_rate)) / monthly_rate


def _installment(principal: float, monthly_rate: float, months: float) -> float:
    """EMI that fully amortizes ``principal`` over ``months``."""
    return principal / _annuity_factor(monthly_rate, months)


def _build_result(
    calculation_type: str,
    principal: float,
    emi: float,
    months: float,
    **extra,
) -> LoanResult:
    total_payment = emi * months
    return LoanResult(
        calculation_type=calculation_type,
        principal=principal,
        emi=emi,
        total_payment=total_payment,
        total_interest=total_payment - principal,
        **extra,
    )


def compute_emi(principal, annual_rate_percent, term_years) -> LoanResult:
    """
    Calculate the fixed monthly installment for a loan.

    Args:
        principal: Loan amount (must be > 0).
        annual_rate_percent: Annual nominal rate as percentage (>= 0).
            A 0% loan is repaid in equal slices of the principal.
        term_years: Loan term in years (must be > 0).

    Returns:
        LoanResult with emi, total_payment and total_interest.

    Raises:
        InvalidInputError: If any input is non-numeric or out of domain.
    """
    principal = to_number('principal', principal)
    annual_rate_percent = to_number(
        'annual_rate_percent', annual_rate_percent, allow_zero=True,
    )
    term_years = to_number('term_years', term_years)

    months = term_years * 12
    emi = _installment(principal, _monthly_rate(annual_rate_percent), months)

    return _build_result(CALCULATION_EMI, principal, emi, months)


def compute_rate(principal, emi, term_years) -> LoanResult:
    """
    Recover the annual interest rate that produces ``emi``.

    EMI is strictly increasing in rate for a fixed principal and term, so
    bisection over [0, 100] percent has a unique root to converge on.

    Raises:
        InvalidInputError: If any input is non-numeric or out of domain.
        InfeasibleEMIError: If ``emi × months`` falls short of the principal.
            An EMI that exactly covers it is solved as a 0% loan.
        RateOutOfRangeError: If the EMI needs a rate above 100% a year.
        ConvergenceError: If bisection exceeds MAX_ITERATIONS.
    """
    principal = to_number('principal', principal)
    emi = to_number('emi', emi)
    term_years = to_number('term_years', term_years)

    months = term_years * 12

    # Equality (within float slack) is a 0% loan, so it is accepted
    if emi * months < principal * (1 - _EMI_EPSILON):
        raise InfeasibleEMIError(
            f"EMI {emi} over {months:g} months cannot repay {principal}"
        )

    ceiling_emi = _installment(
        principal, _monthly_rate(MAX_RATE_PERCENT), months,
    )
    if ceiling_emi < emi:
        raise RateOutOfRangeError(
            f"EMI {emi} needs an annual rate above {MAX_RATE_PERCENT:g}%"
        )

    low, high = 0.0, MAX_RATE_PERCENT
    for _ in range(MAX_ITERATIONS):
        if high - low <= RATE_TOLERANCE:
            break
        mid = (low + high) / 2
        if _installment(principal, _monthly_rate(mid), months) > emi:
            high = mid
        else:
            low = mid
    else:
        raise ConvergenceError(
            f"Rate search did not converge in {MAX_ITERATIONS} iterations"
        )

    return _build_result(
        CALCULATION_RATE,
        principal,
        emi,
        months,
        interest_rate_percent=(low + high) / 2,
    )


def compute_term(principal, annual_rate_percent, emi) -> LoanResult:
    """
    Find the number of whole months needed to repay ``principal`` with ``emi``.

    EMI is strictly decreasing in term, so bisection over [1, 360] months
    finds the shortest term whose installment does not exceed ``emi``.

    Raises:
        InvalidInputError: If any input is non-numeric or out of domain.
        NonAmortizingEMIError: If ``emi`` does not exceed the monthly interest.
        TermOutOfRangeError: If even 360 months need a larger EMI.
        ConvergenceError: If bisection exceeds MAX_ITERATIONS.
    """
    principal = to_number('principal', principal)
    annual_rate_percent = to_number(
        'annual_rate_percent', annual_rate_percent, allow_zero=True,
    )
    emi = to_number('emi', emi)

    monthly_rate = _monthly_rate(annual_rate_percent)
    interest_only = principal * monthly_rate
    if monthly_rate > 0 and emi <= interest_only:
        raise NonAmortizingEMIError(
            f"EMI {emi} does not exceed the monthly interest {interest_only}"
        )

    def affordable(months: int) -> bool:
        needed = _installment(principal, monthly_rate, months)
        return needed <= emi * (1 + _EMI_EPSILON)

    if not affordable(MAX_TERM_MONTHS):
        raise TermOutOfRangeError(
            f"EMI {emi} needs more than {MAX_TERM_MONTHS} months"
        )

    # Invariant: affordable(high) is True, affordable(low) is False
    low, high = MIN_TERM_MONTHS, MAX_TERM_MONTHS
    if affordable(low):
        high = low
    else:
        for _ in range(MAX_ITERATIONS):
            if high - low <= 1:
                break
            mid = (low + high) // 2
            if affordable(mid):
                high = mid
            else:
                low = mid
        else:
            raise ConvergenceError(
                f"Term search did not converge in {MAX_ITERATIONS} iterations"
            )

    return _build_result(
        CALCULATION_TERM,
        principal,
        emi,
        high,
        term_years=high / 12,
        term_months=high,
    )


def compute_max_principal(emi, annual_rate_percent, term_years) -> LoanResult:
    """
    Calculate the largest principal ``emi`` can repay over ``term_years``.

    Closed-form inverse of compute_emi:

        P = EMI × ((1+r)^n - 1) / (r × (1+r)^n)    for r > 0
        P = EMI × n                                for r = 0

    Raises:
        InvalidInputError: If any input is non-numeric or out of domain.
    """
    emi = to_number('emi', emi)
    annual_rate_percent = to_number(
        'annual_rate_percent', annual_rate_percent, allow_zero=True,
    )
    term_years = to_number('term_years', term_years)

    months = term_years * 12
    max_principal = emi * _annuity_factor(
        _monthly_rate(annual_rate_percent), months,
    )

    return _build_result(
        CALCULATION_BORROW,
        max_principal,
        emi,
        months,
        max_principal=max_principal,
    )


def amortization_schedule(
    principal,
    annual_rate_percent,
    term_years,
) -> AmortizationSchedule:
    """
    Break a loan down into monthly installments.

    Each month pays interest on the outstanding balance and puts the rest of
    the EMI towards principal. A fractional month count gets one extra,
    smaller installment; the last row always closes the balance to exactly 0.

    Raises:
        InvalidInputError: If any input is non-numeric or out of domain,
            or the term is longer than MAX_TERM_MONTHS.
    """
    principal = to_number('principal', principal)
    annual_rate_percent = to_number(
        'annual_rate_percent', annual_rate_percent, allow_zero=True,
    )
    term_years = to_number('term_years', term_years)

    months = term_years * 12
    if months > MAX_TERM_MONTHS:
        raise InvalidInputError(
            'term_years', f"cannot exceed {MAX_TERM_MONTHS // 12} years",
        )

    monthly_rate = _monthly_rate(annual_rate_percent)
    emi = _installment(principal, monthly_rate, months)
    installments = max(1, math.ceil(months - _EMI_EPSILON))

    rows = []
    balance = principal
    total_payment = 0.0
    total_interest = 0.0

    for month in range(1, installments + 1):
        interest = balance * monthly_rate
        principal_part = emi - interest

        # Final payment adjustment
        if month == installments or principal_part >= balance:
            principal_part = balance

        payment = principal_part + interest
        balance -= principal_part
        total_payment += payment
        total_interest += interest

        rows.append(ScheduleRow(
            month=month,
            payment=payment,
            principal_component=principal_part,
            interest_component=interest,
            balance=balance,
        ))

        if balance <= 0:
            break

    return AmortizationSchedule(
        emi=emi,
        principal=principal,
        total_payment=total_payment,
        total_interest=total_interest,
        rows=rows,
    )
