from __future__ import annotations

import pandas as pd


def monthly_payment(principal: float, annual_rate: float, term_years: int) -> float:
    """Level payment that retires ``principal`` over ``term_years`` of monthly installments."""
    term_months = term_years * 12
    if principal <= 0 or term_months <= 0:
        return 0.0
    monthly_rate = annual_rate / 12.0
    if monthly_rate == 0:
        return principal / term_months
    factor = (1 + monthly_rate) ** term_months
    return principal * monthly_rate * factor / (factor - 1)


def total_interest(principal: float, annual_rate: float, term_years: int) -> float:
    if principal <= 0:
        return 0.0
    return monthly_payment(principal, annual_rate, term_years) * term_years * 12 - principal


def amortization_schedule(principal: float, annual_rate: float, term_years: int) -> pd.DataFrame:
    term_months = term_years * 12
    payment = monthly_payment(principal, annual_rate, term_years)
    balance = principal
    records = []

    for month in range(1, term_months + 1):
        interest = balance * (annual_rate / 12.0)
        principal_paid = min(payment - interest, balance)
        ending_balance = max(balance - principal_paid, 0.0)

        records.append(
            {
                "month": month,
                "payment": payment,
                "interest": interest,
                "principal": principal_paid,
                "ending_balance": ending_balance,
            }
        )

        balance = ending_balance

    return pd.DataFrame.from_records(
        records, columns=["month", "payment", "interest", "principal", "ending_balance"]
    ).set_index("month")


def standard_plan_annual_payment(total_debt: float, term_years: int, acceleration: float) -> float:
    """Straight-line share of the original debt, scaled for over-minimum repayment."""
    if total_debt <= 0 or term_years <= 0:
        return 0.0
    return total_debt / term_years * acceleration
