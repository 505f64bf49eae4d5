"""Benefit accrual module."""

from .benefits import (
    AccrualConstants,
    BenefitAccrualEngine,
    BenefitBreakdown,
    CumulativeStats,
    compute_interval_benefits,
)

__all__ = [
    "AccrualConstants",
    "BenefitAccrualEngine",
    "BenefitBreakdown",
    "CumulativeStats",
    "compute_interval_benefits",
]
