"""Stripe Connect adapter."""

from .client import (
    MockStripeActivationOracle,
    RealStripeActivationOracle,
    StripeActivationOracle,
)

__all__ = [
    "MockStripeActivationOracle",
    "RealStripeActivationOracle",
    "StripeActivationOracle",
]
