"""
Options pricing module.

Provides the Black-Scholes model:
- Normal distribution primitives (erf, CDF, PDF)
- Closed-form prices and Greeks
- Newton-Raphson implied volatility
"""

from bs_pricer.pricing.normal import erf, norm_cdf, norm_pdf
from bs_pricer.pricing.black_scholes import (
    OptionType,
    Greeks,
    PricingModel,
    calculate_option_price,
    calculate_greeks,
)
from bs_pricer.pricing.implied_vol import (
    SolverError,
    VegaTooSmallError,
    ConvergenceError,
    ImpliedVolResult,
    ImpliedVolatilitySolver,
    implied_volatility,
)

__all__ = [
    "erf",
    "norm_cdf",
    "norm_pdf",
    "OptionType",
    "Greeks",
    "PricingModel",
    "calculate_option_price",
    "calculate_greeks",
    "SolverError",
    "VegaTooSmallError",
    "ConvergenceError",
    "ImpliedVolResult",
    "ImpliedVolatilitySolver",
    "implied_volatility",
]
