"""
Black-Scholes Pricing Package

Closed-form European option prices, Greeks and Newton-Raphson implied
volatility, with scenario grids for heat maps and price surfaces.
"""

__version__ = "0.1.0"

from bs_pricer.config import (
    PricingConfig,
    MarketConfig,
    SolverConfig,
    GridConfig,
    InvalidParameterError,
    get_default_config,
)
from bs_pricer.logger import get_logger, setup_logger
from bs_pricer.pricing import (
    erf,
    norm_cdf,
    norm_pdf,
    OptionType,
    Greeks,
    PricingModel,
    calculate_option_price,
    calculate_greeks,
    SolverError,
    VegaTooSmallError,
    ConvergenceError,
    ImpliedVolResult,
    ImpliedVolatilitySolver,
    implied_volatility,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "PricingConfig",
    "MarketConfig",
    "SolverConfig",
    "GridConfig",
    "InvalidParameterError",
    "get_default_config",
    # Logging
    "get_logger",
    "setup_logger",
    # Pricing
    "erf",
    "norm_cdf",
    "norm_pdf",
    "OptionType",
    "Greeks",
    "PricingModel",
    "calculate_option_price",
    "calculate_greeks",
    # Implied volatility
    "SolverError",
    "VegaTooSmallError",
    "ConvergenceError",
    "ImpliedVolResult",
    "ImpliedVolatilitySolver",
    "implied_volatility",
]
