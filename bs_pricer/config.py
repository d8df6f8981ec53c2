"""
Configuration module using dataclasses for type-safe, clean configuration management.

Defines the market scenario, implied volatility solver settings and scenario
grid layout used throughout the package, plus YAML persistence for the
combined PricingConfig.
"""

from dataclasses import dataclass, field, fields, asdict
from typing import Literal, Dict, Any
from pathlib import Path
import math

import yaml


class InvalidParameterError(ValueError):
    """Raised by opt-in validation when a market parameter is out of domain."""


def check_market_parameters(
    spot_price: float,
    strike_price: float,
    time_to_expiry: float,
    risk_free_rate: float,
    volatility: float,
) -> None:
    """
    Strict domain check for Black-Scholes inputs.

    Pricing never calls this implicitly; out-of-domain inputs otherwise
    propagate as nan/inf.

    Raises:
        InvalidParameterError: On the first offending parameter
    """
    values = {
        'spot_price': spot_price,
        'strike_price': strike_price,
        'time_to_expiry': time_to_expiry,
        'risk_free_rate': risk_free_rate,
        'volatility': volatility,
    }
    for name, value in values.items():
        if not math.isfinite(value):
            raise InvalidParameterError(f"{name} must be finite, got {value}")

    for name in ('spot_price', 'strike_price', 'time_to_expiry', 'volatility'):
        if values[name] <= 0:
            raise InvalidParameterError(f"{name} must be positive, got {values[name]}")


def _coerce_numbers(config_cls, values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert numeric fields to their declared type.

    PyYAML follows YAML 1.1, which reads hand-written exponents such as
    1e-8 (no decimal point) as strings.
    """
    values = dict(values)
    for f in fields(config_cls):
        if f.type in (float, int) and values.get(f.name) is not None:
            values[f.name] = f.type(values[f.name])
    return values


@dataclass
class MarketConfig:
    """Market parameters and option specification for one pricing scenario."""

    spot_price: float = 100.0
    strike_price: float = 100.0
    time_to_expiry: float = 1.0  # In years
    risk_free_rate: float = 0.05  # Continuously compounded
    volatility: float = 0.2  # Annual volatility (sigma)
    option_type: Literal['call', 'put'] = 'call'

    def __post_init__(self):
        """Normalise option_type; market values are deliberately unchecked."""
        self.option_type = str(getattr(self.option_type, 'value', self.option_type)).lower()
        if self.option_type not in ('call', 'put'):
            raise ValueError(f"option_type must be 'call' or 'put', got {self.option_type}")

    def validate(self) -> 'MarketConfig':
        """Opt-in strict validation of the market parameters."""
        check_market_parameters(
            spot_price=self.spot_price,
            strike_price=self.strike_price,
            time_to_expiry=self.time_to_expiry,
            risk_free_rate=self.risk_free_rate,
            volatility=self.volatility,
        )
        return self


@dataclass
class SolverConfig:
    """Newton-Raphson implied volatility solver settings."""

    initial_volatility: float = 0.2  # Fixed starting guess
    max_iterations: int = 100
    tolerance: float = 1e-8  # Absolute price difference
    min_vega: float = 1e-10  # Un-scaled vega below this aborts the search
    volatility_floor: float = 0.001  # Replaces a non-positive Newton step

    def __post_init__(self):
        """Validate configuration parameters."""
        assert self.max_iterations > 0, "max_iterations must be positive"
        assert self.tolerance > 0, "Tolerance must be positive"
        assert self.min_vega >= 0, "min_vega must be non-negative"
        assert self.volatility_floor > 0, "Volatility floor must be positive"


@dataclass
class GridConfig:
    """Strike x volatility grid for price and Greek heat maps."""

    min_strike: float = 80.0
    max_strike: float = 120.0
    strike_step: float = 5.0
    min_volatility: float = 0.1
    max_volatility: float = 0.5
    volatility_step: float = 0.05

    def __post_init__(self):
        """Validate configuration parameters."""
        assert self.strike_step > 0, "Strike step must be positive"
        assert self.volatility_step > 0, "Volatility step must be positive"
        assert self.max_strike >= self.min_strike, "max_strike must be >= min_strike"
        assert self.max_volatility >= self.min_volatility, \
            "max_volatility must be >= min_volatility"


@dataclass
class PricingConfig:
    """Top-level configuration combining all sub-configs."""

    name: str = "default"
    market: MarketConfig = field(default_factory=MarketConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    grid: GridConfig = field(default_factory=GridConfig)

    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR'] = 'INFO'

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def save(self, path: Path) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        with open(path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'PricingConfig':
        """Load configuration from dictionary."""
        config_dict = dict(config_dict)
        if 'market' in config_dict and isinstance(config_dict['market'], dict):
            config_dict['market'] = MarketConfig(**_coerce_numbers(MarketConfig, config_dict['market']))
        if 'solver' in config_dict and isinstance(config_dict['solver'], dict):
            config_dict['solver'] = SolverConfig(**_coerce_numbers(SolverConfig, config_dict['solver']))
        if 'grid' in config_dict and isinstance(config_dict['grid'], dict):
            config_dict['grid'] = GridConfig(**_coerce_numbers(GridConfig, config_dict['grid']))

        return cls(**config_dict)

    @classmethod
    def load(cls, path: Path) -> 'PricingConfig':
        """Load configuration from YAML file."""
        path = Path(path)
        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}
        return cls.from_dict(config_dict)


def get_default_config() -> PricingConfig:
    """Textbook scenario: S=K=100, T=1, r=5%, sigma=20%."""
    return PricingConfig(name="default")
