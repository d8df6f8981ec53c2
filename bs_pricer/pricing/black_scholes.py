"""
Black-Scholes option pricing and Greeks calculation.

Provides the closed-form prices and sensitivities (Greeks) of European calls
and puts, either through a PricingModel holding the five market/contract
parameters or through stateless convenience functions.

Out-of-domain inputs (non-positive strike, zero time or zero volatility) are
not rejected: they propagate as nan/inf. Call PricingModel.validate() for
strict checking.
"""

from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Dict, Tuple, Union

import numpy as np

from bs_pricer.config import MarketConfig, check_market_parameters
from bs_pricer.pricing.normal import norm_cdf, norm_pdf

DAYS_PER_YEAR = 365.0
PERCENT = 100.0


class OptionType(str, Enum):
    """Vanilla European option type."""

    CALL = 'call'
    PUT = 'put'

    @classmethod
    def coerce(cls, value: Union['OptionType', str]) -> 'OptionType':
        """Accept an OptionType or its string value ('call' / 'put')."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"option_type must be 'call' or 'put', got {value!r}") from None


@dataclass(frozen=True)
class Greeks:
    """
    Option sensitivities.

    Attributes:
        delta: dV/dS
        gamma: d²V/dS²
        theta: time decay per calendar day
        vega: price change per 1 percentage point of volatility
        rho: price change per 1 percentage point of interest rate
    """
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    def to_dict(self) -> Dict[str, float]:
        return {key: float(value) for key, value in asdict(self).items()}


@dataclass(frozen=True)
class PricingModel:
    """
    Black-Scholes model for a single pricing scenario.

    The model is immutable; use with_overrides() to re-price under new
    assumptions.

    Attributes:
        spot_price: Current price of the underlying (S)
        strike_price: Strike price (K)
        time_to_expiry: Time to expiry in years (T)
        risk_free_rate: Continuously compounded risk-free rate (r)
        standard_deviation: Annualised volatility (sigma)
    """
    spot_price: float
    strike_price: float
    time_to_expiry: float
    risk_free_rate: float
    standard_deviation: float

    @classmethod
    def from_config(cls, market_config: MarketConfig) -> 'PricingModel':
        """Build a model from a market configuration."""
        return cls(
            spot_price=market_config.spot_price,
            strike_price=market_config.strike_price,
            time_to_expiry=market_config.time_to_expiry,
            risk_free_rate=market_config.risk_free_rate,
            standard_deviation=market_config.volatility,
        )

    def with_overrides(self, **changes: float) -> 'PricingModel':
        """
        Return a copy of the model with some parameters replaced.

        Args:
            **changes: New values keyed by field name

        Returns:
            New PricingModel

        Raises:
            TypeError: If a key is not a model field
        """
        return replace(self, **changes)

    def validate(self) -> 'PricingModel':
        """
        Check that all parameters lie in their economic domain.

        Returns:
            The model itself, for chaining

        Raises:
            InvalidParameterError: If S, K, T or sigma is not positive or any
                parameter is non-finite
        """
        check_market_parameters(
            spot_price=self.spot_price,
            strike_price=self.strike_price,
            time_to_expiry=self.time_to_expiry,
            risk_free_rate=self.risk_free_rate,
            volatility=self.standard_deviation,
        )
        return self

    def _params(self) -> Tuple[np.float64, ...]:
        # numpy scalars turn division by zero into inf/nan instead of raising
        return (
            np.float64(self.spot_price),
            np.float64(self.strike_price),
            np.float64(self.time_to_expiry),
            np.float64(self.risk_free_rate),
            np.float64(self.standard_deviation),
        )

    def d1(self) -> float:
        """d1 = (ln(S/K) + (r + σ²/2)T) / (σ√T)"""
        S, K, T, r, sigma = self._params()
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            return (np.log(S / K) + (r + 0.5 * sigma**2) * T) / (sigma * np.sqrt(T))

    def d2(self) -> float:
        """d2 = d1 - σ√T"""
        _, _, T, _, sigma = self._params()
        with np.errstate(invalid='ignore', over='ignore'):
            return self.d1() - sigma * np.sqrt(T)

    def discount_factor(self) -> float:
        """exp(-rT)"""
        _, _, T, r, _ = self._params()
        with np.errstate(over='ignore', invalid='ignore'):
            return np.exp(-r * T)

    def price(self, option_type: Union[OptionType, str] = OptionType.CALL) -> float:
        """
        Calculate the Black-Scholes option price.

        Args:
            option_type: OptionType.CALL / OptionType.PUT (or 'call' / 'put')

        Returns:
            Option price
        """
        option_type = OptionType.coerce(option_type)
        S, K, _, _, _ = self._params()
        d1 = self.d1()
        d2 = self.d2()
        discount = self.discount_factor()

        with np.errstate(invalid='ignore', over='ignore'):
            if option_type is OptionType.CALL:
                return S * norm_cdf(d1) - K * discount * norm_cdf(d2)
            else:
                return K * discount * norm_cdf(-d2) - S * norm_cdf(-d1)

    def greeks(self, option_type: Union[OptionType, str] = OptionType.CALL) -> Greeks:
        """
        Calculate all Greeks at once.

        Theta is expressed per calendar day; vega and rho per 1 percentage
        point move in volatility and rate respectively.

        Args:
            option_type: OptionType.CALL / OptionType.PUT (or 'call' / 'put')

        Returns:
            Greeks record
        """
        option_type = OptionType.coerce(option_type)
        S, K, T, r, sigma = self._params()
        d1 = self.d1()
        d2 = self.d2()
        discount = self.discount_factor()

        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            sqrt_t = np.sqrt(T)
            pdf_d1 = norm_pdf(d1)
            decay = -S * pdf_d1 * sigma / (2 * sqrt_t)

            if option_type is OptionType.CALL:
                delta = norm_cdf(d1)
                theta = decay - r * K * discount * norm_cdf(d2)
                rho = K * T * discount * norm_cdf(d2)
            else:
                delta = norm_cdf(d1) - 1.0
                theta = decay + r * K * discount * norm_cdf(-d2)
                rho = -K * T * discount * norm_cdf(-d2)

            gamma = pdf_d1 / (S * sigma * sqrt_t)
            vega = S * pdf_d1 * sqrt_t

        return Greeks(
            delta=delta,
            gamma=gamma,
            theta=theta / DAYS_PER_YEAR,
            vega=vega / PERCENT,
            rho=rho / PERCENT,
        )


def calculate_option_price(
    spot_price: float,
    strike_price: float,
    time_to_expiry: float,
    risk_free_rate: float,
    volatility: float,
    option_type: Union[OptionType, str] = OptionType.CALL,
) -> float:
    """Price an option without keeping a PricingModel around."""
    model = PricingModel(spot_price, strike_price, time_to_expiry, risk_free_rate, volatility)
    return model.price(option_type)


def calculate_greeks(
    spot_price: float,
    strike_price: float,
    time_to_expiry: float,
    risk_free_rate: float,
    volatility: float,
    option_type: Union[OptionType, str] = OptionType.CALL,
) -> Greeks:
    """Compute Greeks without keeping a PricingModel around."""
    model = PricingModel(spot_price, strike_price, time_to_expiry, risk_free_rate, volatility)
    return model.greeks(option_type)
