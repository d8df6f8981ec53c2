"""
Implied volatility solver for European options.

Newton-Raphson on sigma, using vega as the derivative of price with respect
to volatility. The caller's PricingModel is never modified: every trial
volatility is priced on a copy.
"""

from dataclasses import dataclass
from typing import Optional, Union

from bs_pricer.config import SolverConfig
from bs_pricer.logger import get_logger
from bs_pricer.pricing.black_scholes import PERCENT, OptionType, PricingModel

logger = get_logger(__name__)


class SolverError(Exception):
    """
    Base class for implied volatility failures.

    Attributes:
        volatility: Last volatility tried before giving up
        iterations: Number of iterations performed
    """

    def __init__(self, message: str, volatility: float, iterations: int):
        super().__init__(message)
        self.volatility = volatility
        self.iterations = iterations


class VegaTooSmallError(SolverError):
    """Vega fell below the solver's minimum; a Newton step would be unsafe."""

    def __init__(self, volatility: float, iterations: int, vega: float):
        super().__init__(
            f"Vega too small ({vega:.3e}) at volatility {volatility:.6f}, cannot converge",
            volatility,
            iterations,
        )
        self.vega = vega


class ConvergenceError(SolverError):
    """The iteration budget ran out before the price matched."""

    def __init__(self, volatility: float, iterations: int):
        super().__init__(
            f"Implied volatility failed to converge after {iterations} iterations "
            f"(last volatility tried: {volatility:.6f})",
            volatility,
            iterations,
        )


@dataclass(frozen=True)
class ImpliedVolResult:
    """Converged volatility together with solver diagnostics."""
    volatility: float
    iterations: int
    price_error: float


class ImpliedVolatilitySolver:
    """
    Newton-Raphson implied volatility solver.

    The search starts from a fixed guess (not derived from the inputs),
    tests convergence on the absolute price difference before looking at
    vega, and resets any non-positive step to the volatility floor.
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        """
        Args:
            config: Solver settings (defaults: start 0.2, 100 iterations,
                tolerance 1e-8, min vega 1e-10, floor 0.001)
        """
        self.config = config or SolverConfig()

    def solve_result(
        self,
        model: PricingModel,
        market_price: float,
        option_type: Union[OptionType, str] = OptionType.CALL,
        max_iterations: Optional[int] = None,
        tolerance: Optional[float] = None,
    ) -> ImpliedVolResult:
        """
        Solve for the volatility that reproduces market_price.

        Args:
            model: Pricing parameters; its standard_deviation is ignored
            market_price: Observed option price
            option_type: OptionType.CALL / OptionType.PUT (or 'call' / 'put')
            max_iterations: Overrides config.max_iterations
            tolerance: Overrides config.tolerance (absolute price difference)

        Returns:
            ImpliedVolResult with the converged volatility

        Raises:
            VegaTooSmallError: If vega drops below config.min_vega
            ConvergenceError: If max_iterations is exhausted
        """
        option_type = OptionType.coerce(option_type)
        if max_iterations is None:
            max_iterations = self.config.max_iterations
        if tolerance is None:
            tolerance = self.config.tolerance

        vol = self.config.initial_volatility

        for iteration in range(1, max_iterations + 1):
            trial = model.with_overrides(standard_deviation=vol)
            price = trial.price(option_type)
            vega = trial.greeks(option_type).vega * PERCENT
            diff = price - market_price

            logger.debug(
                f"Iteration {iteration}: vol={vol:.8f}, price={price:.8f}, "
                f"diff={diff:.3e}, vega={vega:.6f}"
            )

            if abs(diff) < tolerance:
                logger.info(
                    f"Implied volatility converged to {vol:.6f} "
                    f"after {iteration} iterations"
                )
                return ImpliedVolResult(
                    volatility=vol,
                    iterations=iteration,
                    price_error=diff,
                )

            if abs(vega) < self.config.min_vega:
                logger.warning(
                    f"Vega {vega:.3e} below {self.config.min_vega:.0e} "
                    f"at vol={vol:.6f} (iteration {iteration})"
                )
                raise VegaTooSmallError(vol, iteration, vega)

            vol = vol - diff / vega

            if vol <= 0:
                vol = self.config.volatility_floor

        logger.warning(
            f"No convergence after {max_iterations} iterations "
            f"for market price {market_price:.6f}"
        )
        raise ConvergenceError(vol, max_iterations)

    def solve(
        self,
        model: PricingModel,
        market_price: float,
        option_type: Union[OptionType, str] = OptionType.CALL,
        max_iterations: Optional[int] = None,
        tolerance: Optional[float] = None,
    ) -> float:
        """Like solve_result() but returns only the volatility."""
        return self.solve_result(
            model, market_price, option_type, max_iterations, tolerance
        ).volatility


def implied_volatility(
    model: PricingModel,
    market_price: float,
    option_type: Union[OptionType, str] = OptionType.CALL,
    max_iterations: int = 100,
    tolerance: float = 1e-8,
) -> float:
    """
    Compute the volatility implied by an observed option price.

    Args:
        model: Spot, strike, expiry and rate of the option; the model is
            left unchanged
        market_price: Observed option price
        option_type: OptionType.CALL / OptionType.PUT (or 'call' / 'put')
        max_iterations: Maximum Newton iterations
        tolerance: Absolute price tolerance

    Returns:
        Implied volatility

    Raises:
        VegaTooSmallError: If vega becomes too flat for a Newton step
        ConvergenceError: If max_iterations is exhausted
    """
    return ImpliedVolatilitySolver().solve(
        model, market_price, option_type, max_iterations, tolerance
    )
