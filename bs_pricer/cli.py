#!/usr/bin/env python
"""
Command-line interface for Black-Scholes pricing.

Example usage:
    bs-price --spot 100 --strike 100 --time 1 --rate 0.05 --volatility 0.2
    bs-price --spot 100 --strike 100 --time 1 --rate 0.05 --implied-vol 12.3 --option-type call
    bs-price --config scenario.yaml --json
"""

import argparse
import json
import sys
from typing import List, Optional

from bs_pricer.analysis.grid import breakevens
from bs_pricer.config import InvalidParameterError, PricingConfig, get_default_config
from bs_pricer.logger import setup_logger
from bs_pricer.pricing.black_scholes import OptionType, PricingModel
from bs_pricer.pricing.implied_vol import ImpliedVolatilitySolver, SolverError


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="bs-price",
        description="Black-Scholes European option pricer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("--config", type=str, default=None,
                        help="YAML configuration file (flags override its values)")

    # Market parameters; None means "take from config"
    parser.add_argument("--spot", type=float, default=None, help="Spot price (S)")
    parser.add_argument("--strike", type=float, default=None, help="Strike price (K)")
    parser.add_argument("--time", type=float, default=None, help="Time to expiry in years (T)")
    parser.add_argument("--rate", type=float, default=None, help="Risk-free rate (r)")
    parser.add_argument("--volatility", type=float, default=None, help="Volatility (sigma)")
    parser.add_argument("--option-type", type=str, choices=["call", "put"], default=None,
                        help="Option type")

    # Implied volatility
    parser.add_argument("--implied-vol", type=float, default=None, metavar="MARKET_PRICE",
                        help="Solve for the volatility implied by this market price")
    parser.add_argument("--max-iterations", type=int, default=None,
                        help="Maximum solver iterations")
    parser.add_argument("--tolerance", type=float, default=None,
                        help="Solver tolerance on the absolute price difference")

    # Output
    parser.add_argument("--validate", action="store_true",
                        help="Reject non-positive or non-finite market parameters")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--log-level", type=str, default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")

    return parser.parse_args(args)


def build_config(parsed: argparse.Namespace) -> PricingConfig:
    """Merge the optional YAML config with explicit command-line flags."""
    config = PricingConfig.load(parsed.config) if parsed.config else get_default_config()

    overrides = {
        'spot_price': parsed.spot,
        'strike_price': parsed.strike,
        'time_to_expiry': parsed.time,
        'risk_free_rate': parsed.rate,
        'volatility': parsed.volatility,
        'option_type': parsed.option_type,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config.market, key, value)

    if parsed.max_iterations is not None:
        config.solver.max_iterations = parsed.max_iterations
    if parsed.tolerance is not None:
        config.solver.tolerance = parsed.tolerance
    if parsed.log_level is not None:
        config.log_level = parsed.log_level

    return config


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parsed = parse_args(args)
    config = build_config(parsed)
    logger = setup_logger(name="bs_pricer", log_level=config.log_level)

    if parsed.config:
        logger.info(f"Loaded configuration '{config.name}' from {parsed.config}")

    market = config.market
    option_type = OptionType.coerce(market.option_type)
    model = PricingModel.from_config(market)

    try:
        if parsed.validate:
            model.validate()

        result = {}
        if parsed.implied_vol is not None:
            solver = ImpliedVolatilitySolver(config.solver)
            solved = solver.solve_result(model, parsed.implied_vol, option_type)
            model = model.with_overrides(standard_deviation=solved.volatility)
            result['market_price'] = parsed.implied_vol
            result['implied_volatility'] = float(solved.volatility)
            result['iterations'] = solved.iterations
    except (InvalidParameterError, SolverError) as e:
        logger.error(str(e))
        return 1

    result.update({
        'option_type': option_type.value,
        'spot_price': model.spot_price,
        'strike_price': model.strike_price,
        'time_to_expiry': model.time_to_expiry,
        'risk_free_rate': model.risk_free_rate,
        'volatility': float(model.standard_deviation),
        'd1': float(model.d1()),
        'd2': float(model.d2()),
        'price': float(model.price(option_type)),
        'greeks': model.greeks(option_type).to_dict(),
    })

    call_breakeven, put_breakeven = breakevens(model)
    result['breakevens'] = {'call': float(call_breakeven), 'put': float(put_breakeven)}

    if parsed.json:
        print(json.dumps(result, indent=2))
        return 0

    print("=" * 50)
    print("Black-Scholes European Option")
    print("=" * 50)
    print(f"  Option Type:            {option_type.value.upper()}")
    print(f"  Spot Price (S):         {model.spot_price:,.4f}")
    print(f"  Strike Price (K):       {model.strike_price:,.4f}")
    print(f"  Time to Expiry (T):     {model.time_to_expiry:.4f} years")
    print(f"  Risk-free Rate (r):     {model.risk_free_rate:.4f}")
    if 'implied_volatility' in result:
        print(f"  Market Price:           {result['market_price']:.4f}")
        print(f"  Implied Volatility:     {result['implied_volatility']:.6f} "
              f"({result['iterations']} iterations)")
    else:
        print(f"  Volatility (σ):         {result['volatility']:.4f}")
    print("-" * 50)
    print(f"  Price:                  {result['price']:.4f}")
    for name, value in result['greeks'].items():
        print(f"  {name.capitalize() + ':':<24}{value:.6f}")
    print("-" * 50)
    print(f"  Call Break-even:        {result['breakevens']['call']:.4f}")
    print(f"  Put Break-even:         {result['breakevens']['put']:.4f}")
    print("=" * 50)

    return 0


if __name__ == "__main__":
    sys.exit(main())
