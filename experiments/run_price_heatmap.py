#!/usr/bin/env python3
"""
Price and Greek Heat Maps

Renders call and put heat maps over a strike x volatility grid, plus
Greek-versus-strike curves, for the scenario in a YAML config (or the
textbook defaults).

Usage:
    python experiments/run_price_heatmap.py [--config scenario.yaml] [--output results/heatmaps]
"""

import argparse
from pathlib import Path

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from bs_pricer.analysis import GREEK_NAMES, greek_vs_strike, strike_volatility_grid
from bs_pricer.config import PricingConfig, get_default_config
from bs_pricer.logger import setup_logger
from bs_pricer.pricing import OptionType

logger = setup_logger(name="bs_pricer", log_level="INFO")


def plot_heatmaps(config: PricingConfig, output_dir: Path) -> None:
    """One figure per option type: price plus the five Greeks."""
    market = config.market

    for option_type in OptionType:
        grid = strike_volatility_grid(
            market.spot_price,
            market.time_to_expiry,
            market.risk_free_rate,
            option_type,
            config.grid,
        )

        fig, axes = plt.subplots(2, 3, figsize=(18, 10))
        panels = [('price', grid.prices)] + [(name, grid.greek(name)) for name in GREEK_NAMES]

        for ax, (title, values) in zip(axes.flat, panels):
            image = ax.imshow(values, origin='lower', aspect='auto', cmap='RdYlGn')
            ax.set_xticks(range(len(grid.strikes)))
            ax.set_xticklabels([f"{k:g}" for k in grid.strikes], rotation=45)
            ax.set_yticks(range(len(grid.volatilities)))
            ax.set_yticklabels([f"{v:.2f}" for v in grid.volatilities])
            ax.set_xlabel('Strike', fontsize=11)
            ax.set_ylabel('Volatility', fontsize=11)
            ax.set_title(title.capitalize(), fontsize=13, fontweight='bold')
            fig.colorbar(image, ax=ax)

        fig.suptitle(
            f"{option_type.value.upper()}  S={market.spot_price:g}  "
            f"T={market.time_to_expiry:g}  r={market.risk_free_rate:g}",
            fontsize=15,
        )
        plt.tight_layout()
        path = output_dir / f"heatmap_{option_type.value}.png"
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        logger.info(f"Saved {path}")


def plot_greek_curves(config: PricingConfig, output_dir: Path) -> None:
    """Greek-versus-strike curves for calls and puts."""
    market = config.market
    fig, axes = plt.subplots(1, len(GREEK_NAMES), figsize=(24, 4.5))

    for ax, greek in zip(axes, GREEK_NAMES):
        for option_type in OptionType:
            strikes, values = greek_vs_strike(
                greek,
                option_type,
                spot_price=market.spot_price,
                time_to_expiry=market.time_to_expiry,
                risk_free_rate=market.risk_free_rate,
                volatility=market.volatility,
            )
            ax.plot(strikes, values, linewidth=2, label=option_type.value)
        ax.axvline(market.spot_price, color='grey', linestyle='--', alpha=0.6)
        ax.set_xlabel('Strike', fontsize=11)
        ax.set_title(greek.capitalize(), fontsize=13, fontweight='bold')
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    path = output_dir / "greeks_vs_strike.png"
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info(f"Saved {path}")


def main():
    parser = argparse.ArgumentParser(description="Render price and Greek heat maps")
    parser.add_argument("--config", type=str, default=None, help="YAML configuration file")
    parser.add_argument("--output", type=str, default="results/heatmaps", help="Output directory")
    args = parser.parse_args()

    config = PricingConfig.load(args.config) if args.config else get_default_config()
    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    logger.info(f"Rendering heat maps for '{config.name}' into {output_dir}")
    plot_heatmaps(config, output_dir)
    plot_greek_curves(config, output_dir)


if __name__ == "__main__":
    main()
