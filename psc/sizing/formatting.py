"""Console rendering of sizing results and settings."""

from typing import Optional

from psc.sizing.models import Instrument, LeverageConfig, PricingKind, SizingResult


DISTANCE_DECIMALS = 2
CURRENCY_DECIMALS = 2
LOT_DECIMALS = 3
PRICE_DECIMALS = 3

_DISTANCE_UNITS: dict[PricingKind, str] = {
    PricingKind.FX: "pips",
    PricingKind.GOLD: "$",
    PricingKind.INDEX_CFD: "pts",
}


def format_number(value: float, decimals: int) -> str:
    """Fixed-precision number with thousands separators; ``None`` shows as 0."""
    return f"{(value or 0.0):,.{decimals}f}"


def format_result(result: SizingResult, instrument: Optional[Instrument] = None) -> str:
    """Render a sizing result as the calculator's stat panel.

    Args:
        result: Output of ``compute_sizing``.
        instrument: Resolved instrument, used for the header and distance
            unit.  ``None`` renders a generic header.

    Returns:
        The formatted multi-line string.
    """
    if instrument is not None:
        title = instrument.label
        unit = _DISTANCE_UNITS[instrument.kind]
    else:
        title = "unknown instrument"
        unit = "pips/$/pts"

    lines = [
        f"──────────── Position Size: {title} ────────────",
        f"  Direction:              {result.resolved_direction.value.upper()}",
        f"{'  Distance (' + unit + '):':<26}"
        f"{format_number(result.normalized_distance, DISTANCE_DECIMALS)}",
        f"  Position Size (lots):   {format_number(result.lot_size, LOT_DECIMALS)}",
        f"  Margin per 1 lot ($):   {format_number(result.margin_per_lot, CURRENCY_DECIMALS)}",
        f"  Required Margin ($):    {format_number(result.required_margin, CURRENCY_DECIMALS)}",
        f"  Reward ($):             {format_number(result.reward_usd, CURRENCY_DECIMALS)}",
        f"  TP price (R/R 1:2):     {format_number(result.take_profit_price, PRICE_DECIMALS)}",
        "──────────────────────────────────────────────────",
    ]
    return "\n".join(lines)


def format_settings(config: LeverageConfig) -> str:
    """Render the global settings panel."""
    lines = [
        "──────────────── Global Settings ────────────────",
        f"  FX Leverage (EURUSD/GBPUSD):     {config.fx_leverage:g}",
        f"  Gold Leverage (XAUUSD):          {config.gold_leverage:g}",
        f"  GER40 Leverage:                  {config.index_leverage:g}",
        f"  GER40 point value (EUR/pt/lot):  {config.index_point_value_base:g}",
        f"  EURUSD rate (GER40 conversion):  {config.quote_conversion_rate:g}",
        "──────────────────────────────────────────────────",
    ]
    return "\n".join(lines)
