"""Sizing engine — pure math, no I/O.

Converts an entry / stop-loss pair and a dollar risk budget into lot size,
margin and a 1:2 reward projection for one instrument.

Formulas per pricing kind::

    fx         pips   = distance / pip_size
               lots   = risk / (pips × 10)                 # $10 per pip per lot
               margin = entry × 100 000 / fx_leverage      # 100k-unit lot
    gold       lots   = risk / (distance × 100)            # 100 oz per lot
               margin = entry × 100 / gold_leverage
    index-cfd  lots   = risk / (distance × rate × point_value)
               margin = entry / index_leverage × rate

Any quantity whose denominator (or entry) is not strictly positive is 0.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from psc.sizing.instruments import resolve
from psc.sizing.models import (
    Direction,
    DirectionPreference,
    Instrument,
    LeverageConfig,
    PricingKind,
    SizingResult,
    TradeRequest,
)
from psc.sizing.parsing import number_or_zero


REWARD_MULTIPLE = 2.0
FX_USD_PER_PIP_PER_LOT = 10.0
FX_UNITS_PER_LOT = 100_000.0
GOLD_OUNCES_PER_LOT = 100.0
DEFAULT_PIP_SIZE = 0.0001


@dataclass(frozen=True)
class _KindFigures:
    """Instrument-dependent part of a sizing result."""

    normalized_distance: float
    lot_size: float
    margin_per_lot: float


_ZERO_FIGURES = _KindFigures(0.0, 0.0, 0.0)


def _ratio(numerator: float, denominator: float) -> float:
    """``numerator / denominator``, or 0 when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator
    return 0.0


def _positive_or_zero(value: float) -> float:
    return value if value > 0 else 0.0


def resolve_direction(
    preference: DirectionPreference, entry: float, stop_loss: float
) -> Direction:
    """Resolve ``AUTO`` from the prices: long above the stop, otherwise short.

    Equal prices resolve to ``SHORT``.
    """
    if preference == DirectionPreference.LONG:
        return Direction.LONG
    if preference == DirectionPreference.SHORT:
        return Direction.SHORT
    return Direction.LONG if entry > stop_loss else Direction.SHORT


def take_profit(entry: float, distance: float, direction: Direction) -> float:
    """Price ``REWARD_MULTIPLE`` distances away from entry in the trade direction."""
    offset = REWARD_MULTIPLE * distance
    return entry + offset if direction == Direction.LONG else entry - offset


# ── Per-kind formulas ────────────────────────────────────────────────────


def _fx_figures(
    instrument: Instrument, entry: float, distance: float, risk: float,
    config: LeverageConfig,
) -> _KindFigures:
    pip_size = instrument.pip_size if instrument.pip_size and instrument.pip_size > 0 else DEFAULT_PIP_SIZE
    pips = distance / pip_size
    lots = _ratio(risk, pips * FX_USD_PER_PIP_PER_LOT)
    margin = _ratio(_positive_or_zero(entry) * FX_UNITS_PER_LOT, config.fx_leverage)
    return _KindFigures(pips, lots, margin)


def _gold_figures(
    instrument: Instrument, entry: float, distance: float, risk: float,
    config: LeverageConfig,
) -> _KindFigures:
    lots = _ratio(risk, distance * GOLD_OUNCES_PER_LOT)
    margin = _ratio(_positive_or_zero(entry) * GOLD_OUNCES_PER_LOT, config.gold_leverage)
    return _KindFigures(distance, lots, margin)


def _index_cfd_figures(
    instrument: Instrument, entry: float, distance: float, risk: float,
    config: LeverageConfig,
) -> _KindFigures:
    rate = _positive_or_zero(config.quote_conversion_rate)
    margin_quote = _ratio(_positive_or_zero(entry), config.index_leverage)
    lots = _ratio(risk, distance * rate * config.index_point_value_base)
    return _KindFigures(distance, lots, margin_quote * rate)


_KindFormula = Callable[[Instrument, float, float, float, LeverageConfig], _KindFigures]

KIND_FORMULAS: dict[PricingKind, _KindFormula] = {
    PricingKind.FX: _fx_figures,
    PricingKind.GOLD: _gold_figures,
    PricingKind.INDEX_CFD: _index_cfd_figures,
}

_missing = set(PricingKind) - set(KIND_FORMULAS)
if _missing:
    raise RuntimeError(
        f"No sizing formula for pricing kind(s): {', '.join(sorted(k.value for k in _missing))}"
    )


# ── Public entry point ───────────────────────────────────────────────────


def compute_sizing(
    request: TradeRequest,
    config: Optional[LeverageConfig] = None,
) -> SizingResult:
    """Size one trade.

    Args:
        request: Trader input; prices and risk may be raw strings.
        config: Leverage settings snapshot.  Defaults to ``LeverageConfig()``.

    Returns:
        A fresh ``SizingResult``.  Invalid input yields zeroes, never an
        exception.  Reward and take-profit do not depend on the instrument
        and are filled in even when the id is unknown.
    """
    config = config or LeverageConfig()

    entry = number_or_zero(request.entry_price)
    stop_loss = number_or_zero(request.stop_loss_price)
    risk = number_or_zero(request.risk_amount_usd)
    distance = abs(entry - stop_loss)

    direction = resolve_direction(
        DirectionPreference.parse(request.direction_preference), entry, stop_loss
    )

    instrument = resolve(request.instrument_id)
    if instrument is None:
        figures = _ZERO_FIGURES
    else:
        figures = KIND_FORMULAS[instrument.kind](instrument, entry, distance, risk, config)

    return SizingResult(
        price_distance=distance,
        normalized_distance=figures.normalized_distance,
        resolved_direction=direction,
        lot_size=figures.lot_size,
        margin_per_lot=figures.margin_per_lot,
        required_margin=figures.lot_size * figures.margin_per_lot,
        reward_usd=REWARD_MULTIPLE * risk,
        take_profit_price=take_profit(entry, distance, direction),
    )
