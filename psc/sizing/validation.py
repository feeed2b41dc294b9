"""Input warnings that run alongside the sizing engine.

The engine silently turns bad input into zeroes.  ``validate_request``
explains those zeroes so a front end can show "incomplete" instead of a
valid-looking zero result.  It never changes the numbers.
"""

from psc.sizing.instruments import resolve
from psc.sizing.models import LeverageConfig, PricingKind, TradeRequest
from psc.sizing.parsing import is_number, number_or_zero


# Settings that feed each kind's formulas.
_KIND_SETTINGS: dict[PricingKind, tuple[str, ...]] = {
    PricingKind.FX: ("fx_leverage",),
    PricingKind.GOLD: ("gold_leverage",),
    PricingKind.INDEX_CFD: (
        "index_leverage",
        "index_point_value_base",
        "quote_conversion_rate",
    ),
}


def validate_request(request: TradeRequest, config: LeverageConfig) -> list[str]:
    """Return human-readable warnings for *request*; empty when it is complete."""
    warnings: list[str] = []

    for field_name, label in (
        ("entry_price", "entry price"),
        ("stop_loss_price", "stop-loss price"),
        ("risk_amount_usd", "risk amount"),
    ):
        raw = getattr(request, field_name)
        if not is_number(raw):
            warnings.append(f"{label} {raw!r} is not a number; using 0")

    entry = number_or_zero(request.entry_price)
    stop_loss = number_or_zero(request.stop_loss_price)
    risk = number_or_zero(request.risk_amount_usd)

    if entry <= 0:
        warnings.append("entry price must be positive; margin is 0")
    if entry == stop_loss:
        warnings.append("entry equals stop-loss; lot size is 0")
    if risk < 0:
        warnings.append("risk amount is negative")

    instrument = resolve(request.instrument_id)
    if instrument is None:
        warnings.append(f"unknown instrument {request.instrument_id!r}; lot size and margin are 0")
        return warnings

    for setting in _KIND_SETTINGS[instrument.kind]:
        if getattr(config, setting) <= 0:
            warnings.append(f"setting {setting} must be positive; dependent figures are 0")

    return warnings
