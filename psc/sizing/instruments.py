"""Instrument registry — static catalog of tradable symbols.

Lookups never raise: an unknown id resolves to ``None`` and the sizing
engine turns that into a zero-valued result.
"""

from typing import Optional

from psc.sizing.models import Instrument, PricingKind


INSTRUMENT_REGISTRY: dict[str, Instrument] = {
    "EURUSD": Instrument("EURUSD", "EURUSD (FX)", PricingKind.FX, pip_size=0.0001),
    "GBPUSD": Instrument("GBPUSD", "GBPUSD (FX)", PricingKind.FX, pip_size=0.0001),
    "XAUUSD": Instrument("XAUUSD", "XAUUSD (Gold)", PricingKind.GOLD),
    "GER40": Instrument("GER40", "GER40 (DAX)", PricingKind.INDEX_CFD),
}


def resolve(instrument_id: str) -> Optional[Instrument]:
    """Return the instrument with exactly this id, or ``None``."""
    return INSTRUMENT_REGISTRY.get(instrument_id)


def list_instruments() -> list[Instrument]:
    """All registered instruments in display order."""
    return list(INSTRUMENT_REGISTRY.values())
