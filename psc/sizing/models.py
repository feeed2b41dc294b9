"""Sizing data models — instruments, settings, requests and results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from psc.sizing.parsing import number_or_zero


class PricingKind(str, Enum):
    """Pricing formula family of an instrument."""

    FX = "fx"
    GOLD = "gold"
    INDEX_CFD = "index-cfd"


class Direction(str, Enum):
    """Resolved trade direction."""

    LONG = "long"
    SHORT = "short"


class DirectionPreference(str, Enum):
    """Direction requested by the trader; ``AUTO`` infers it from the prices."""

    AUTO = "auto"
    LONG = "long"
    SHORT = "short"

    @classmethod
    def parse(cls, value) -> "DirectionPreference":
        """Return the matching preference, or ``AUTO`` for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.AUTO


RawNumber = Union[str, int, float]


@dataclass(frozen=True)
class Instrument:
    """A tradable symbol and its pricing metadata."""

    id: str
    label: str
    kind: PricingKind
    pip_size: Optional[float] = None  # fx only


@dataclass(frozen=True)
class LeverageConfig:
    """User-adjustable leverage and conversion settings."""

    fx_leverage: float = 30.0
    gold_leverage: float = 9.0
    index_leverage: float = 15.0
    index_point_value_base: float = 1.0
    quote_conversion_rate: float = 1.1

    @classmethod
    def from_raw(cls, raw: dict, defaults: Optional["LeverageConfig"] = None) -> "LeverageConfig":
        """Build settings from user-typed values.

        Keys absent from *raw* keep their value from *defaults*.  Values that
        are present but not numeric become ``0.0``.
        """
        base = defaults or cls()
        values = {}
        for name in cls.__dataclass_fields__:
            if name in raw:
                values[name] = number_or_zero(raw[name])
            else:
                values[name] = getattr(base, name)
        return cls(**values)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


@dataclass(frozen=True)
class TradeRequest:
    """One calculation's worth of trader input, kept as typed."""

    instrument_id: str = "EURUSD"
    entry_price: RawNumber = "1.585"
    stop_loss_price: RawNumber = "1.58"
    risk_amount_usd: RawNumber = "500"
    direction_preference: DirectionPreference = DirectionPreference.AUTO

    def __post_init__(self) -> None:
        # Plain strings ("long") are accepted; store the enum member.
        object.__setattr__(
            self, "direction_preference", DirectionPreference.parse(self.direction_preference)
        )

    @classmethod
    def from_dict(cls, raw: dict, defaults: Optional["TradeRequest"] = None) -> "TradeRequest":
        """Build a request from a stored mapping, keeping *defaults* for gaps."""
        base = defaults or cls()
        return cls(
            instrument_id=str(raw.get("instrument_id", base.instrument_id)),
            entry_price=raw.get("entry_price", base.entry_price),
            stop_loss_price=raw.get("stop_loss_price", base.stop_loss_price),
            risk_amount_usd=raw.get("risk_amount_usd", base.risk_amount_usd),
            direction_preference=DirectionPreference.parse(
                raw.get("direction_preference", base.direction_preference.value)
            ),
        )

    def to_dict(self) -> dict:
        return {
            "instrument_id": self.instrument_id,
            "entry_price": self.entry_price,
            "stop_loss_price": self.stop_loss_price,
            "risk_amount_usd": self.risk_amount_usd,
            "direction_preference": self.direction_preference.value,
        }


@dataclass(frozen=True)
class SizingResult:
    """Output of ``compute_sizing``."""

    price_distance: float
    normalized_distance: float  # pips for fx, points for gold / index-cfd
    resolved_direction: Direction
    lot_size: float
    margin_per_lot: float
    required_margin: float
    reward_usd: float
    take_profit_price: float
