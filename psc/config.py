"""Position Size Calculator — application configuration.

Loads .env variables into a typed config object.
Validates numeric variables on startup.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from psc.sizing.models import LeverageConfig


_POSITIVE_FLOAT_VARS = {
    "PSC_FX_LEVERAGE": "30",
    "PSC_GOLD_LEVERAGE": "9",
    "PSC_INDEX_LEVERAGE": "15",
    "PSC_INDEX_POINT_VALUE": "1",
    "PSC_QUOTE_CONVERSION_RATE": "1.1",
}


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    fx_leverage: float
    gold_leverage: float
    index_leverage: float
    index_point_value: float
    quote_conversion_rate: float
    state_path: str
    log_level: str

    @property
    def default_settings(self) -> LeverageConfig:
        """Settings restored by "reset to defaults"."""
        return LeverageConfig(
            fx_leverage=self.fx_leverage,
            gold_leverage=self.gold_leverage,
            index_leverage=self.index_leverage,
            index_point_value_base=self.index_point_value,
            quote_conversion_rate=self.quote_conversion_rate,
        )


def _positive_float(name: str) -> float:
    raw = os.environ.get(name, _POSITIVE_FLOAT_VARS[name])
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Every variable is optional.  Raises ``ValueError`` naming the variable
    when a leverage or rate variable is not a positive number.
    """
    load_dotenv(dotenv_path=env_path)

    return Config(
        fx_leverage=_positive_float("PSC_FX_LEVERAGE"),
        gold_leverage=_positive_float("PSC_GOLD_LEVERAGE"),
        index_leverage=_positive_float("PSC_INDEX_LEVERAGE"),
        index_point_value=_positive_float("PSC_INDEX_POINT_VALUE"),
        quote_conversion_rate=_positive_float("PSC_QUOTE_CONVERSION_RATE"),
        state_path=os.environ.get("PSC_STATE_PATH", "data/psc_state.json"),
        log_level=os.environ.get("PSC_LOG_LEVEL", "INFO"),
    )
