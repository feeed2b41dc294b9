"""Persisted calculator state — one JSON blob under a versioned key.

The blob holds the settings-panel flag, the leverage settings and the last
trade inputs.  A missing or malformed file never fails a load: the store
falls back to defaults and logs a warning.
"""

import json
import logging
import os
import pathlib
import tempfile
from dataclasses import dataclass, field, replace
from typing import Optional

from psc.sizing.models import LeverageConfig, TradeRequest


STATE_KEY = "PSC_STATE_V1"

logger = logging.getLogger("psc.state")


@dataclass(frozen=True)
class AppState:
    """Everything the calculator remembers between runs."""

    show_settings_panel: bool = False
    settings: LeverageConfig = field(default_factory=LeverageConfig)
    last_inputs: TradeRequest = field(default_factory=TradeRequest)

    @classmethod
    def default(cls, settings: Optional[LeverageConfig] = None) -> "AppState":
        return cls(settings=settings or LeverageConfig())

    # ── Updates (each returns a new state) ───────────────────────────────

    def with_input(self, name: str, value) -> "AppState":
        """Replace one trade input, e.g. ``with_input("entry_price", "1,2")``."""
        inputs = self.last_inputs.to_dict()
        if name not in inputs:
            raise KeyError(f"Unknown trade input '{name}'")
        inputs[name] = value
        return replace(self, last_inputs=TradeRequest.from_dict(inputs))

    def with_setting(self, name: str, value) -> "AppState":
        """Replace one leverage setting; non-numeric values become 0."""
        if name not in LeverageConfig.__dataclass_fields__:
            raise KeyError(f"Unknown setting '{name}'")
        return replace(
            self, settings=LeverageConfig.from_raw({name: value}, defaults=self.settings)
        )

    def toggle_settings_panel(self) -> "AppState":
        return replace(self, show_settings_panel=not self.show_settings_panel)

    def reset_settings(self, defaults: Optional[LeverageConfig] = None) -> "AppState":
        return replace(self, settings=defaults or LeverageConfig())

    # ── Serialization ────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "show_settings_panel": self.show_settings_panel,
            "settings": self.settings.to_dict(),
            "last_inputs": self.last_inputs.to_dict(),
        }

    @classmethod
    def from_dict(cls, raw: dict, defaults: "AppState") -> "AppState":
        """Merge a stored mapping over *defaults*; unknown keys are ignored."""
        settings = raw.get("settings", {})
        inputs = raw.get("last_inputs", {})
        panel = raw.get("show_settings_panel")
        if not isinstance(settings, dict) or not isinstance(inputs, dict):
            raise ValueError("settings and last_inputs must be objects")
        return cls(
            show_settings_panel=panel if isinstance(panel, bool) else defaults.show_settings_panel,
            settings=LeverageConfig.from_raw(settings, defaults=defaults.settings),
            last_inputs=TradeRequest.from_dict(inputs, defaults=defaults.last_inputs),
        )


class StateStore:
    """File-backed store for ``AppState``.

    Args:
        path: JSON file holding ``{"PSC_STATE_V1": {...}}``.
        default_settings: Settings used when nothing valid is stored.
    """

    def __init__(
        self,
        path: str,
        default_settings: Optional[LeverageConfig] = None,
    ) -> None:
        self._path = pathlib.Path(path)
        self._defaults = AppState.default(default_settings)

    @property
    def path(self) -> pathlib.Path:
        return self._path

    def load(self) -> AppState:
        """Return the stored state, or defaults if there is none usable."""
        if not self._path.is_file():
            return self._defaults
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
            blob = document[STATE_KEY]
            if not isinstance(blob, dict):
                raise ValueError(f"{STATE_KEY} must be an object")
            return AppState.from_dict(blob, self._defaults)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning(
                "Ignoring unreadable state file %s (%s); using defaults.",
                self._path, exc,
            )
            return self._defaults

    def save(self, state: AppState) -> None:
        """Write *state*, replacing the file atomically."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({STATE_KEY: state.to_dict()}, indent=2)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=self._path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("Saved state to %s", self._path)
