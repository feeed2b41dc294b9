"""Tests for psc.state.store — persisted calculator state."""

import json

import pytest

from psc.sizing.models import DirectionPreference, LeverageConfig, TradeRequest
from psc.state.store import STATE_KEY, AppState, StateStore


class TestAppState:
    def test_defaults(self):
        state = AppState.default()
        assert state.show_settings_panel is False
        assert state.settings == LeverageConfig()
        assert state.last_inputs.instrument_id == "EURUSD"

    def test_with_input_returns_new_state(self):
        state = AppState.default()
        updated = state.with_input("entry_price", "1,2")
        assert updated.last_inputs.entry_price == "1,2"
        assert state.last_inputs.entry_price == "1.585"

    def test_with_input_direction(self):
        state = AppState.default().with_input("direction_preference", "short")
        assert state.last_inputs.direction_preference == DirectionPreference.SHORT

    def test_with_input_unknown_field(self):
        with pytest.raises(KeyError):
            AppState.default().with_input("colour", "red")

    def test_with_setting_coerces(self):
        state = AppState.default().with_setting("fx_leverage", "abc")
        assert state.settings.fx_leverage == 0.0
        assert state.settings.gold_leverage == 9.0

    def test_toggle_and_reset(self):
        state = AppState.default().toggle_settings_panel().with_setting("gold_leverage", 20)
        assert state.show_settings_panel is True
        reset = state.reset_settings()
        assert reset.settings == LeverageConfig()
        assert reset.show_settings_panel is True


class TestStateStore:
    def test_missing_file_returns_defaults(self, tmp_path):
        store = StateStore(str(tmp_path / "state.json"))
        assert store.load() == AppState.default()

    def test_save_then_load(self, tmp_path):
        store = StateStore(str(tmp_path / "nested" / "state.json"))
        state = (
            AppState.default()
            .with_input("instrument_id", "XAUUSD")
            .with_input("entry_price", "1900")
            .with_setting("gold_leverage", "20")
            .toggle_settings_panel()
        )
        store.save(state)
        assert store.load() == state

    def test_saved_file_uses_versioned_key(self, tmp_path):
        path = tmp_path / "state.json"
        StateStore(str(path)).save(AppState.default())
        document = json.loads(path.read_text(encoding="utf-8"))
        assert list(document) == [STATE_KEY]
        assert document[STATE_KEY]["settings"]["fx_leverage"] == 30.0
        assert document[STATE_KEY]["last_inputs"]["direction_preference"] == "auto"

    def test_malformed_json_falls_back(self, tmp_path, caplog):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level("WARNING", logger="psc.state"):
            state = StateStore(str(path)).load()
        assert state == AppState.default()
        assert "unreadable state file" in caplog.text

    @pytest.mark.parametrize(
        "document",
        [
            [],
            {"OTHER_KEY": {}},
            {STATE_KEY: "oops"},
            {STATE_KEY: {"settings": [1, 2]}},
        ],
    )
    def test_wrong_shape_falls_back(self, tmp_path, document):
        path = tmp_path / "state.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        assert StateStore(str(path)).load() == AppState.default()

    def test_partial_blob_merges_over_defaults(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text(
            json.dumps({STATE_KEY: {"settings": {"fx_leverage": 50}}}),
            encoding="utf-8",
        )
        state = StateStore(str(path)).load()
        assert state.settings.fx_leverage == 50.0
        assert state.settings.gold_leverage == 9.0
        assert state.last_inputs == AppState.default().last_inputs

    def test_custom_default_settings(self, tmp_path):
        defaults = LeverageConfig(fx_leverage=100)
        store = StateStore(str(tmp_path / "state.json"), default_settings=defaults)
        assert store.load().settings.fx_leverage == 100


class TestStoredValues:
    def test_string_direction_request_saves_and_loads(self, tmp_path):
        store = StateStore(str(tmp_path / "state.json"))
        request = TradeRequest("EURUSD", "1.2", "1.195", "500", "long")
        store.save(AppState(last_inputs=request))
        loaded = store.load()
        assert loaded.last_inputs.direction_preference == DirectionPreference.LONG
        assert loaded.last_inputs == request

    def test_string_direction_request_as_defaults(self):
        defaults = TradeRequest(direction_preference="short")
        req = TradeRequest.from_dict({}, defaults=defaults)
        assert req.direction_preference == DirectionPreference.SHORT

    @pytest.mark.parametrize("stored", ["false", "true", 1, None])
    def test_non_boolean_panel_flag_uses_default(self, tmp_path, stored):
        path = tmp_path / "state.json"
        path.write_text(
            json.dumps({STATE_KEY: {"show_settings_panel": stored}}),
            encoding="utf-8",
        )
        assert StateStore(str(path)).load().show_settings_panel is False

    def test_boolean_panel_flag_kept(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text(
            json.dumps({STATE_KEY: {"show_settings_panel": True}}),
            encoding="utf-8",
        )
        assert StateStore(str(path)).load().show_settings_panel is True
