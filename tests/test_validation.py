"""Tests for psc.sizing.validation — input warnings."""

from psc.sizing.models import LeverageConfig, TradeRequest
from psc.sizing.validation import validate_request


def _warnings(**fields) -> list[str]:
    base = dict(
        instrument_id="EURUSD",
        entry_price="1.2",
        stop_loss_price="1.19",
        risk_amount_usd="100",
    )
    config = fields.pop("config", LeverageConfig())
    base.update(fields)
    return validate_request(TradeRequest(**base), config)


class TestValidateRequest:
    def test_complete_request_has_no_warnings(self):
        assert _warnings() == []

    def test_non_numeric_fields(self):
        warnings = _warnings(entry_price="abc", risk_amount_usd="")
        assert any("entry price 'abc'" in w for w in warnings)
        assert any("risk amount ''" in w for w in warnings)

    def test_zero_distance(self):
        warnings = _warnings(entry_price="1.2", stop_loss_price="1,2")
        assert any("entry equals stop-loss" in w for w in warnings)

    def test_non_positive_entry(self):
        warnings = _warnings(entry_price="0")
        assert any("entry price must be positive" in w for w in warnings)

    def test_unknown_instrument(self):
        warnings = _warnings(instrument_id="BTCUSD")
        assert any("unknown instrument 'BTCUSD'" in w for w in warnings)

    def test_zero_setting_for_kind(self):
        config = LeverageConfig(quote_conversion_rate=0)
        assert _warnings(config=config) == []  # fx ignores index settings
        warnings = _warnings(
            instrument_id="GER40",
            entry_price="18000",
            stop_loss_price="17950",
            config=config,
        )
        assert warnings == [
            "setting quote_conversion_rate must be positive; dependent figures are 0"
        ]
