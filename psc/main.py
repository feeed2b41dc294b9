"""Position Size Calculator — command-line entry point.

Reads trade inputs from flags (falling back to the last saved inputs),
computes the sizing and prints the result panel.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from psc.config import load_config
from psc.sizing.engine import compute_sizing
from psc.sizing.formatting import format_result, format_settings
from psc.sizing.instruments import list_instruments, resolve
from psc.sizing.validation import validate_request
from psc.state.store import StateStore

logger = logging.getLogger("psc")

# flag dest → TradeRequest / LeverageConfig field
_INPUT_FLAGS = {
    "instrument": "instrument_id",
    "entry": "entry_price",
    "stop_loss": "stop_loss_price",
    "risk": "risk_amount_usd",
    "direction": "direction_preference",
}
_SETTING_FLAGS = {
    "fx_leverage": "fx_leverage",
    "gold_leverage": "gold_leverage",
    "index_leverage": "index_leverage",
    "index_point_value": "index_point_value_base",
    "quote_rate": "quote_conversion_rate",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="psc",
        description="Position size calculator (1:2 risk/reward)",
    )
    trade = parser.add_argument_group("trade inputs (default: last used)")
    trade.add_argument("--instrument", help="Instrument id, e.g. EURUSD")
    trade.add_argument("--entry", help="Entry price (comma or dot decimal)")
    trade.add_argument("--stop-loss", help="Stop-loss price")
    trade.add_argument("--risk", help="Risk amount in USD")
    trade.add_argument(
        "--direction",
        choices=["auto", "long", "short"],
        help="Trade direction (auto: by entry vs stop-loss)",
    )

    settings = parser.add_argument_group("settings (persisted)")
    settings.add_argument("--fx-leverage", help="FX leverage (EURUSD/GBPUSD)")
    settings.add_argument("--gold-leverage", help="Gold leverage (XAUUSD)")
    settings.add_argument("--index-leverage", help="GER40 leverage")
    settings.add_argument("--index-point-value", help="GER40 point value (EUR/pt/lot)")
    settings.add_argument("--quote-rate", help="EURUSD rate for GER40 conversion")
    settings.add_argument(
        "--reset-settings",
        action="store_true",
        help="Restore default settings before applying overrides",
    )
    settings.add_argument(
        "--settings",
        action="store_true",
        help="Toggle the settings panel on or off",
    )

    parser.add_argument(
        "--list-instruments",
        action="store_true",
        help="Print the available instruments and exit",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not persist inputs and settings",
    )
    parser.add_argument("--state-file", help="Override the state file path")
    return parser


def run(argv: Optional[Sequence[str]] = None) -> str:
    """Parse *argv*, compute the sizing and return the printed output."""
    args = build_parser().parse_args(argv)
    config = load_config()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.list_instruments:
        output = "\n".join(
            f"  {inst.id:<8} {inst.kind.value:<10} {inst.label}"
            for inst in list_instruments()
        )
        print(output)
        return output

    store = StateStore(
        args.state_file or config.state_path,
        default_settings=config.default_settings,
    )
    state = store.load()

    if args.reset_settings:
        state = state.reset_settings(config.default_settings)
    if args.settings:
        state = state.toggle_settings_panel()
    for flag, name in _SETTING_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            state = state.with_setting(name, value)
    for flag, name in _INPUT_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            state = state.with_input(name, value)

    request = state.last_inputs
    for warning in validate_request(request, state.settings):
        logger.warning("Incomplete input: %s", warning)

    result = compute_sizing(request, state.settings)

    sections = []
    if state.show_settings_panel:
        sections.append(format_settings(state.settings))
    sections.append(format_result(result, resolve(request.instrument_id)))
    output = "\n".join(sections)
    print(output)

    if not args.no_save:
        store.save(state)
    return output


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        run(argv)
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(2)
    except OSError as exc:
        logger.error("Could not save state: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
