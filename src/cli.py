import argparse
import sys
from typing import List, Optional

from tailscan import __version__
from tailscan.alerts import Notifier
from tailscan.config import load_config, settings_from_config
from tailscan.errors import ConfigError, TailError
from tailscan.session import SessionSettings, TailSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tailscan",
        description="tailscan - copy new bytes from a rotating log file for a bounded session"
    )
    parser.add_argument(
        "-F", "--filepath",
        help="Absolute path of the log file to tail"
    )
    parser.add_argument(
        "-D", "--duration",
        type=float,
        help="Seconds the session runs (default: 0, a single poll)"
    )
    parser.add_argument(
        "-I", "--interval",
        type=float,
        help="Seconds between polls (default: 10)"
    )
    parser.add_argument(
        "-S", "--max-size",
        type=float,
        dest="max_size_mb",
        help="Size ceiling in MB; a stalled file past it counts as rotated (default: 1)"
    )
    parser.add_argument(
        "-R", "--max-retry",
        type=int,
        dest="max_retry",
        help="Polls without new data before the file counts as rotated (default: 5)"
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to a JSON/YAML configuration file"
    )
    parser.add_argument(
        "--test-alert",
        action="store_true",
        help="Send a test alert through the configured channels and exit"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    """Command line flags win over the config file."""
    session = config.setdefault("session", {})
    for key in ("duration", "interval", "max_size_mb", "max_retry"):
        value = getattr(args, key)
        if value is not None:
            session[key] = value
    return config


def run_test_alert(config: dict) -> None:
    print("[tailscan] Sending test alert...")
    Notifier(config).alert_all(
        "Test alert",
        "This is a test alert to confirm that your alert settings work."
    )
    print("[tailscan] Test alert sent. Check your Slack/email inbox.")


def run_session(path: str, settings: SessionSettings, config: dict) -> None:
    session = TailSession(path, settings, notifier=Notifier(config))
    session.run()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), args)
        settings = settings_from_config(config)
    except ConfigError as e:
        parser.error(str(e))

    if args.test_alert:
        run_test_alert(config)
        return 0

    if not args.filepath:
        parser.error("the following arguments are required: -F/--filepath")

    try:
        run_session(args.filepath, settings, config)
    except TailError as e:
        print(f"[tailscan] {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n[tailscan] Stopped by user.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
