#!/usr/bin/env python3
"""
SMS Utils - Main Entry Point
============================

Command-line access to the SMS codecs.

Usage:
    python main.py --encode-phone 782334124     # Phone number to XXX-XXX code
    python main.py --decode-phone QA2-Y5C       # Code back to phone number
    python main.py --minutes 1440               # Validity code for a duration
    python main.py --validity 2026-10-18T12:00:00+03:00
    python main.py --show outgoing/msg.sms      # Print a message file
    python main.py --stamp outgoing/msg.sms     # Set Validity from Valid_until
    python main.py --help                       # Show help
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import load_config, Config
from core.logging import setup_logging, get_logger
from core.exceptions import SMSUtilsError
from sms.message import SmsMessage
from sms.phone import encode_phone_number, decode_phone_code
from sms.validity import apply_validity, compute_validity, minutes_to_validity

logger = get_logger("main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="SMS Utils - message envelope, validity and phone code tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --encode-phone 782334124
  python main.py --decode-phone qa2y5c
  python main.py --validity 2026-10-18T12:00:00Z --mock
  python main.py --stamp spool/outgoing/msg.sms
        """
    )

    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument(
        "--encode-phone",
        metavar="NUMBER",
        help="Encode a 9-digit phone number as an XXX-XXX code"
    )
    mode_group.add_argument(
        "--decode-phone",
        metavar="CODE",
        help="Decode an XXX-XXX code to its 9-digit phone number"
    )
    mode_group.add_argument(
        "--minutes",
        type=int,
        metavar="N",
        help="Print the validity code for N minutes"
    )
    mode_group.add_argument(
        "--validity",
        metavar="ISO",
        help="Print the validity code for an ISO 8601 expiry with offset"
    )
    mode_group.add_argument(
        "--show",
        metavar="FILE",
        help="Print the headers and body of a message file"
    )
    mode_group.add_argument(
        "--stamp",
        metavar="FILE",
        help="Set the Validity header of a message file from its Valid_until header"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Treat seconds as minutes when computing validity"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def print_validity(validity: int) -> int:
    """Print a validity code, returning the exit status."""
    if validity < 0:
        print("expired")
        return 1
    print(validity)
    return 0


def run_show(config: Config, path: str) -> int:
    """Print a message file."""
    message = SmsMessage.read_file(path, encoding=config.envelope.encoding)

    for name, value in message.headers.items():
        print(f"{name}: {value}")
    print("-" * 30)
    print(message.body)
    return 0


def run_stamp(config: Config, path: str, mock: bool) -> int:
    """Compute and store the Validity header of a message file."""
    message = SmsMessage.read_file(path, encoding=config.envelope.encoding)

    # Command line or config forces mock, otherwise the message's Mock header decides
    validity = apply_validity(message, mock=True if mock else None)
    message.write_file(path, encoding=config.envelope.encoding)

    logger.info(f"Stamped {path} with validity {validity}")
    return print_validity(validity)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)

        if args.debug:
            config.debug = True

        setup_logging(
            log_dir=config.logging.log_dir or None,
            log_level=config.log_level,
            json_format=config.logging.json_format,
            console_output=config.logging.console_output
        )
        logger.debug(f"Configuration: {config.to_dict()}")

        mock = args.mock or config.validity.mock

        if args.encode_phone is not None:
            print(encode_phone_number(args.encode_phone))
        elif args.decode_phone is not None:
            print(decode_phone_code(args.decode_phone))
        elif args.minutes is not None:
            return print_validity(minutes_to_validity(args.minutes))
        elif args.validity is not None:
            return print_validity(compute_validity(args.validity, mock=mock))
        elif args.show is not None:
            return run_show(config, args.show)
        elif args.stamp is not None:
            return run_stamp(config, args.stamp, mock)

        return 0

    except SMSUtilsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
