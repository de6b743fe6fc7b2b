"""Command-line tool: send one push notification or query receipts.

Usage:
    expo-push "ExpoPushToken[xxx]" --title Hello --body "from the CLI"
    expo-push --receipts XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX
"""

import argparse
import asyncio
import json
import logging
import sys

from pydantic import TypeAdapter

from expo_push.config import Settings, get_settings
from expo_push.errors import ExpoPushError
from expo_push.middleware.logging import setup_logging
from expo_push.schemas.message import Priority, PushMessage, PushToken, Sound
from expo_push.schemas.ticket import PushReceipt, PushTicket
from expo_push.services.push_service import get_push_notifier

logger = logging.getLogger(__name__)

_tickets_adapter = TypeAdapter(list[PushTicket])
_receipts_adapter = TypeAdapter(dict[str, PushReceipt])


def _push_token(value: str) -> PushToken:
    try:
        return PushToken.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _json_value(value: str):
    try:
        return json.loads(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid JSON: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expo-push", description="Send Expo push notifications")
    parser.add_argument("token", nargs="?", type=_push_token, help="Expo push token, e.g. ExpoPushToken[xxx]")
    parser.add_argument("-d", "--data", type=_json_value, help="JSON data in the push notification")
    parser.add_argument("--title", help="title in the push notification")
    parser.add_argument("--body", help="body in the push notification")
    parser.add_argument("-s", "--sound", action="store_true", help="play the default sound")
    parser.add_argument("--ttl", type=int, metavar="SECONDS", help="time to live in seconds")
    parser.add_argument("-e", "--expiration", type=int, metavar="SECONDS", help="expiration as epoch seconds")
    parser.add_argument("-p", "--priority", choices=[p.value for p in Priority])
    parser.add_argument("--badge", type=int)
    parser.add_argument(
        "--gzip",
        choices=["threshold", "never", "always"],
        help="request compression policy (default from settings)",
    )
    parser.add_argument("--receipts", nargs="+", metavar="ID", help="query receipts for ticket ids instead of sending")
    parser.add_argument("--debug", action="store_true")
    return parser


def build_message(args: argparse.Namespace) -> PushMessage:
    return PushMessage(
        to=args.token,
        data=args.data,
        title=args.title,
        body=args.body,
        sound=Sound.DEFAULT if args.sound else None,
        ttl=args.ttl,
        expiration=args.expiration,
        priority=args.priority,
        badge=args.badge,
    )


async def run(settings: Settings, message: PushMessage | None, receipt_ids: list[str] | None) -> str:
    """Send the message, or query receipts, and return the JSON output."""
    notifier = get_push_notifier(settings)
    if receipt_ids:
        receipts = await notifier.get_receipts(receipt_ids)
        return _receipts_adapter.dump_json(receipts, indent=2).decode()

    ticket = await notifier.send_one(message)
    return _tickets_adapter.dump_json([ticket], indent=2).decode()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.token is None and not args.receipts:
        parser.error("a push token is required unless --receipts is given")

    settings = get_settings()
    if args.gzip:
        settings = settings.model_copy(update={"gzip_policy": args.gzip})
    setup_logging(debug=args.debug or settings.debug)

    message = None
    if not args.receipts:
        try:
            message = build_message(args)
        except ValueError as e:
            parser.error(str(e))

    try:
        output = asyncio.run(run(settings, message, args.receipts))
    except ExpoPushError as e:
        logger.error("Push request failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
