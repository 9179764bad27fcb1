"""Command-line entry point: ecdsa-quirks --m1 MSG --m2 MSG [--eip191]"""

import argparse
import logging
import sys

from .exceptions import QuirkError, UsageError
from .quirk import quirk

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ecdsa-quirks",
        description="Generate the same ECDSA signature for two different messages")
    parser.add_argument('--m1', '--message1', dest='message1', metavar='MSG', help="the first message")
    parser.add_argument('--m2', '--message2', dest='message2', metavar='MSG', help="the second message")
    parser.add_argument('--eip191', action='store_true', default=False,
                        help="EIP-191 hash the messages before signing")
    parser.add_argument('-v', '--verbose', action='store_true', help="enable debug logging")
    return parser


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        stream=sys.stderr,
    )


def check_messages(args):
    if not args.message1 or not args.message2:
        raise UsageError("Specify both messages to generate the signature for")


def print_quirked(message1, message2, quirked, out=None):
    out = out or sys.stdout
    print(f"Private key: {quirked.private_key_hex}", file=out)
    print(f"Address: {quirked.address}", file=out)
    print(file=out)
    print(f"Message1: {message1}", file=out)
    print(f"Signature1: {quirked.signature1_hex}", file=out)
    print(file=out)
    print(f"Message2: {message2}", file=out)
    print(f"Signature2: {quirked.signature2_hex}", file=out)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        check_messages(args)
    except UsageError as e:
        # prints usage to stderr and exits with status 2
        parser.error(str(e))

    try:
        quirked = quirk(args.message1, args.message2, args.eip191)
    except QuirkError as e:
        logger.error("%s", e)
        return 1
    except Exception:
        logger.exception("Signature generation failed")
        return 1

    print_quirked(args.message1, args.message2, quirked)
    return 0


if __name__ == '__main__':
    sys.exit(main())
