"""
Cryptify - Command Line Entry Point

Usage:
    # Playfair
    cryptify playfair encrypt --key MONARCHY "instruments"
    cryptify playfair matrix --key MONARCHY

    # RSA
    cryptify rsa encrypt --p 17 --q 11 "Hi"
    cryptify rsa decrypt --p 17 --q 11 "[72,105]"
    cryptify rsa keyinfo --p 61 --q 53

    # Prime suggestions
    cryptify primes --exclude 17 --limit 5
"""

import argparse
import logging
import sys
from typing import List, Optional

from .constants import APP_DESCRIPTION, APP_NAME, APP_VERSION, DEFAULT_RSA_PRIMES
from .core_crypto.digraph_cipher import DigraphCipher
from .core_crypto.errors import CipherError
from .core_crypto.modular_cipher import ModularCipher, parse_prime
from .core_crypto.number_theory import suggest_primes
from .toolkit import process_text


def _read_text(text: Optional[str]) -> str:
    """Use the TEXT argument, or stdin when it was omitted."""
    if text is not None:
        return text
    return sys.stdin.read().rstrip("\n")


def run_playfair(args: argparse.Namespace) -> None:
    if args.action == 'matrix':
        for row in DigraphCipher(args.key).matrix_snapshot():
            print(" ".join(row))
        return

    result = process_text('playfair', args.action, _read_text(args.text), key=args.key)
    print(result.output)


def run_rsa(args: argparse.Namespace) -> None:
    if args.action == 'keyinfo':
        cipher = ModularCipher(parse_prime(args.p), parse_prime(args.q))
        for name, value in cipher.key_info().items():
            print(f"{name:>4} = {value}")
        return

    result = process_text('rsa', args.action, _read_text(args.text), p=args.p, q=args.q)
    print(result.output)


def run_primes(args: argparse.Namespace) -> None:
    print(" ".join(str(p) for p in suggest_primes(args.exclude, args.limit)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cryptify',
        description=f'{APP_NAME}: {APP_DESCRIPTION}',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {APP_VERSION}')
    parser.add_argument('-v', '--verbose', action='store_true', help='enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='available commands')

    # playfair
    playfair_parser = subparsers.add_parser('playfair', help='Playfair digraph cipher')
    playfair_parser.add_argument('action', choices=['encrypt', 'decrypt', 'matrix'])
    playfair_parser.add_argument('--key', required=True, help='keyword for the 5x5 matrix')
    playfair_parser.add_argument('text', nargs='?', default=None, help='input text (default: stdin)')
    playfair_parser.set_defaults(handler=run_playfair)

    # rsa
    default_p, default_q = DEFAULT_RSA_PRIMES
    rsa_parser = subparsers.add_parser('rsa', help='textbook RSA per character')
    rsa_parser.add_argument('action', choices=['encrypt', 'decrypt', 'keyinfo'])
    rsa_parser.add_argument('--p', default=str(default_p), help=f'first prime (default {default_p})')
    rsa_parser.add_argument('--q', default=str(default_q), help=f'second prime (default {default_q})')
    rsa_parser.add_argument('text', nargs='?', default=None,
                            help='input text, or a JSON array for decrypt (default: stdin)')
    rsa_parser.set_defaults(handler=run_rsa)

    # primes
    primes_parser = subparsers.add_parser('primes', help='suggest primes for RSA')
    primes_parser.add_argument('--exclude', type=int, nargs='*', default=[], help='primes to skip')
    primes_parser.add_argument('--limit', type=int, default=10, help='number of suggestions')
    primes_parser.set_defaults(handler=run_primes)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for Cryptify."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.handler(args)
    except CipherError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
