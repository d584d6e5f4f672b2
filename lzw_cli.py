#!/usr/bin/env python3
"""
LZW Compression Tool

Usage:
    Compress:   python3 lzw_cli.py compress input.bin output.lzw
                python3 lzw_cli.py compress input.bin > output.lzw
    Decompress: python3 lzw_cli.py decompress input.lzw output.bin

Both sides must use the same --min-bits/--max-bits (defaults 9 and 20).

Exit status: 0 on success, 1 on error, 2 when the input to compress is empty.
"""

import sys
import argparse

from lzw_dictionary import DICTIONARIES, MAX_CODE_LEN
from lzw_encode import MIN_CODE_LEN, compress
from lzw_decode import decompress

EXIT_ERROR = 1
EXIT_EMPTY_INPUT = 2


def main(argv=None):
    """Parse command-line arguments and run compression or decompression."""
    parser = argparse.ArgumentParser(description='LZW compression (variable-width codes, 9-20 bits)')
    sub = parser.add_subparsers(dest='mode', required=True)

    # Compress subcommand
    c = sub.add_parser('compress')
    c.add_argument('input')
    c.add_argument('output', nargs='?', help='Output file (default: standard output)')
    c.add_argument('--min-bits', type=int, default=MIN_CODE_LEN)
    c.add_argument('--max-bits', type=int, default=MAX_CODE_LEN)
    c.add_argument('--dictionary', default='hash', choices=list(DICTIONARIES.keys()))
    c.add_argument('--log', action='store_true', help='Enable detailed logging')

    # Decompress subcommand
    d = sub.add_parser('decompress')
    d.add_argument('input')
    d.add_argument('output')
    d.add_argument('--min-bits', type=int, default=MIN_CODE_LEN)
    d.add_argument('--max-bits', type=int, default=MAX_CODE_LEN)
    d.add_argument('--log', action='store_true', help='Enable detailed logging')

    args = parser.parse_args(argv)

    try:
        if args.mode == 'compress':
            encoded = compress(args.input, args.output, args.min_bits, args.max_bits,
                               args.dictionary, args.log)
            if not encoded:
                print(f"Empty input: {args.input}, nothing to encode", file=sys.stderr)
                sys.exit(EXIT_EMPTY_INPUT)
        else:
            decompress(args.input, args.output, args.min_bits, args.max_bits, args.log)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)


if __name__ == '__main__':
    main()
