#!/usr/bin/env python3
"""
LZW Decoder

Reverses lzw_encode: reads code words and rebuilds the dictionary in
lockstep with the encoder. The decoder must use the same min_bits and
max_bits as the encoder, the stream doesn't record them.

Edge cases handled:
- Empty stream: empty output
- Escape code (all ones at the current width, below max_bits): widen by one
  bit and read the next code word
- Code not yet in dictionary (codeword == next_code): the "KwKwK" case,
  current = prev + first byte of prev
- Dictionary full: stop adding entries (freeze), like the encoder
"""

import io
import sys

from bitio import BitReader
from lzw_dictionary import FIRST_CODE, MAX_CODE_LEN
from lzw_encode import MIN_CODE_LEN, check_code_lengths


def decode(reader, out, min_bits=MIN_CODE_LEN, max_bits=MAX_CODE_LEN, log=False, log_file=None):
    """
    Decode code words from 'reader' (a BitReader) into the binary stream 'out'.

    Returns False if the stream holds no code words, True otherwise.
    Raises ValueError on codes the encoder could not have written.
    """
    check_code_lengths(min_bits, max_bits)
    if log_file is None:
        log_file = sys.stdout

    dictionary = {i: bytes([i]) for i in range(FIRST_CODE)}
    next_code = FIRST_CODE
    max_codes = 1 << max_bits
    code_bits = min_bits

    codeword = reader.read_code(code_bits)
    if codeword is None:
        return False

    if codeword >= FIRST_CODE:
        raise ValueError(f"Invalid first codeword: {codeword}")

    prev = dictionary[codeword]
    out.write(prev)

    while True:
        codeword = reader.read_code(code_bits)
        if codeword is None:
            break

        if codeword == (1 << code_bits) - 1 and code_bits < max_bits:
            code_bits += 1
            if log:
                print(f"[BITS] Increased to {code_bits} bits", file=log_file)
            continue

        if codeword < next_code:
            current = dictionary[codeword]
        elif codeword == next_code:
            current = prev + prev[:1]
        else:
            raise ValueError(f"Invalid codeword: {codeword}")

        out.write(current)
        if log:
            print(f"[DECODE] Code {codeword} -> {len(current)} bytes (bits={code_bits})", file=log_file)

        if next_code < max_codes:
            dictionary[next_code] = prev + current[:1]
            next_code += 1

        prev = current

    return True


def decode_bytes(data, min_bits=MIN_CODE_LEN, max_bits=MAX_CODE_LEN):
    """Decode an in-memory compressed stream and return the original bytes."""
    out = io.BytesIO()
    with BitReader(io.BytesIO(data)) as reader:
        decode(reader, out, min_bits, max_bits)
    return out.getvalue()


def decompress(input_file, output_file, min_bits=MIN_CODE_LEN, max_bits=MAX_CODE_LEN, log=False):
    """Decompress 'input_file' into 'output_file'."""
    check_code_lengths(min_bits, max_bits)

    with BitReader(input_file) as reader:
        with open(output_file, 'wb') as out:
            decode(reader, out, min_bits, max_bits, log)

    print(f"Decompressed: {input_file} -> {output_file}")
