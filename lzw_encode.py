#!/usr/bin/env python3
"""
LZW Encoder

Reads a byte stream and writes variable-width LZW code words.

Code space:
- 0-255: single bytes (never stored in the dictionary)
- 256 and up: strings added to the dictionary, one per mismatch
- Codes start 9 bits wide and grow one bit at a time up to max_bits (20)

Width growth is signalled in-band: before writing a code that doesn't fit
below the all-ones value of the current width, the encoder writes the
all-ones value itself (e.g. 511 at 9 bits) and widens by one bit. The decoder
widens as soon as it reads that value. There is no header and no EOF code;
the stream ends with the last code word plus zero padding.

When the dictionary reaches 2^max_bits codes it is frozen: encoding goes on
with the existing entries.
"""

import io
import sys

from bitio import BitWriter
from lzw_dictionary import MAX_CODE_LEN, make_dictionary

MIN_CODE_LEN = 9             # Initial code width in bits
MAX_SUPPORTED_BITS = 24      # Upper limit accepted for --max-bits


def check_code_lengths(min_bits, max_bits):
    """Raise ValueError unless 8 < min_bits <= max_bits <= MAX_SUPPORTED_BITS."""
    if min_bits <= 8:
        raise ValueError(f"min_bits must be larger than 8 (got {min_bits})")
    if max_bits < min_bits:
        raise ValueError(f"max_bits ({max_bits}) must be at least min_bits ({min_bits})")
    if max_bits > MAX_SUPPORTED_BITS:
        raise ValueError(f"max_bits must be at most {MAX_SUPPORTED_BITS} (got {max_bits})")


def put_code_word(writer, code, code_bits, max_bits, log=False, log_file=None):
    """
    Write 'code', widening first if it doesn't fit the current width.

    While code >= 2^code_bits - 1 (and code_bits < max_bits) the all-ones
    escape is written at the current width and the width grows by one bit.

    Returns the code width in effect after the write.
    """
    while code >= (1 << code_bits) - 1 and code_bits < max_bits:
        escape = (1 << code_bits) - 1
        writer.write_code(escape, code_bits)
        if log:
            print(f"[BITS] Escape {escape}, increased from {code_bits} to {code_bits + 1} bits", file=log_file)
        code_bits += 1

    writer.write_code(code, code_bits)
    if log:
        print(f"[ENCODE] Output code {code} (bits={code_bits})", file=log_file)

    return code_bits


def encode(f, writer, min_bits=MIN_CODE_LEN, max_bits=MAX_CODE_LEN, dictionary='hash',
           log=False, log_file=None):
    """
    LZW encode the binary stream 'f' into 'writer'.

    Args:
        f: Binary input stream (read one byte at a time)
        writer: Code sink with write_code(value, num_bits), normally a BitWriter
        min_bits: Starting code width (default 9)
        max_bits: Maximum code width (default 20, up to 2^20 codes)
        dictionary: 'hash' or 'tree'
        log: Print [ENCODE]/[DICT]/[BITS]/[FULL] trace lines to log_file

    Returns:
        True if anything was encoded, False for empty input.

    When the dictionary fills up, a single "Warning: dictionary full" line is
    printed to stderr per call, whatever the log setting; with log on, each
    skipped entry also gets a [FULL] line.

    The writer is not closed here. MemoryError while growing the dictionary
    is left to the caller.
    """
    check_code_lengths(min_bits, max_bits)
    if log_file is None:
        log_file = sys.stdout

    table = make_dictionary(dictionary, max_bits)
    code_bits = min_bits
    full_reported = False

    # Start: first byte is the first string
    first_byte = f.read(1)
    if not first_byte:
        if log:
            print("[ENCODE] Empty input, nothing to encode", file=log_file)
        return False

    code = first_byte[0]

    try:
        # Matching: extend the current string one byte at a time
        while True:
            byte_data = f.read(1)
            if not byte_data:
                break

            c = byte_data[0]

            match = table.lookup(code, c)
            if match is not None:
                code = match
                continue

            new_code = table.add(code, c)
            if new_code is None:
                if not full_reported:
                    print(f"Warning: dictionary full ({table.max_codes} codes), "
                          f"continuing with existing entries", file=sys.stderr)
                    full_reported = True
                if log:
                    print(f"[FULL] Not adding ({code}, {c})", file=log_file)
            elif log:
                print(f"[DICT] Added ({code}, {c}) -> {new_code}", file=log_file)

            # Write the string matched before c
            code_bits = put_code_word(writer, code, code_bits, max_bits, log, log_file)

            code = c

        # Flushing: last string, written once
        put_code_word(writer, code, code_bits, max_bits, log, log_file)
    finally:
        table.clear()

    return True


def encode_bytes(data, min_bits=MIN_CODE_LEN, max_bits=MAX_CODE_LEN, dictionary='hash'):
    """Encode an in-memory byte string and return the packed code stream."""
    out = io.BytesIO()
    with BitWriter(out) as writer:
        encode(io.BytesIO(data), writer, min_bits, max_bits, dictionary)
    return out.getvalue()


def compress(input_file, output_file=None, min_bits=MIN_CODE_LEN, max_bits=MAX_CODE_LEN,
             dictionary='hash', log=False):
    """
    Compress 'input_file' into 'output_file' (standard output if None).

    The output is always flushed and closed, even for empty input, which
    produces an empty file and returns False.
    """
    check_code_lengths(min_bits, max_bits)

    to_stdout = output_file is None
    # Keep trace output out of the compressed stream
    log_file = sys.stderr if to_stdout else sys.stdout

    with open(input_file, 'rb') as f:
        sink = sys.stdout.buffer if to_stdout else output_file
        with BitWriter(sink) as writer:
            encoded = encode(f, writer, min_bits, max_bits, dictionary, log, log_file)

    if encoded and not to_stdout:
        print(f"Compressed: {input_file} -> {output_file}")

    return encoded
