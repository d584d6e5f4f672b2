#!/usr/bin/env python3
"""
Bit-level I/O for LZW code streams.

LZW writes variable-width codes (9 bits, 10 bits, ... up to 20 bits) but
files are stored as bytes. BitWriter packs bits most-significant first into
bytes; BitReader reverses it.

Code words wider than a byte are written least significant byte first,
then the remaining high-order bits:

    code 0x1A5 at 9 bits  ->  [0xA5: 8 bits] [0x1: 1 bit]
    code 0x3A5C2 at 18 bits -> [0xC2: 8 bits] [0xA5: 8 bits] [0x3: 2 bits]

so the bitstream does not depend on the byte order of the machine.
"""

import os


class BitWriter:
    """
    Writes variable-width integers as a stream of bits.

    Accepts a filename (opened and owned by the writer) or an already open
    binary stream (flushed on close but left open for its owner).

    Buffer structure: [HIGH bits: ready to write] [LOW bits: remaining, waiting for more]
    """

    def __init__(self, file):
        if isinstance(file, (str, bytes, os.PathLike)):
            self.file = open(file, 'wb')
            self.owns_file = True
        else:
            self.file = file
            self.owns_file = False
        self.buffer = 0   # Integer accumulating bits
        self.n_bits = 0   # Count of bits in buffer not yet written
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def write(self, value, num_bits):
        """Write the low 'num_bits' bits of 'value', most significant bit first."""
        if value < 0 or value >> num_bits:
            raise ValueError(f"Value {value} does not fit in {num_bits} bits")

        self.buffer = (self.buffer << num_bits) | value
        self.n_bits += num_bits

        while self.n_bits >= 8:
            self.n_bits -= 8
            byte = self.buffer >> self.n_bits
            self.file.write(bytes([byte]))

            # Keep only the bits that haven't been written
            self.buffer &= (1 << self.n_bits) - 1

    def write_code(self, value, num_bits):
        """
        Write a code word using exactly 'num_bits' bits.

        Example: write_code(257, 9) writes 0x01 as 8 bits, then 1 as 1 bit.
        """
        if value < 0 or value >> num_bits:
            raise ValueError(f"Code {value} does not fit in {num_bits} bits")

        while num_bits >= 8:
            self.write(value & 0xFF, 8)
            value >>= 8
            num_bits -= 8

        if num_bits > 0:
            self.write(value, num_bits)

    def close(self):
        """Flush any remaining bits (padded with zeros) and close the file once."""
        if self.closed:
            return
        self.closed = True

        if self.n_bits > 0:
            byte = self.buffer << (8 - self.n_bits)
            self.file.write(bytes([byte]))
            self.buffer = 0
            self.n_bits = 0

        if self.owns_file:
            self.file.close()
        else:
            self.file.flush()


class BitReader:
    """
    Reads variable-width integers from a stream of bits.

    Mirrors BitWriter - accumulates bytes into buffer, extracts requested bits.
    """

    def __init__(self, file):
        if isinstance(file, (str, bytes, os.PathLike)):
            self.file = open(file, 'rb')
            self.owns_file = True
        else:
            self.file = file
            self.owns_file = False
        self.buffer = 0
        self.n_bits = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def read(self, num_bits):
        """Read 'num_bits' bits from input. Returns None at EOF."""
        while self.n_bits < num_bits:
            byte_data = self.file.read(1)
            if not byte_data:
                return None
            self.buffer = (self.buffer << 8) | byte_data[0]
            self.n_bits += 8

        self.n_bits -= num_bits
        value = self.buffer >> self.n_bits

        self.buffer &= (1 << self.n_bits) - 1

        return value

    def read_code(self, num_bits):
        """
        Read a code word written by BitWriter.write_code.

        Returns None if fewer than 'num_bits' bits are left, which is how the
        zero padding after the last code word is recognized.
        """
        value = 0
        shift = 0

        while num_bits >= 8:
            byte = self.read(8)
            if byte is None:
                return None
            value |= byte << shift
            shift += 8
            num_bits -= 8

        if num_bits > 0:
            high = self.read(num_bits)
            if high is None:
                return None
            value |= high << shift

        return value

    def close(self):
        if self.owns_file:
            self.file.close()
