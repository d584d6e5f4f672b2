#!/usr/bin/env python3
"""
LZW encoder dictionaries.

Every string in the dictionary is stored as (prefix code, suffix byte):
the code of all but the last byte, plus the last byte. Codes 0-255 are the
single-byte strings and are never stored; the first stored entry gets
FIRST_CODE (256) and each new entry gets the next code.

Two interchangeable implementations:

- TreeDictionary: unbalanced binary search tree ordered by make_key(),
  entries kept in a list (arena) and linked by index. Search is O(log n)
  on typical data and O(n) in the worst case.
- HashDictionary: dict keyed by (prefix, suffix). Same hits and misses,
  same code assignment, O(1) lookups.
"""

from typing import Dict, List, Optional, Tuple

FIRST_CODE = 1 << 8          # Code of the first multi-byte string
MAX_CODE_LEN = 20            # Default maximum code width in bits

NO_CHILD = -1


def make_key(prefix_code: int, suffix_char: int, max_bits: int = MAX_CODE_LEN) -> int:
    """
    Build a search key from a prefix code and an appended byte.

    Key layout: {high nibble of suffix} {prefix code: max_bits bits} {low nibble of suffix}

    The three fields don't overlap as long as prefix_code < 2**max_bits.
    """
    key = (suffix_char & 0xF0) << max_bits
    key |= prefix_code << 4
    key |= suffix_char & 0x0F
    return key


class DictionaryEntry:
    """One dictionary string: prefix code + suffix byte, encoded as code_word."""
    __slots__ = ('code_word', 'prefix_code', 'suffix_char', 'key', 'left', 'right')

    def __init__(self, code_word: int, prefix_code: int, suffix_char: int, key: int) -> None:
        self.code_word = code_word
        self.prefix_code = prefix_code
        self.suffix_char = suffix_char
        self.key = key
        self.left = NO_CHILD    # Arena index of child with smaller key
        self.right = NO_CHILD   # Arena index of child with larger key

    def matches(self, prefix_code: int, suffix_char: int) -> bool:
        return self.prefix_code == prefix_code and self.suffix_char == suffix_char

    def __repr__(self) -> str:
        return f"DictionaryEntry({self.code_word}: {self.prefix_code} + {self.suffix_char})"


class TreeDictionary:
    """
    Binary search tree dictionary stored in an arena.

    entries[i] holds code FIRST_CODE + i, entries[0] is the root. Nodes are
    never removed, so indices stay valid until the whole arena is dropped.

    The encoder only uses lookup(), add() and is_full(); depth() and the
    "in" operator are for inspecting a tree in tests.
    """
    __slots__ = ('max_bits', 'max_codes', 'entries', '_miss_index', '_miss_key')

    def __init__(self, max_bits: int = MAX_CODE_LEN) -> None:
        self.max_bits = max_bits
        self.max_codes = 1 << max_bits
        self.entries: List[DictionaryEntry] = []

        # Attachment point left behind by the last failed lookup
        self._miss_index: Optional[int] = None
        self._miss_key: Optional[int] = None

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, pair: Tuple[int, int]) -> bool:
        return self.lookup(*pair) is not None

    @property
    def next_code(self) -> int:
        return FIRST_CODE + len(self.entries)

    def is_full(self) -> bool:
        return self.next_code >= self.max_codes

    def find(self, prefix_code: int, suffix_char: int) -> Optional[int]:
        """
        Search the tree for (prefix_code, suffix_char).

        Returns the arena index of the matching entry or, if there is none,
        of the node the string should be attached to. Returns None for an
        empty tree. The caller must check the returned entry with matches().
        """
        if not self.entries:
            return None

        search_key = make_key(prefix_code, suffix_char, self.max_bits)
        index = 0

        while True:
            node = self.entries[index]

            if search_key == node.key:
                return index
            elif search_key < node.key:
                if node.left == NO_CHILD:
                    return index
                index = node.left
            else:
                if node.right == NO_CHILD:
                    return index
                index = node.right

    def lookup(self, prefix_code: int, suffix_char: int) -> Optional[int]:
        """Return the code for (prefix_code, suffix_char), or None if absent."""
        index = self.find(prefix_code, suffix_char)

        if index is not None and self.entries[index].matches(prefix_code, suffix_char):
            self._miss_index = None
            self._miss_key = None
            return self.entries[index].code_word

        self._miss_index = index
        self._miss_key = make_key(prefix_code, suffix_char, self.max_bits)
        return None

    def add(self, prefix_code: int, suffix_char: int) -> Optional[int]:
        """
        Add (prefix_code, suffix_char) with the next code word.

        Returns the new code, or None when the code space is exhausted (the
        dictionary is left unchanged). Raises ValueError if the string is
        already present.
        """
        if self.is_full():
            return None

        key = make_key(prefix_code, suffix_char, self.max_bits)

        # Reuse the attachment point from a lookup of the same string
        if self._miss_key == key:
            parent = self._miss_index
        else:
            parent = self.find(prefix_code, suffix_char)
            if parent is not None and self.entries[parent].key == key:
                raise ValueError(f"String ({prefix_code}, {suffix_char}) already in dictionary")

        code = self.next_code
        self.entries.append(DictionaryEntry(code, prefix_code, suffix_char, key))

        if parent is not None:
            node = self.entries[parent]
            if key < node.key:
                node.left = len(self.entries) - 1
            else:
                node.right = len(self.entries) - 1

        self._miss_index = None
        self._miss_key = None
        return code

    def depth(self) -> int:
        """Height of the tree (0 when empty)."""
        if not self.entries:
            return 0

        deepest = 0
        stack = [(0, 1)]
        while stack:
            index, level = stack.pop()
            deepest = max(deepest, level)
            node = self.entries[index]
            if node.left != NO_CHILD:
                stack.append((node.left, level + 1))
            if node.right != NO_CHILD:
                stack.append((node.right, level + 1))
        return deepest

    def clear(self) -> None:
        self.entries = []
        self._miss_index = None
        self._miss_key = None


class HashDictionary:
    """Hash map dictionary with the same interface as TreeDictionary (no depth())."""
    __slots__ = ('max_bits', 'max_codes', 'codes')

    def __init__(self, max_bits: int = MAX_CODE_LEN) -> None:
        self.max_bits = max_bits
        self.max_codes = 1 << max_bits
        self.codes: Dict[Tuple[int, int], int] = {}

    def __len__(self) -> int:
        return len(self.codes)

    def __contains__(self, pair: Tuple[int, int]) -> bool:
        return pair in self.codes

    @property
    def next_code(self) -> int:
        return FIRST_CODE + len(self.codes)

    def is_full(self) -> bool:
        return self.next_code >= self.max_codes

    def lookup(self, prefix_code: int, suffix_char: int) -> Optional[int]:
        return self.codes.get((prefix_code, suffix_char))

    def add(self, prefix_code: int, suffix_char: int) -> Optional[int]:
        if self.is_full():
            return None

        pair = (prefix_code, suffix_char)
        if pair in self.codes:
            raise ValueError(f"String {pair} already in dictionary")

        code = self.next_code
        self.codes[pair] = code
        return code

    def clear(self) -> None:
        self.codes = {}


DICTIONARIES = {
    'hash': HashDictionary,
    'tree': TreeDictionary,
}


def make_dictionary(kind: str, max_bits: int = MAX_CODE_LEN):
    """Create an empty dictionary of the named kind ('hash' or 'tree')."""
    try:
        return DICTIONARIES[kind](max_bits)
    except KeyError:
        raise ValueError(f"Unknown dictionary type: {kind}") from None
