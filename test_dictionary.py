#!/usr/bin/env python3
"""Dictionary tests: search keys, tree structure, uniqueness, capacity"""

import random
import sys

from lzw_dictionary import (FIRST_CODE, NO_CHILD, HashDictionary, TreeDictionary,
                            make_dictionary, make_key)


def expect_value_error(fn, *args):
    try:
        fn(*args)
    except ValueError:
        return
    raise AssertionError(f"{fn.__name__}{args} should raise ValueError")


def test_key_layout():
    key = make_key(0x123, 0xAB, 20)
    assert key == (0xA0 << 20) | (0x123 << 4) | 0x0B


def test_keys_never_collide():
    keys = set()
    count = 0
    for prefix in list(range(0, 600)) + [(1 << 20) - 1]:
        for suffix in range(256):
            keys.add(make_key(prefix, suffix))
            count += 1
    assert len(keys) == count


def test_empty_tree():
    tree = TreeDictionary()
    assert tree.find(65, 66) is None
    assert tree.lookup(65, 66) is None
    assert len(tree) == 0
    assert tree.depth() == 0


def test_codes_assigned_in_order():
    for table in (TreeDictionary(), HashDictionary()):
        assert table.add(65, 66) == FIRST_CODE
        assert table.add(66, 65) == FIRST_CODE + 1
        assert table.add(256, 65) == FIRST_CODE + 2
        assert table.next_code == FIRST_CODE + 3
        assert len(table) == 3


def test_lookup_returns_exact_entry():
    tree = TreeDictionary()
    pairs = [(65, 66), (66, 65), (256, 65), (10, 1), (300, 255), (65, 67)]
    codes = {pair: tree.add(*pair) for pair in pairs}

    for pair, code in codes.items():
        assert tree.lookup(*pair) == code
        entry = tree.entries[code - FIRST_CODE]
        assert entry.matches(*pair)
        assert pair in tree

    assert tree.lookup(65, 68) is None
    assert (999, 0) not in tree


def test_children_follow_key_order():
    tree = TreeDictionary()
    tree.add(65, 66)      # root
    tree.add(66, 65)      # larger key -> right of root
    tree.add(10, 0x01)    # smaller key -> left of root

    root = tree.entries[0]
    assert root.right == 1
    assert root.left == 2
    assert tree.entries[1].left == NO_CHILD and tree.entries[1].right == NO_CHILD


def test_miss_returns_attachment_point():
    tree = TreeDictionary()
    tree.add(65, 66)
    tree.add(66, 65)

    index = tree.find(70, 65)
    entry = tree.entries[index]
    # Not a hit: caller has to check the fields
    assert not entry.matches(70, 65)
    assert entry.right == NO_CHILD


def test_duplicate_string_rejected():
    for table in (TreeDictionary(), HashDictionary()):
        table.add(65, 66)
        expect_value_error(table.add, 65, 66)
        assert len(table) == 1


def test_add_after_unrelated_hit():
    tree = TreeDictionary()
    tree.add(65, 66)
    tree.add(66, 65)

    assert tree.lookup(70, 70) is None     # miss
    assert tree.lookup(65, 66) == 256      # hit in between
    code = tree.add(70, 70)

    assert tree.lookup(70, 70) == code
    assert tree.lookup(66, 65) == 257


def test_increasing_keys_make_a_chain():
    tree = TreeDictionary()
    for prefix in range(50):
        tree.add(prefix, 0)
    assert tree.depth() == 50
    assert tree.lookup(49, 0) == FIRST_CODE + 49


def test_capacity():
    for table in (TreeDictionary(max_bits=9), HashDictionary(max_bits=9)):
        for prefix in range(256):
            assert table.add(prefix, 7) == FIRST_CODE + prefix
        assert table.is_full()
        assert table.add(300, 7) is None
        assert len(table) == 256
        assert table.lookup(300, 7) is None


def test_tree_and_hash_agree():
    rng = random.Random(7)
    tree = TreeDictionary(max_bits=12)
    table = HashDictionary(max_bits=12)

    for _ in range(20000):
        prefix = rng.randrange(tree.next_code)
        suffix = rng.randrange(256)
        found = tree.lookup(prefix, suffix)
        assert found == table.lookup(prefix, suffix)
        if found is None:
            assert tree.add(prefix, suffix) == table.add(prefix, suffix)

    assert len(tree) == len(table)
    pairs = [(entry.prefix_code, entry.suffix_char) for entry in tree.entries]
    assert len(set(pairs)) == len(pairs)


def test_clear():
    tree = make_dictionary('tree')
    tree.add(1, 2)
    tree.clear()
    assert len(tree) == 0
    assert tree.lookup(1, 2) is None
    assert tree.add(1, 2) == FIRST_CODE


def test_unknown_dictionary_type():
    expect_value_error(make_dictionary, 'btree')


def run_all_tests():
    """Run every test_* function and print a summary"""
    tests = [(name, fn) for name, fn in globals().items() if name.startswith('test_') and callable(fn)]
    results = []
    for name, fn in tests:
        try:
            fn()
            print(f"  ✓ {name}")
            results.append(True)
        except AssertionError as e:
            print(f"  ✗ {name}: {e}")
            results.append(False)

    print(f"Passed: {sum(results)}/{len(results)}")
    return all(results)


if __name__ == '__main__':
    sys.exit(0 if run_all_tests() else 1)
