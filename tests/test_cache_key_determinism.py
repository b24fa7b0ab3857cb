"""
Test cache key determinism.

Verifies that a snapshot's cache key contribution depends only on its
(path, fingerprint) pairs.
"""

import itertools
import os
import random

import pytest

from snapshot_compare import (
    CacheKeyError,
    FileSnapshot,
    HashingCacheKeyBuilder,
    OrderInsensitiveCompareStrategy,
    RecordingCacheKeySink,
    SnapshotCompareEngine,
    UnsupportedHashAlgorithmError,
    build_snapshot,
)
from snapshot_compare.strategies.order_insensitive import sorted_key_entries


def contribution(snapshot) -> bytes:
    sink = RecordingCacheKeySink()
    OrderInsensitiveCompareStrategy(include_added=True).append_to_cache_key(sink, snapshot)
    return sink.raw()


def key_of(snapshot, algorithm='blake3') -> str:
    builder = HashingCacheKeyBuilder(algorithm)
    OrderInsensitiveCompareStrategy(include_added=False).append_to_cache_key(builder, snapshot)
    return builder.build().hash


class TestCanonicalOrdering:
    """Test that entries are appended in canonical order."""

    def test_insertion_order_does_not_matter(self):
        """Same pairs inserted in different order produce identical bytes."""
        snapshot1 = build_snapshot([('b', b'\x02'), ('a', b'\x01')])
        snapshot2 = build_snapshot([('a', b'\x01'), ('b', b'\x02')])

        assert list(snapshot1) != list(snapshot2)
        assert contribution(snapshot1) == contribution(snapshot2)
        assert key_of(snapshot1) == key_of(snapshot2)

    def test_all_permutations_agree(self):
        """Every enumeration order of the same pairs gives the same key."""
        pairs = [('src/a.c', b'\x0a'), ('src/b.c', b'\x0b'), ('include/a.h', b'\x0c'), ('Makefile', b'\x0d')]
        expected = contribution(build_snapshot(pairs))

        for permutation in itertools.permutations(pairs):
            assert contribution(build_snapshot(permutation)) == expected

    def test_appends_path_then_fingerprint(self):
        """Each entry pushes its path string and then its fingerprint bytes."""
        sink = RecordingCacheKeySink()
        snapshot = build_snapshot([('b.txt', b'\x02\x02'), ('a.txt', b'\x01')])

        OrderInsensitiveCompareStrategy(include_added=True).append_to_cache_key(sink, snapshot)

        assert sink.entries == [
            ('string', 'a.txt'),
            ('bytes', b'\x01'),
            ('string', 'b.txt'),
            ('bytes', b'\x02\x02'),
        ]

    def test_paths_sorted_by_bytes(self):
        """Paths are ordered byte-wise, so upper case sorts before lower case."""
        snapshot = build_snapshot([('b', b'1'), ('B', b'2'), ('a', b'3'), ('é', b'4')])

        assert [path for path, _ in sorted_key_entries(snapshot)] == ['B', 'a', 'b', 'é']

    def test_ties_break_on_fingerprint_length_then_bytes(self):
        """Identical paths fall back to fingerprint length, then bytes."""
        entries = [
            ('same', FileSnapshot(b'\x02\x00')),
            ('same', FileSnapshot(b'\xff')),
            ('same', FileSnapshot(b'\x01\x00')),
        ]

        class PairsSnapshot:
            def items(self):
                return iter(entries)

        assert sorted_key_entries(PairsSnapshot()) == [
            ('same', b'\xff'),
            ('same', b'\x01\x00'),
            ('same', b'\x02\x00'),
        ]

    def test_empty_snapshot_appends_nothing(self):
        """An empty snapshot contributes no bytes."""
        sink = RecordingCacheKeySink()

        OrderInsensitiveCompareStrategy(include_added=True).append_to_cache_key(sink, {})

        assert len(sink) == 0
        assert sink.raw() == b''


class TestSensitivity:
    """Test that the key changes exactly when the pair set changes."""

    def test_changed_fingerprint_changes_key(self):
        assert key_of({'a': FileSnapshot(b'\x01')}) != key_of({'a': FileSnapshot(b'\x02')})

    def test_renamed_path_changes_key(self):
        assert key_of({'a': FileSnapshot(b'\x01')}) != key_of({'b': FileSnapshot(b'\x01')})

    def test_extra_entry_changes_key(self):
        base = {'a': FileSnapshot(b'\x01')}
        extended = {'a': FileSnapshot(b'\x01'), 'b': FileSnapshot(b'\x02')}

        assert key_of(base) != key_of(extended)

    def test_boundary_shift_changes_key(self):
        """Moving bytes between path and fingerprint is detected."""
        assert key_of({'ab': FileSnapshot(b'c')}) != key_of({'a': FileSnapshot(b'bc')})

    def test_random_pair_sets(self):
        """Keys agree iff pair sets agree over random snapshots."""
        rng = random.Random(42)
        paths = ['a', 'b', 'c', 'd']
        fingerprints = [b'\x00', b'\x01', b'\x00\x01']
        seen = {}

        for _ in range(300):
            chosen = rng.sample(paths, rng.randint(0, len(paths)))
            pairs = [(path, rng.choice(fingerprints)) for path in chosen]
            rng.shuffle(pairs)
            pair_set = frozenset(pairs)
            key = key_of(build_snapshot(pairs))

            if pair_set in seen:
                assert seen[pair_set] == key
            else:
                assert key not in seen.values()
                seen[pair_set] = key


class TestHashingCacheKeyBuilder:
    """Test the default cache key sink."""

    @pytest.mark.parametrize('algorithm', ['blake3', 'sha256'])
    def test_hash_length_and_format(self, algorithm):
        """Both algorithms produce 64 hex characters."""
        key = key_of({'a': FileSnapshot(b'\x01')}, algorithm)

        assert len(key) == 64
        assert all(c in '0123456789abcdef' for c in key)

    def test_algorithms_differ(self):
        snapshot = {'a': FileSnapshot(b'\x01')}

        assert key_of(snapshot, 'blake3') != key_of(snapshot, 'sha256')

    def test_unknown_algorithm(self):
        with pytest.raises(UnsupportedHashAlgorithmError):
            HashingCacheKeyBuilder('md5')

    def test_build_twice_fails(self):
        builder = HashingCacheKeyBuilder()
        builder.build()

        with pytest.raises(CacheKeyError):
            builder.build()

    def test_put_after_build_fails(self):
        builder = HashingCacheKeyBuilder()
        builder.build()

        with pytest.raises(CacheKeyError):
            builder.put_string('late')

    def test_primitive_types_are_distinguished(self):
        """A string and the same bytes hash differently."""
        as_string = HashingCacheKeyBuilder()
        as_string.put_string('x')
        as_bytes = HashingCacheKeyBuilder()
        as_bytes.put_bytes(b'x')

        assert as_string.build() != as_bytes.build()

    def test_int_and_boolean_helpers(self):
        first = HashingCacheKeyBuilder()
        first.put_int(1)
        first.put_boolean(True)
        second = HashingCacheKeyBuilder()
        second.put_int(1)
        second.put_boolean(False)

        assert first.build() != second.build()


class TestUndecodablePaths:
    """Test paths decoded from filenames that are not valid UTF-8."""

    @pytest.fixture
    def snapshot(self):
        return build_snapshot([
            (os.fsdecode(b'dir/caf\xe9.txt'), b'\x01'),
            ('a', b'\x02'),
        ])

    def test_append_to_cache_key(self, snapshot):
        """Surrogate-escaped paths contribute their original bytes."""
        sink = RecordingCacheKeySink()

        OrderInsensitiveCompareStrategy(include_added=True).append_to_cache_key(sink, snapshot)

        assert sink.entries[2] == ('string', os.fsdecode(b'dir/caf\xe9.txt'))
        assert b'dir/caf\xe9.txt' in sink.raw()

    def test_sorted_by_original_bytes(self, snapshot):
        assert [path for path, _ in sorted_key_entries(snapshot)] == ['a', os.fsdecode(b'dir/caf\xe9.txt')]

    def test_hashing_builder(self, snapshot):
        key = key_of(snapshot)

        assert key == key_of(build_snapshot(reversed(list(snapshot.items()))))
        assert key != key_of(build_snapshot([(os.fsdecode(b'dir/caf\xe8.txt'), b'\x01'), ('a', b'\x02')]))

    def test_engine_cache_key(self, snapshot):
        key = SnapshotCompareEngine().compute_cache_key({'sources': ('unordered', snapshot)})

        assert len(key.hash) == 64
