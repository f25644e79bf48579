"""Tests for the hash function contract."""

from ring_hashing import PRIME, inner_repr, murmur3_64


class TestMurmur3:
    def test_deterministic(self):
        assert murmur3_64(b"hello, world!\n") == murmur3_64(b"hello, world!\n")

    def test_known_values(self):
        """Low 64 bits of MurmurHash3 x64-128, seed 0, unsigned."""
        assert murmur3_64(b"hello, world!\n") == 7236082610745944782
        assert murmur3_64(b"hello") == 0xCBD8A7B341BD9B02
        assert murmur3_64(b"foo") == 16316970633193145697
        assert murmur3_64(b"") == 0

    def test_unsigned_64_bit(self):
        for i in range(1000):
            value = murmur3_64(f"node{i}".encode())
            assert 0 <= value < 2**64

    def test_different_inputs_differ(self):
        values = {murmur3_64(f"key-{i}".encode()) for i in range(1000)}
        assert len(values) == 1000

    def test_roughly_uniform_high_bits(self):
        """Top bit should be set for about half of the inputs."""
        high = sum(1 for i in range(10000) if murmur3_64(f"k{i}".encode()) >> 63)
        assert 4500 < high < 5500


class TestInnerRepr:
    def test_prefixes_prime(self):
        assert inner_repr("foo") == f"{PRIME}:foo"
        assert inner_repr("foo") == "16777619:foo"

    def test_formats_non_strings(self):
        assert inner_repr(42) == "16777619:42"
