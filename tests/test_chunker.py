"""Unit tests for chunked()."""

import itertools
import math

import pytest

from expo_push.services.chunker import chunked


class TestChunked:
    @pytest.mark.parametrize("n", [0, 1, 2, 5, 99, 100, 101, 250])
    @pytest.mark.parametrize("k", [1, 2, 3, 100])
    def test_chunk_properties(self, n, k):
        items = list(range(n))
        chunks = list(chunked(items, k))

        assert len(chunks) == math.ceil(n / k)
        assert [x for chunk in chunks for x in chunk] == items
        assert all(len(chunk) == k for chunk in chunks[:-1])
        if chunks:
            assert 1 <= len(chunks[-1]) <= k

    def test_empty_input_yields_nothing(self):
        assert list(chunked([], 100)) == []

    @pytest.mark.parametrize("size", [0, -1])
    def test_non_positive_size_rejected_eagerly(self, size):
        with pytest.raises(ValueError, match="chunk size"):
            chunked([1, 2, 3], size)

    def test_lazy_over_unbounded_iterator(self):
        chunks = chunked(itertools.count(), 3)
        assert next(chunks) == [0, 1, 2]
        assert next(chunks) == [3, 4, 5]

    def test_accepts_generators(self):
        assert list(chunked((c for c in "abcde"), 2)) == [["a", "b"], ["c", "d"], ["e"]]
