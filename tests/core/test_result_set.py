import pytest

from pagepolicy import PaginationConfigError, ResultSet, SequenceResultSet, as_result_set


class TestSequenceResultSet:
    def test_positional_access_keeps_order(self):
        rs = SequenceResultSet(["c", "a", "b"])
        assert rs.count() == 3
        assert rs.slice(0, 2) == ["c", "a"]
        assert rs.slice(5, 10) == []

    def test_keyed_result_set_is_sorted(self):
        rs = SequenceResultSet([3, 1, 2], key=lambda n: n)
        assert rs.slice(0, 3) == [1, 2, 3]

    def test_after_is_strict(self):
        rs = SequenceResultSet(list(range(1, 11)), key=lambda n: n)
        assert rs.after(None, 3) == [1, 2, 3]
        assert rs.after(3, 3) == [4, 5, 6]
        assert rs.after(10, 3) == []
        # Keys that no longer exist still order correctly
        assert rs.after(3.5, 2) == [4, 5]

    def test_before_is_strict_and_ascending(self):
        rs = SequenceResultSet(list(range(1, 11)), key=lambda n: n)
        assert rs.before(None, 3) == [8, 9, 10]
        assert rs.before(5, 3) == [2, 3, 4]
        assert rs.before(2, 3) == [1]
        assert rs.before(1, 3) == []

    def test_keyset_requires_key(self):
        rs = SequenceResultSet([1, 2, 3])
        with pytest.raises(PaginationConfigError):
            rs.after(None, 1)
        with pytest.raises(PaginationConfigError):
            rs.key_of(1)

    def test_satisfies_protocol(self):
        assert isinstance(SequenceResultSet([]), ResultSet)

    def test_as_result_set(self):
        rs = SequenceResultSet([1])
        assert as_result_set(rs) is rs
        wrapped = as_result_set([2, 1], key=lambda n: n)
        assert isinstance(wrapped, SequenceResultSet)
        assert wrapped.slice(0, 2) == [1, 2]

    def test_lazy_sequence_is_only_sliced(self):
        class LazyRange:
            def __init__(self, n):
                self.n = n
                self.slices = []

            def __len__(self):
                return self.n

            def __getitem__(self, s):
                self.slices.append((s.start, s.stop))
                return list(range(self.n))[s]

        lazy = LazyRange(1000)
        rs = SequenceResultSet(lazy)
        assert rs.slice(10, 13) == [10, 11, 12]
        assert lazy.slices == [(10, 13)]
