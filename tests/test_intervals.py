import pandas as pd
import pytest

from txviz.intervals import (
    GenomicInterval,
    check_coord_object,
    check_group_var,
    contains,
    equals,
    overlaps,
    to_intervals,
    union_reduce,
)


def iv(start, end, strand="+", seqname="chr1"):
    return GenomicInterval(seqname, start, end, strand)


class TestGenomicInterval:

    def test_width(self):
        assert iv(1, 1).width == 1
        assert iv(100, 200).width == 101

    def test_zero_width_error(self):
        with pytest.raises(ValueError, match="width < 1"):
            iv(11, 10)

    def test_bad_strand_error(self):
        with pytest.raises(ValueError, match="strand"):
            iv(1, 10, strand=".")

    def test_from_row_defaults_type(self):
        row = pd.Series({"seqname": "chr1", "start": 5, "end": 9, "strand": "-", "tx": "A"})
        result = GenomicInterval.from_row(row, group_var="tx")
        assert result == GenomicInterval("chr1", 5, 9, "-", group="A", type="exon")

    def test_from_row_keeps_type(self):
        row = pd.Series({"seqname": "chr1", "start": 5, "end": 9, "strand": "-", "type": "CDS"})
        assert GenomicInterval.from_row(row).type == "CDS"


def test_overlaps():
    assert overlaps(iv(1, 10), iv(10, 20))
    assert overlaps(iv(5, 6), iv(1, 10))
    assert not overlaps(iv(1, 10), iv(11, 20))
    assert not overlaps(iv(1, 10), iv(1, 10, seqname="chr2"))
    assert not overlaps(iv(1, 10), iv(1, 10, strand="-"))
    assert overlaps(iv(1, 10), iv(1, 10, strand="*"))


def test_contains_is_inclusive():
    assert contains(iv(1, 10), iv(1, 10))
    assert contains(iv(1, 10), iv(2, 9))
    assert not contains(iv(2, 9), iv(1, 10))
    assert not contains(iv(1, 10), iv(5, 11))
    assert not contains(iv(1, 10), iv(2, 9, strand="-"))


def test_equals_ignores_group_and_type():
    a = GenomicInterval("chr1", 1, 10, "+", group="A", type="intron")
    b = GenomicInterval("chr1", 1, 10, "+", type="gap")
    assert equals(a, b)
    assert not equals(a, iv(1, 11))


class TestUnionReduce:

    def test_merges_overlapping_and_adjacent(self):
        result = union_reduce([iv(40, 50), iv(5, 20), iv(1, 10), iv(21, 30)])
        assert [(r.start, r.end) for r in result] == [(1, 30), (40, 50)]

    def test_contained_interval(self):
        result = union_reduce([iv(1, 100), iv(20, 30)])
        assert [(r.start, r.end) for r in result] == [(1, 100)]

    def test_strands_kept_apart(self):
        result = union_reduce([iv(1, 10), iv(5, 20, strand="-")])
        assert len(result) == 2

    def test_empty(self):
        assert union_reduce([]) == []


class TestCheckCoordObject:

    def test_missing_column(self):
        df = pd.DataFrame({"seqname": ["chr1"], "start": [1], "end": [2]})
        with pytest.raises(ValueError, match="missing: strand"):
            check_coord_object(df, "exons")

    def test_missing_values(self):
        df = pd.DataFrame({"seqname": ["chr1"], "start": [None], "end": [2], "strand": ["+"]})
        with pytest.raises(ValueError, match="'start' column of exons"):
            check_coord_object(df, "exons")

    def test_bad_strand(self):
        df = pd.DataFrame({"seqname": ["chr1"], "start": [1], "end": [2], "strand": ["x"]})
        with pytest.raises(ValueError, match="found: x"):
            check_coord_object(df, "introns")

    def test_ok(self):
        df = pd.DataFrame({"seqname": ["chr1"], "start": [1], "end": [2], "strand": ["*"]})
        check_coord_object(df, "exons")


class TestCheckGroupVar:

    def test_none_is_ok(self):
        check_group_var(pd.DataFrame(), None)

    def test_missing_column(self):
        with pytest.raises(ValueError, match="not a column of introns"):
            check_group_var(pd.DataFrame({"tx": ["A"]}), "transcript", "introns")

    def test_missing_values(self):
        with pytest.raises(ValueError, match="missing values"):
            check_group_var(pd.DataFrame({"tx": ["A", None]}), "tx", "exons")


def test_to_intervals_preserves_row_order():
    df = pd.DataFrame({
        "seqname": ["chr1", "chr1"],
        "start": [300, 100],
        "end": [400, 200],
        "strand": ["+", "+"],
        "tx": ["A", "B"],
    })
    result = to_intervals(df, group_var="tx")
    assert [(r.start, r.group) for r in result] == [(300, "A"), (100, "B")]
