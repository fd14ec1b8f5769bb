import pandas as pd
import pytest

from conftest import make_table
from txviz.process import get_exons, to_intron


def test_get_exons_filters_type():
    annotation = make_table([(1, 500), (1, 100), (201, 300)])
    annotation["type"] = ["gene", "exon", "exon"]
    exons = get_exons(annotation)
    assert list(exons["start"]) == [1, 201]


def test_get_exons_without_type_column():
    annotation = make_table([(1, 100)])
    pd.testing.assert_frame_equal(get_exons(annotation), annotation)


class TestToIntron:

    def test_single_transcript(self):
        exons = make_table([(401, 500), (1, 100), (201, 300)])
        introns = to_intron(exons)
        assert list(zip(introns["start"], introns["end"])) == [(100, 201), (300, 401)]
        assert (introns["type"] == "intron").all()
        assert (introns["seqname"] == "chr1").all()

    def test_grouped(self):
        exons = make_table(
            [("B", 50, 60), ("A", 1, 100), ("B", 1, 10), ("A", 201, 300)],
            group_var="tx",
        )
        introns = to_intron(exons, group_var="tx")
        assert list(introns["tx"]) == ["A", "B"]
        assert list(zip(introns["start"], introns["end"])) == [(100, 201), (10, 50)]

    def test_touching_exons_make_no_intron(self):
        exons = make_table([(1, 10), (11, 20), (30, 40)])
        introns = to_intron(exons)
        assert list(zip(introns["start"], introns["end"])) == [(20, 30)]

    def test_single_exon(self):
        introns = to_intron(make_table([(1, 10)]))
        assert introns.empty
        assert "type" in introns.columns

    def test_missing_group_var(self):
        with pytest.raises(ValueError, match="not a column of exons"):
            to_intron(make_table([(1, 10)]), group_var="tx")
