import pandas as pd
import pytest


def make_table(rows, group_var=None):
    """Build an annotation table from (start, end) or (group, start, end) tuples on chr1/+."""
    if group_var is None:
        df = pd.DataFrame(rows, columns=["start", "end"])
    else:
        df = pd.DataFrame(rows, columns=[group_var, "start", "end"])
    df.insert(0, "seqname", "chr1")
    df["strand"] = "+"
    return df


@pytest.fixture
def single_tx():
    """One transcript, two exons and the intron between them."""
    exons = make_table([(100, 200), (300, 400)])
    introns = make_table([(200, 300)])
    return exons, introns


@pytest.fixture
def overlapping_txs():
    """Transcript A skips the middle exon of transcript B."""
    exons = make_table(
        [("A", 1, 100), ("A", 501, 600), ("B", 1, 100), ("B", 251, 300), ("B", 501, 600)],
        group_var="tx",
    )
    introns = make_table(
        [("A", 100, 501), ("B", 100, 251), ("B", 300, 501)],
        group_var="tx",
    )
    return exons, introns
