"""Genomic interval records and input checks for annotation tables.

Coordinates are 1-based and inclusive on both ends, so an interval covering
a single base has ``start == end`` and ``width == 1``.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass

import pandas as pd

COORD_COLS = ["seqname", "start", "end", "strand"]
STRANDS = ("+", "-", "*")


@dataclass(frozen=True)
class GenomicInterval:
    seqname: str
    start: int
    end: int
    strand: str = "*"
    group: Hashable | None = None
    type: str = "exon"

    def __post_init__(self):
        if self.strand not in STRANDS:
            raise ValueError(
                f"strand must be one of {', '.join(STRANDS)}, got '{self.strand}'"
            )
        if self.end - self.start + 1 < 1:
            raise ValueError(
                f"interval {self.seqname}:{self.start}-{self.end} has width < 1"
            )

    @property
    def width(self) -> int:
        return self.end - self.start + 1

    @classmethod
    def from_row(cls, row, group_var: str | None = None, default_type: str = "exon"):
        """Build an interval from a DataFrame row (Series or namedtuple-like dict)."""
        return cls(
            seqname=str(row["seqname"]),
            start=int(row["start"]),
            end=int(row["end"]),
            strand=str(row["strand"]),
            group=None if group_var is None else row[group_var],
            type=str(row["type"]) if "type" in row else default_type,
        )


def overlaps(a: GenomicInterval, b: GenomicInterval) -> bool:
    """True if *a* and *b* share at least one base on a compatible strand."""
    if a.seqname != b.seqname:
        return False
    if a.strand != b.strand and "*" not in (a.strand, b.strand):
        return False
    return a.start <= b.end and b.start <= a.end


def contains(a: GenomicInterval, b: GenomicInterval) -> bool:
    """True if *b* lies wholly inside *a* (inclusive on both ends)."""
    return (
        a.seqname == b.seqname
        and a.strand == b.strand
        and a.start <= b.start
        and b.end <= a.end
    )


def equals(a: GenomicInterval, b: GenomicInterval) -> bool:
    return (
        a.seqname == b.seqname
        and a.strand == b.strand
        and a.start == b.start
        and a.end == b.end
    )


def union_reduce(intervals) -> list[GenomicInterval]:
    """Merge overlapping or adjacent intervals into maximal disjoint intervals.

    Only intervals on the same seqname and strand are merged.  The result is
    sorted by (seqname, strand, start) and carries no group label.
    """
    ordered = sorted(intervals, key=lambda iv: (iv.seqname, iv.strand, iv.start, iv.end))
    merged: list[list] = []
    for iv in ordered:
        if (
            merged
            and merged[-1][0] == iv.seqname
            and merged[-1][3] == iv.strand
            and iv.start <= merged[-1][2] + 1
        ):
            merged[-1][2] = max(merged[-1][2], iv.end)
        else:
            merged.append([iv.seqname, iv.start, iv.end, iv.strand])
    return [GenomicInterval(seqname, start, end, strand) for seqname, start, end, strand in merged]


def to_intervals(df: pd.DataFrame, group_var: str | None = None) -> list[GenomicInterval]:
    """Convert the rows of an annotation table to interval records, in row order."""
    return [
        GenomicInterval.from_row(row, group_var=group_var)
        for _, row in df.iterrows()
    ]


# ── Input checks ──────────────────────────────────────────────────────────────

def check_coord_object(df: pd.DataFrame, name: str = "x"):
    """Raise ValueError unless *df* holds usable seqname/start/end/strand columns."""
    missing = [col for col in COORD_COLS if col not in df.columns]
    if missing:
        raise ValueError(
            f"{name} must contain the columns {', '.join(COORD_COLS)}; "
            f"missing: {', '.join(missing)}"
        )
    for col in ["start", "end"]:
        if df[col].isna().any():
            raise ValueError(f"'{col}' column of {name} contains missing values")
    bad_strands = sorted(set(df["strand"].astype(str)) - set(STRANDS))
    if bad_strands:
        raise ValueError(
            f"'strand' column of {name} must only contain {', '.join(STRANDS)}; "
            f"found: {', '.join(bad_strands)}"
        )


def check_group_var(df: pd.DataFrame, group_var: str | None, name: str = "x"):
    if group_var is None:
        return
    if group_var not in df.columns:
        raise ValueError(f"group_var '{group_var}' is not a column of {name}")
    if df[group_var].isna().any():
        raise ValueError(f"group_var '{group_var}' of {name} contains missing values")
