"""Gap extraction, gap-to-interval mapping and gap shortening.

A gap is a maximal region inside the span of a gene's exons that no exon
covers.  Introns (in true-gap form) and transcript-start gaps are related to
the gaps so that each can be shortened by exactly the amount its gaps are.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pandas as pd

from .intervals import GenomicInterval, contains, equals, union_reduce


class GapRelation(Enum):
    EQUAL = "equal"
    PURE_WITHIN = "pure_within"
    NONE = "none"


@dataclass
class GapMap:
    """Relations between candidate intervals and gaps, keyed by candidate index.

    ``equal`` maps a candidate to the single gap it matches exactly;
    ``pure_within`` maps a candidate to every gap it contains.
    """

    equal: dict[int, int] = field(default_factory=dict)
    pure_within: dict[int, list[int]] = field(default_factory=dict)

    def relation(self, idx: int) -> GapRelation:
        if idx in self.equal:
            return GapRelation.EQUAL
        if idx in self.pure_within:
            return GapRelation.PURE_WITHIN
        return GapRelation.NONE


def _check_single_gene(seqnames: set, strands: set):
    reason = "object is expected to contain exons from a single gene."
    if len(seqnames) != 1:
        raise ValueError(f"seqname of object contains more than 1 unique value. {reason}")
    if len(strands) != 1:
        raise ValueError(f"strand of object contains more than 1 unique value. {reason}")


def get_gaps(exons: list[GenomicInterval]) -> list[GenomicInterval]:
    """Return the regions between the collapsed exons, ascending by start."""
    if not exons:
        return []
    seqnames = {ex.seqname for ex in exons}
    strands = {ex.strand for ex in exons}
    _check_single_gene(seqnames, strands)

    # collapse all transcripts into a single meta transcript
    reduced = union_reduce(exons)

    gaps = []
    for left, right in zip(reduced, reduced[1:]):
        gaps.append(GenomicInterval(
            seqname=left.seqname,
            start=left.end + 1,
            end=right.start - 1,
            strand=left.strand,
            type="gap",
        ))
    return gaps


def get_gap_map(candidates: list[GenomicInterval], gaps: list[GenomicInterval]) -> GapMap:
    """Classify every candidate against the gaps.

    A candidate identical to a gap is EQUAL; otherwise, a candidate enclosing
    one or more gaps is PURE_WITHIN and keeps all of them.
    """
    gap_map = GapMap()
    for cand_idx, cand in enumerate(candidates):
        if cand is None:
            continue
        within = []
        for gap_idx, gap in enumerate(gaps):
            if equals(cand, gap):
                gap_map.equal[cand_idx] = gap_idx
                break
            if contains(cand, gap):
                within.append(gap_idx)
        else:
            if within:
                gap_map.pure_within[cand_idx] = within
    return gap_map


def shorten_widths(
    candidates: list[GenomicInterval],
    gaps: list[GenomicInterval],
    gap_map: GapMap,
    target_gap_width: int,
) -> list[int]:
    """Shortened width of each candidate, in candidate order.

    EQUAL candidates are capped at *target_gap_width*.  PURE_WITHIN
    candidates lose the sum of what each contained gap loses when it is
    capped; the candidate's own width is never capped directly.
    ``None`` candidates (empty transcript-start gaps) have width 0.
    """
    widths = []
    for idx, cand in enumerate(candidates):
        if cand is None:
            widths.append(0)
            continue
        relation = gap_map.relation(idx)
        if relation is GapRelation.EQUAL:
            widths.append(min(cand.width, target_gap_width))
        elif relation is GapRelation.PURE_WITHIN:
            reduction = sum(
                max(0, gaps[gap_idx].width - target_gap_width)
                for gap_idx in gap_map.pure_within[idx]
            )
            widths.append(cand.width - reduction)
        else:
            widths.append(cand.width)
    return widths


def get_tx_start_gaps(exons: pd.DataFrame, group_var: str) -> dict:
    """Map each transcript to the region between the plot start and its first exon.

    The plot starts at the smallest exon start over all transcripts.  A
    transcript beginning there has no start gap and maps to ``None``.
    """
    plot_start = int(exons["start"].min())
    tx_start_gaps = {}
    for group, tx in exons.groupby(group_var, sort=True):
        seqnames = set(tx["seqname"].astype(str))
        strands = set(tx["strand"].astype(str))
        _check_single_gene(seqnames, strands)
        tx_start = int(tx["start"].min())
        if tx_start > plot_start:
            tx_start_gaps[group] = GenomicInterval(
                seqname=seqnames.pop(),
                start=plot_start,
                end=tx_start - 1,
                strand=strands.pop(),
                group=group,
                type="tx_start_gap",
            )
        else:
            tx_start_gaps[group] = None
    return tx_start_gaps
