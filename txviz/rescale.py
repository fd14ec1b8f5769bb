"""Shorten gaps between exons and rescale transcripts onto a compressed axis.

``shorten_gaps`` is the public entry point.  It reduces the width of every
region that overlaps no exon to at most ``target_gap_width`` and lays the
exons and shortened introns of each transcript back out end to end, so that
exons keep their widths and stay aligned across transcripts.

The returned coordinates are for plotting only; they are not genomic
positions.
"""

from __future__ import annotations

import warnings

import numpy as np
import pandas as pd

from .gaps import get_gap_map, get_gaps, get_tx_start_gaps, shorten_widths
from .intervals import (
    COORD_COLS,
    check_coord_object,
    check_group_var,
    overlaps,
    to_intervals,
)

_WIDTH = "_width"
_RESCALED_START = "_rescaled_start"
_RESCALED_END = "_rescaled_end"


def shorten_gaps(
    exons: pd.DataFrame,
    introns: pd.DataFrame,
    group_var: str | None = None,
    target_gap_width: int = 100,
) -> pd.DataFrame:
    """Shorten gaps and return rescaled exon and intron coordinates.

    Args:
        exons: columns ``seqname, start, end, strand`` plus any others.  All
            rows must come from a single gene (one seqname, one strand).
        introns: the introns of *exons*, with start/end set to the adjacent
            exon boundaries (as produced by ``process.to_intron``).  An
            optional ``type`` column may only contain ``"intron"``.
        group_var: column distinguishing transcripts, required when *exons*
            hold more than one transcript.
        target_gap_width: width in bp that gaps are shortened to.

    Returns:
        One row per input exon and intron with ``start``/``end`` replaced by
        rescaled coordinates, sorted by (group_var, start, end).  All other
        input columns are carried through unchanged.
    """
    check_coord_object(exons, "exons")
    check_coord_object(introns, "introns")
    check_group_var(exons, group_var, "exons")
    check_group_var(introns, group_var, "introns")
    _check_reserved_cols(exons, "exons")
    _check_reserved_cols(introns, "introns")
    target_gap_width = _check_target_gap_width(target_gap_width)
    if exons.empty:
        raise ValueError("exons must contain at least one row")

    exons = _get_type(exons.astype({"start": int, "end": int}), "exons")
    introns = _get_type(introns.astype({"start": int, "end": int}), "introns")

    # introns are defined by the exon boundaries; move them onto the actual
    # gap so they compare equal to the gaps found between exons
    introns["start"] = introns["start"] + 1
    introns["end"] = introns["end"] - 1

    exon_ivs = to_intervals(exons, group_var)
    intron_ivs = to_intervals(introns, group_var)

    gaps = get_gaps(exon_ivs)

    intron_map = get_gap_map(intron_ivs, gaps)
    introns[_WIDTH] = shorten_widths(intron_ivs, gaps, intron_map, target_gap_width)

    tx_start_widths = None
    if group_var is not None:
        # the distance from the plot start to each transcript also has to
        # shrink by the gaps it spans to keep transcripts aligned
        tx_start_gaps = get_tx_start_gaps(exons, group_var)
        start_ivs = list(tx_start_gaps.values())
        start_map = get_gap_map(start_ivs, gaps)
        tx_start_widths = dict(zip(
            tx_start_gaps.keys(),
            shorten_widths(start_ivs, gaps, start_map, target_gap_width),
        ))

    return rescale_transcripts(exons, introns, tx_start_widths, group_var)


def rescale_transcripts(
    exons: pd.DataFrame,
    introns: pd.DataFrame,
    tx_start_widths: dict | None,
    group_var: str | None,
) -> pd.DataFrame:
    """Place exons and shortened introns end to end along a new axis.

    *introns* must be in true-gap form and carry their shortened width in a
    ``_width`` column.  *tx_start_widths* maps each transcript to its
    shortened start-gap width and is ignored when *group_var* is None.
    """
    exons = exons.copy()
    exons[_WIDTH] = exons["end"] - exons["start"] + 1
    _check_no_overlap(exons, introns, group_var)

    sort_cols = ([group_var] if group_var is not None else []) + ["start", "end"]
    frames = [exons] if introns.empty else [exons, introns]
    tx = (
        pd.concat(frames, ignore_index=True)
        .sort_values(sort_cols, kind="mergesort")
        .reset_index(drop=True)
    )
    tx[_WIDTH] = tx[_WIDTH].astype(int)
    tx = _restore_int_cols(tx, frames)

    if group_var is None:
        tx[_RESCALED_END] = tx[_WIDTH].cumsum()
        # a lone transcript has no start gap; 1 is an arbitrary origin
        offset = 1
    else:
        tx[_RESCALED_END] = tx.groupby(group_var, sort=False)[_WIDTH].cumsum()
        offset = tx[group_var].map(_get_offsets(tx[group_var], tx_start_widths))
    tx[_RESCALED_START] = tx[_RESCALED_END] - tx[_WIDTH] + 1
    tx[_RESCALED_START] = tx[_RESCALED_START] + offset
    tx[_RESCALED_END] = tx[_RESCALED_END] + offset

    # back to the exon-boundary definition of introns
    shift = np.where(tx["type"] == "intron", 1, 0)
    tx[_RESCALED_START] = tx[_RESCALED_START] - shift
    tx[_RESCALED_END] = tx[_RESCALED_END] + shift

    tx = tx.drop(columns=["start", "end", _WIDTH]).rename(
        columns={_RESCALED_START: "start", _RESCALED_END: "end"}
    )
    other_cols = [c for c in tx.columns if c not in COORD_COLS]
    tx = tx[COORD_COLS + other_cols]
    return tx.astype({"start": int, "end": int})


def _restore_int_cols(tx: pd.DataFrame, frames: list) -> pd.DataFrame:
    """Give integer columns missing from some input rows a nullable integer dtype."""
    for col in tx.columns:
        if col in ("start", "end", _WIDTH) or pd.api.types.is_integer_dtype(tx[col]):
            continue
        if any(col in df.columns and pd.api.types.is_integer_dtype(df[col]) for df in frames):
            tx[col] = tx[col].astype("Int64")
    return tx


def _check_reserved_cols(x: pd.DataFrame, name: str):
    reserved = [col for col in (_WIDTH, _RESCALED_START, _RESCALED_END) if col in x.columns]
    if reserved:
        raise ValueError(
            f"{name} must not contain the columns {', '.join(reserved)}; "
            "they are used internally"
        )


def _get_offsets(groups: pd.Series, tx_start_widths: dict | None) -> dict:
    """Look up the start offset of every transcript in *groups*."""
    tx_start_widths = tx_start_widths or {}
    offsets = {}
    for group in groups.unique():
        if group not in tx_start_widths:
            raise ValueError(
                f"transcript '{group}' has no matching transcript start gap; "
                "group_var values of introns must match those of exons"
            )
        offsets[group] = tx_start_widths[group]
    return offsets


def _check_no_overlap(exons: pd.DataFrame, introns: pd.DataFrame, group_var: str | None):
    """Raise ValueError if an intron overlaps an exon of its own transcript."""
    if introns.empty:
        return
    if group_var is None:
        pairs = [(None, exons, introns)]
    else:
        pairs = [
            (group, exons.loc[exons[group_var] == group], tx_introns)
            for group, tx_introns in introns.groupby(group_var, sort=True)
        ]
    for group, tx_exons, tx_introns in pairs:
        exon_ivs = to_intervals(tx_exons)
        for intron in to_intervals(tx_introns):
            for exon in exon_ivs:
                if overlaps(exon, intron):
                    where = "" if group is None else f" of transcript '{group}'"
                    raise ValueError(
                        f"intron {intron.start - 1}-{intron.end + 1}{where} overlaps "
                        f"exon {exon.start}-{exon.end}; introns must be bounded by "
                        "the adjacent exon edges"
                    )


def _get_type(x: pd.DataFrame, exons_introns: str) -> pd.DataFrame:
    """Add a default ``type`` column, or check the existing intron types."""
    if "type" in x.columns:
        # exon types are free (e.g. "CDS", "UTR"); introns must all be "intron"
        if exons_introns == "introns" and not (x["type"] == "intron").all():
            raise ValueError(
                f"values in the 'type' column of {exons_introns} must be one of: 'intron'"
            )
        return x
    x = x.copy()
    x["type"] = "exon" if exons_introns == "exons" else "intron"
    return x


def _check_target_gap_width(target_gap_width) -> int:
    if isinstance(target_gap_width, bool) or not isinstance(target_gap_width, (int, np.integer)):
        warnings.warn("target_gap_width must be an integer, coercing...", UserWarning)
        target_gap_width = int(target_gap_width)
    if target_gap_width < 1:
        raise ValueError(f"target_gap_width must be a positive integer, got {target_gap_width}")
    return int(target_gap_width)
