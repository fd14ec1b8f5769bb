"""Transcript-structure plots.

One row per transcript: exons are drawn as rectangles colored by feature
``type``, introns as lines on the transcript mid-line with an arrow at their
midpoint pointing in the direction of transcription.

The same function draws genomic and rescaled tables (the output of
``rescale.shorten_gaps``); only the x-axis title differs.
"""

from __future__ import annotations

import altair as alt
import pandas as pd
from natsort import natsorted

from .base import EXTRA_PALETTE, FEATURE_TYPES, INTRON_COLOR, PALETTE, STRAND_SHAPES

_TX_COL = "_transcript"


def _with_transcript_label(df: pd.DataFrame, group_var: str | None) -> pd.DataFrame:
    df = df.copy()
    df[_TX_COL] = df[group_var].astype(str) if group_var is not None else "transcript"
    return df


def _type_scale(types: list) -> alt.Scale:
    """Color scale listing known feature types first, in palette order."""
    known = [t for t in FEATURE_TYPES if t in types]
    extra = natsorted(t for t in types if t not in FEATURE_TYPES)
    domain = known + extra
    colors = [PALETTE[FEATURE_TYPES.index(t)] for t in known]
    colors += [EXTRA_PALETTE[i % len(EXTRA_PALETTE)] for i in range(len(extra))]
    return alt.Scale(domain=domain, range=colors)


def _intron_arrows(introns: pd.DataFrame, arrow_min_intron_length: int) -> pd.DataFrame:
    """Midpoints of introns long enough to carry a strand arrow."""
    length = introns["end"] - introns["start"]
    arrows = introns.loc[
        (length >= arrow_min_intron_length) & introns["strand"].isin(list(STRAND_SHAPES))
    ].copy()
    arrows["mid"] = (arrows["start"] + arrows["end"]) / 2
    arrows["shape"] = arrows["strand"].map(STRAND_SHAPES)
    return arrows[[_TX_COL, "mid", "shape", "strand"]]


def make_transcript_plot(
    exons: pd.DataFrame,
    introns: pd.DataFrame | None = None,
    group_var: str | None = None,
    title: str = "",
    rescaled: bool = False,
    arrow_min_intron_length: int = 0,
    width: int = 600,
    row_height: int = 30,
    fontsize: int = 14,
) -> alt.LayerChart:
    """Draw exons (and optionally introns) of one or more transcripts.

    Args:
        exons: columns ``start``, ``end`` and optionally ``type``,
            ``seqname`` and *group_var*.
        introns: columns ``start``, ``end``, ``strand`` and *group_var*.
        group_var: column naming the transcript of each row; one plot row
            per transcript, naturally sorted.
        title: chart title.
        rescaled: whether coordinates come from ``shorten_gaps``; only
            changes the x-axis title.
        arrow_min_intron_length: introns shorter than this get no arrow.
        width: data area width in pixels.
        row_height: pixels per transcript row.
        fontsize: base font size for axis labels.
    """
    alt.data_transformers.disable_max_rows()

    exons = _with_transcript_label(exons, group_var)
    if "type" not in exons.columns:
        exons["type"] = "exon"
    tx_order = natsorted(exons[_TX_COL].unique().tolist())

    if rescaled:
        x_title = "Rescaled Coordinate"
    else:
        chromosome = exons["seqname"].iloc[0] if "seqname" in exons.columns else ""
        x_title = f"Genomic Coordinate ({chromosome})" if chromosome else "Genomic Coordinate"

    frames = [exons] if introns is None else [exons, introns]
    x_min = min(int(df["start"].min()) for df in frames)
    x_max = max(int(df["end"].max()) for df in frames)
    x_scale = alt.Scale(domain=[x_min, x_max], zero=False)
    y = alt.Y(
        f"{_TX_COL}:N",
        sort=tx_order,
        title=group_var or "",
        axis=alt.Axis(titleFontSize=fontsize + 2, labelFontSize=fontsize),
    )
    x_axis = alt.Axis(title=x_title, titleFontSize=fontsize + 2, labelFontSize=fontsize)

    layers: list[alt.Chart] = []

    if introns is not None and not introns.empty:
        introns = _with_transcript_label(introns, group_var)
        layers.append(
            alt.Chart(introns[[_TX_COL, "start", "end"]])
            .mark_rule(color=INTRON_COLOR, strokeWidth=1)
            .encode(
                x=alt.X("start:Q", scale=x_scale, axis=x_axis),
                x2="end:Q",
                y=y,
            )
        )
        arrows = _intron_arrows(introns, arrow_min_intron_length)
        if not arrows.empty:
            layers.append(
                alt.Chart(arrows)
                .mark_point(filled=True, color=INTRON_COLOR, size=row_height * 2, opacity=1)
                .encode(
                    x=alt.X("mid:Q", scale=x_scale, axis=x_axis),
                    y=y,
                    shape=alt.Shape("shape:N", scale=None, legend=None),
                    tooltip=alt.Tooltip("strand:N", title="Strand"),
                )
            )

    exon_cols = [_TX_COL, "start", "end", "type"]
    layers.append(
        alt.Chart(exons[exon_cols])
        .mark_bar(size=row_height * 0.6, stroke="black", strokeWidth=0.8)
        .encode(
            x=alt.X("start:Q", scale=x_scale, axis=x_axis),
            x2="end:Q",
            y=y,
            color=alt.Color(
                "type:N",
                scale=_type_scale(exons["type"].astype(str).unique().tolist()),
                legend=alt.Legend(
                    title="Feature",
                    titleFontSize=fontsize,
                    labelFontSize=fontsize - 2,
                    orient="bottom",
                ),
            ),
            tooltip=[
                alt.Tooltip(f"{_TX_COL}:N", title="Transcript"),
                alt.Tooltip("start:Q", title="Start"),
                alt.Tooltip("end:Q", title="End"),
                alt.Tooltip("type:N", title="Type"),
            ],
        )
    )

    return (
        alt.layer(*layers)
        .properties(
            width=width,
            height=row_height * len(tx_order),
            title=alt.TitleParams(text=title, fontSize=fontsize + 4),
        )
        .configure_axis(grid=False)
        .configure_view(stroke=None)
    )
