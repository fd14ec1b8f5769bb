"""Transcript Structure Visualization Pipeline

Usage:
    python pipeline.py <annotation> <output_dir> [--group-var COL]
                       [--target-gap-width N] [--format html|png|svg] [--excel]

The annotation file is a CSV, Excel or tab-delimited table with at least:
    seqname (or seqnames), start, end, strand
and optionally:
    type        feature type; only rows with type == "exon" are used
    <group-var> transcript identifier, e.g. transcript_name

All exons must come from a single gene (one seqname, one strand).

Outputs (saved to output_dir):
    {stem}_rescaled.tsv           Exons and introns with gap-shortened coordinates
    {stem}_transcripts            Transcript structure plot on genomic coordinates
    {stem}_transcripts_rescaled   Transcript structure plot with shortened gaps
    {stem}_data.xlsx              Multi-sheet Excel workbook (if --excel flag is set)

PNG and SVG output require vl-convert-python (pip install vl-convert-python).
Excel output requires openpyxl (pip install openpyxl).
"""

import argparse
import sys
from pathlib import Path

from txviz import io, process, rescale
from txviz.figures import transcripts
from txviz.intervals import check_coord_object


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Plot transcript structures with shortened introns from an annotation table."
    )
    parser.add_argument(
        "annotation",
        type=Path,
        help="Annotation table (CSV, Excel or TSV)",
    )
    parser.add_argument(
        "output_dir",
        type=Path,
        help="Directory to write output tables and figures",
    )
    parser.add_argument(
        "--group-var",
        type=str,
        default=None,
        metavar="COL",
        help="Column identifying transcripts (e.g. transcript_name). "
             "Required when the annotation holds more than one transcript.",
    )
    parser.add_argument(
        "--target-gap-width",
        type=int,
        default=100,
        metavar="N",
        help="Width in bp that gaps between exons are shortened to (default: 100).",
    )
    parser.add_argument(
        "--arrow-min-intron-length",
        type=int,
        default=0,
        metavar="N",
        help="Introns shorter than this (in plot coordinates) get no strand arrow "
             "(default: 0).",
    )
    parser.add_argument(
        "--format",
        choices=["html", "png", "svg"],
        default="html",
        help="Output format for figures (default: html). "
             "PNG/SVG require vl-convert-python.",
    )
    parser.add_argument(
        "--excel",
        action="store_true",
        default=False,
        help="Also write a multi-sheet Excel workbook ({stem}_data.xlsx) "
             "containing the exons, introns and rescaled table. Requires openpyxl.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if not args.annotation.is_file():
        sys.exit(f"Error: annotation file not found: {args.annotation}")

    args.output_dir.mkdir(parents=True, exist_ok=True)
    fmt = args.format
    stem = args.annotation.stem

    try:
        print(f"[{stem}] Loading annotation: {args.annotation}")
        annotation = io.load_annotation(args.annotation)
        exons = process.get_exons(annotation)
        check_coord_object(exons, "exons")
        print(f"  {len(exons)} exons loaded")

        introns = process.to_intron(exons, group_var=args.group_var)
        print(f"  {len(introns)} introns derived")

        print(f"[{stem}] Shortening gaps (target width: {args.target_gap_width} bp)")
        rescaled = rescale.shorten_gaps(
            exons,
            introns,
            group_var=args.group_var,
            target_gap_width=args.target_gap_width,
        )
    except ValueError as e:
        sys.exit(f"Error: {e}")

    io.save_table(rescaled, args.output_dir / f"{stem}_rescaled.tsv")

    print(f"[{stem}] Generating figures (format: {fmt})")
    io.save_figure(
        transcripts.make_transcript_plot(
            exons, introns,
            group_var=args.group_var,
            title=stem,
            arrow_min_intron_length=args.arrow_min_intron_length,
        ),
        args.output_dir / f"{stem}_transcripts.{fmt}",
    )
    io.save_figure(
        transcripts.make_transcript_plot(
            rescaled.loc[rescaled["type"] != "intron"],
            rescaled.loc[rescaled["type"] == "intron"],
            group_var=args.group_var,
            title=f"{stem} (shortened gaps)",
            rescaled=True,
            arrow_min_intron_length=args.arrow_min_intron_length,
        ),
        args.output_dir / f"{stem}_transcripts_rescaled.{fmt}",
    )

    if args.excel:
        print(f"[{stem}] Writing Excel workbook...")
        sheets = {"exons": exons, "introns": introns, "rescaled": rescaled}
        io.save_excel(sheets, args.output_dir / f"{stem}_data.xlsx")

    print(f"\nDone. Output saved to: {args.output_dir}")


if __name__ == "__main__":
    main()
