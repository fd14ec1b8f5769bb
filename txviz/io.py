from pathlib import Path

import altair as alt
import pandas as pd


def load_annotation(path: Path) -> pd.DataFrame:
    """Load a transcript annotation table.

    CSV (``.csv``) and Excel (``.xlsx``/``.xls``) files are read as such;
    anything else is read as tab-delimited.  Tables exported from
    GenomicRanges name the chromosome column ``seqnames``; it is renamed to
    ``seqname`` so the table can go straight into ``shorten_gaps``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Annotation file not found: {path}")

    df = _read_file(path)
    df = df.rename(columns={"seqnames": "seqname"})
    for col in ["start", "end"]:
        if col in df.columns:
            if df[col].isna().any():
                raise ValueError(f"'{col}' column of {path.name} contains missing values")
            df[col] = df[col].astype(int)
    if "seqname" in df.columns:
        df["seqname"] = df["seqname"].astype(str)
    return df


def _read_file(path: Path) -> pd.DataFrame:
    """Read CSV, Excel or TSV file based on extension."""
    if path.suffix == ".csv":
        return pd.read_csv(path)
    if path.suffix in (".xlsx", ".xls"):
        return pd.read_excel(path)
    return pd.read_csv(path, sep="\t")


def save_table(df: pd.DataFrame, path: Path):
    """Write a table as TSV, or CSV when *path* ends in ``.csv``."""
    path = Path(path)
    sep = "," if path.suffix == ".csv" else "\t"
    df.to_csv(path, sep=sep, index=False)
    print(f"  Saved: {path.name}")


def save_figure(chart: alt.Chart, path: Path):
    """Save an Altair chart. Format is inferred from the file extension.

    HTML is fully self-contained and interactive.
    PNG and SVG require vl-convert-python to be installed.
    """
    chart.save(str(path))
    print(f"  Saved: {Path(path).name}")


def save_excel(sheets: dict, path: Path):
    """Write a multi-sheet Excel workbook. Requires openpyxl.

    Args:
        sheets: Dict mapping sheet name -> DataFrame (insertion order preserved).
        path: Output path (.xlsx).
    """
    with pd.ExcelWriter(str(path), engine="openpyxl") as writer:
        for sheet_name, df in sheets.items():
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    print(f"  Saved: {Path(path).name}")
