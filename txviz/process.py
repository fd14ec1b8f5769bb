import pandas as pd


def get_exons(annotation: pd.DataFrame) -> pd.DataFrame:
    """Keep only the exon rows of an annotation table.

    Tables without a ``type`` column are assumed to hold exons only.
    """
    if "type" not in annotation.columns:
        return annotation.copy()
    return annotation.loc[annotation["type"] == "exon"].reset_index(drop=True)


def to_intron(exons: pd.DataFrame, group_var: str | None = None) -> pd.DataFrame:
    """Derive introns from exons, one per pair of consecutive exons.

    Introns are defined by the exon boundaries: an intron starts at the end
    of its upstream exon and ends at the start of its downstream exon.  This
    is the definition ``rescale.shorten_gaps`` expects.  Exons that touch or
    overlap produce no intron.

    All other columns are copied from the upstream exon and ``type`` is set
    to ``"intron"``.

    Args:
        exons: columns ``seqname, start, end, strand`` plus any others.
        group_var: column distinguishing transcripts.  When None, all exons
            are treated as a single transcript.
    """
    if group_var is not None and group_var not in exons.columns:
        raise ValueError(f"group_var '{group_var}' is not a column of exons")

    groups = exons.groupby(group_var, sort=True) if group_var is not None else [(None, exons)]
    introns = []
    for _, tx in groups:
        tx = tx.sort_values(["start", "end"], kind="mergesort")
        tx_introns = tx.iloc[:-1].copy()
        tx_introns["start"] = tx["end"].to_numpy()[:-1]
        tx_introns["end"] = tx["start"].to_numpy()[1:]
        # adjacent or overlapping exons leave no gap to form an intron
        tx_introns = tx_introns.loc[tx_introns["end"] > tx_introns["start"] + 1]
        introns.append(tx_introns)

    if not introns:
        return exons.iloc[0:0].assign(type=pd.Series(dtype=str))
    df = pd.concat(introns, ignore_index=True)
    df["type"] = "intron"
    return df
