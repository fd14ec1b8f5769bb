# Shared constants used across all figure modules.
# Order here controls legend order and color assignment.

FEATURE_TYPES = [
    "exon",
    "CDS",
    "UTR",
    "five_prime_utr",
    "three_prime_utr",
    "start_codon",
    "stop_codon",
]

PALETTE = [
    "#2E86C1",  # blue         – exon
    "#1170AA",  # darker blue  – CDS
    "#93C47D",  # light green  – UTR
    "#6AA84F",  # med green    – 5' UTR
    "#006616",  # dark green   – 3' UTR
    "#FF9A00",  # orange       – start codon
    "#B22222",  # red          – stop codon
]

# Fallback colors for feature types not listed above
EXTRA_PALETTE = ["#888888", "#ffcd3a", "#81B4C7", "#000000", "#CFCFCF"]

INTRON_COLOR = "#000000"

# Arrow marker shapes drawn on introns, by strand
STRAND_SHAPES = {"+": "triangle-right", "-": "triangle-left"}
