from ..util import WeakLinkNamespace


DEFAULTS = WeakLinkNamespace()
"""
- min_evidence_mapq
- min_split_count
- min_pair_count
"""
DEFAULTS.add(
    'min_evidence_mapq',
    0,
    defn='evidence from reads with a mapping quality below this value is ignored when clustering. Evidence without '
    'a known mapping quality is always used',
)
DEFAULTS.add(
    'min_split_count',
    1,
    defn='minimum number of split alignments for a link to be kept by the support filter (unless it has enough '
    'discordant pairs)',
)
DEFAULTS.add(
    'min_pair_count',
    1,
    defn='minimum number of discordant read pairs for a link to be kept by the support filter (unless it has '
    'enough split alignments)',
)
