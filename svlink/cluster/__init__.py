"""
Sub-package Documentation
==========================

The cluster sub-package turns a sorted stream of breakpoint evidence into a compact set of target links.

Algorithm Overview
--------------------

- Cluster the sorted evidence stream in a single pass (:func:`cluster_evidence`)

    - Fold each evidence item into the first open cluster it overlaps on both sides with matching strands
    - Narrow the cluster intervals to the intersection with each new item
    - Close clusters once the stream has moved past them and emit them in order

- Deduplicate the candidate links (:func:`deduplicate_target_links`)

    - Merge overlapping links with matching strands until no two links overlap
    - Split alignment counts are summed, discordant pair counts take the maximum

- Optionally drop links with too little support (:func:`filter_links`)

"""
from typing import Iterable, List, Optional

from ..link import Evidence, TargetLink
from .cluster import EvidenceClusterer, cluster_evidence
from .constants import DEFAULTS
from .deduplicate import deduplicate_target_links, filter_links, reconcile_partitions


def find_target_links(
    evidence_stream: Iterable[Evidence],
    min_evidence_mapq: Optional[int] = None,
    min_split_count: Optional[int] = None,
    min_pair_count: Optional[int] = None,
) -> List[TargetLink]:
    """
    cluster, deduplicate and filter a sorted stream of evidence

    Returns:
        the deduplicated links with enough support, ordered by left then right interval
    """
    links = deduplicate_target_links(cluster_evidence(evidence_stream, min_evidence_mapq=min_evidence_mapq))
    return filter_links(links, min_split_count=min_split_count, min_pair_count=min_pair_count)


__all__ = [
    'DEFAULTS',
    'EvidenceClusterer',
    'cluster_evidence',
    'deduplicate_target_links',
    'filter_links',
    'find_target_links',
    'reconcile_partitions',
]
