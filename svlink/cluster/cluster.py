import heapq
import itertools
from typing import Iterable, Iterator, List, Optional, Tuple

from ..error import UnsortedEvidenceError
from ..interval import GenomicInterval
from ..link import Evidence, TargetLink
from ..util import logger, resolve_settings
from .constants import DEFAULTS


class ClusterBuilder:
    """
    an open cluster: the link built so far and the stream-side interval of the evidence that formed it
    """

    def __init__(self, evidence: Evidence, order: int):
        self.link = TargetLink.from_evidence(evidence)
        self.source = evidence.source
        self.order = order

    @property
    def order_key(self) -> Tuple:
        return self.source.key + (self.order,)

    def accepts(self, evidence: Evidence) -> bool:
        left, left_strand, right, right_strand = evidence.canonical()
        return (
            left_strand == self.link.left_strand
            and right_strand == self.link.right_strand
            and self.link.left.overlaps(left)
            and self.link.right.overlaps(right)
        )

    def absorb(self, evidence: Evidence):
        self.link = self.link.add_evidence(evidence)
        if self.source.overlaps(evidence.source):
            self.source = self.source.intersect(evidence.source)

    def is_closed_at(self, position: GenomicInterval) -> bool:
        """
        True if no evidence starting at or after the given position can reach this cluster
        """
        return self.source.contig != position.contig or self.source.end < position.start


def check_evidence_order(previous: Optional[GenomicInterval], current: GenomicInterval):
    """
    Raises:
        UnsortedEvidenceError: the current evidence sorts before the previous one
    """
    if previous is None:
        return
    if (current.contig, current.start) < (previous.contig, previous.start):
        raise UnsortedEvidenceError(
            'evidence must be sorted by contig and start. {} was given after {}'.format(current, previous)
        )


class EvidenceClusterer:
    """
    Groups a sorted stream of evidence into target links in a single pass

    Evidence is folded into the first open cluster (by stream position) that overlaps it on both sides with the
    same strands, narrowing the cluster intervals to their intersection. Clusters are closed once the stream has
    moved past the interval they were built on and emitted in order of their left interval.
    """

    def __init__(self, min_evidence_mapq: Optional[int] = None):
        """
        Args:
            min_evidence_mapq: evidence with a known mapping quality below this is ignored (see DEFAULTS)
        """
        settings = resolve_settings(DEFAULTS, min_evidence_mapq=min_evidence_mapq)
        self.min_evidence_mapq = settings['min_evidence_mapq']

    def is_usable(self, evidence: Evidence) -> bool:
        if not evidence.has_distal_target:
            return False
        if evidence.mapping_quality is not None and evidence.mapping_quality < self.min_evidence_mapq:
            return False
        return True

    def cluster(self, evidence_stream: Iterable[Evidence]) -> Iterator[TargetLink]:
        """
        Args:
            evidence_stream: evidence sorted by the contig and start of its left interval

        Returns:
            links in order of their left interval

        Raises:
            UnsortedEvidenceError: the input is not sorted
        """
        open_clusters: List[ClusterBuilder] = []
        closed: List[Tuple] = []
        counter = itertools.count()
        previous = None
        consumed = 0
        skipped = 0
        emitted = 0

        for evidence in evidence_stream:
            position = evidence.source
            check_evidence_order(previous, position)
            previous = position
            consumed += 1

            still_open = []
            for builder in open_clusters:
                if builder.is_closed_at(position):
                    heapq.heappush(closed, (builder.link.sort_key, builder.order, builder.link))
                else:
                    still_open.append(builder)
            open_clusters = still_open

            if not self.is_usable(evidence):
                skipped += 1
            else:
                matches = [b for b in open_clusters if b.accepts(evidence)]
                if matches:
                    min(matches, key=lambda b: b.order_key).absorb(evidence)
                else:
                    open_clusters.append(ClusterBuilder(evidence, next(counter)))

            # nothing opened later can start before the current position or any cluster that is still open
            watermark = min(
                [(position.contig, position.start)]
                + [(b.link.left.contig, b.link.left.start) for b in open_clusters]
            )
            while closed and closed[0][0][:2] <= watermark:
                emitted += 1
                yield heapq.heappop(closed)[2]

        for builder in open_clusters:
            heapq.heappush(closed, (builder.link.sort_key, builder.order, builder.link))
        while closed:
            emitted += 1
            yield heapq.heappop(closed)[2]
        logger.debug(f'clustered {consumed} evidence items ({skipped} skipped) into {emitted} target links')


def cluster_evidence(evidence_stream: Iterable[Evidence], **kwargs) -> Iterator[TargetLink]:
    """
    cluster a sorted stream of evidence into target links (see :class:`EvidenceClusterer`)
    """
    return EvidenceClusterer(**kwargs).cluster(evidence_stream)
