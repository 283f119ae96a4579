from typing import Dict, Optional, Tuple

from .constants import EVIDENCE_CLASS, strand_symbol
from .error import NotOverlappingError
from .interval import GenomicInterval


def check_strand(strand):
    if not isinstance(strand, bool):
        raise TypeError('strand flags must be True (forward) or False (reverse)', strand)
    return strand


def canonical_sides(
    left: GenomicInterval, left_strand: bool, right: GenomicInterval, right_strand: bool
) -> Tuple[GenomicInterval, bool, GenomicInterval, bool]:
    """
    order the two sides of a link so that the left interval never sorts after the right interval

    Example:
        >>> canonical_sides(GenomicInterval(0, 550, 650), False, GenomicInterval(0, 150, 250), True)
        (GenomicInterval(0:150-250), True, GenomicInterval(0:550-650), False)
    """
    if right < left:
        return right, right_strand, left, left_strand
    return left, left_strand, right, right_strand


class Evidence:
    """
    a single anomalous read signal implying a connection between two approximate breakpoint positions
    """

    left_interval: GenomicInterval
    left_strand: bool
    right_interval: Optional[GenomicInterval]
    right_strand: bool
    evidence_class: str
    mapping_quality: Optional[int]

    def __init__(
        self,
        left_interval: GenomicInterval,
        left_strand: bool,
        right_interval: Optional[GenomicInterval],
        right_strand: bool,
        evidence_class: str,
        mapping_quality: Optional[int] = None,
    ):
        """
        Args:
            left_interval: the interval around the read itself. Evidence streams are sorted on this interval
            left_strand: True if the read side of the breakpoint is on the forward strand
            right_interval: the distal interval the evidence points to, None if it has no distal target
            right_strand: True if the distal side of the breakpoint is on the forward strand
            evidence_class (EVIDENCE_CLASS): the type of signal
            mapping_quality: the mapping quality of the read, if known
        """
        object.__setattr__(self, 'left_interval', left_interval)
        object.__setattr__(self, 'left_strand', check_strand(left_strand))
        object.__setattr__(self, 'right_interval', right_interval)
        object.__setattr__(self, 'right_strand', check_strand(right_strand))
        object.__setattr__(self, 'evidence_class', EVIDENCE_CLASS.enforce(evidence_class))
        object.__setattr__(self, 'mapping_quality', mapping_quality)

    def __setattr__(self, attr, value):
        raise AttributeError('Evidence is immutable', attr)

    @property
    def source(self) -> GenomicInterval:
        """the interval the evidence stream is ordered by"""
        return self.left_interval

    @property
    def has_distal_target(self) -> bool:
        return self.right_interval is not None

    @property
    def is_split(self) -> bool:
        return self.evidence_class == EVIDENCE_CLASS.SPLIT

    def canonical(self) -> Tuple[GenomicInterval, bool, GenomicInterval, bool]:
        if not self.has_distal_target:
            raise AttributeError('evidence without a distal target has no canonical link form', self)
        return canonical_sides(self.left_interval, self.left_strand, self.right_interval, self.right_strand)

    def __repr__(self):
        return 'Evidence({}{}, {}{}, {})'.format(
            self.left_interval,
            strand_symbol(self.left_strand),
            self.right_interval,
            strand_symbol(self.right_strand),
            repr(self.evidence_class),
        )


class TargetLink:
    """
    a candidate connection between two breakpoint intervals supported by split alignments and/or discordant pairs

    The link is always stored in canonical form: the left interval never sorts after the right interval.
    The counts are tied to the evidence class, not to a side, and are never swapped
    """

    left: GenomicInterval
    left_strand: bool
    right: GenomicInterval
    right_strand: bool
    split_count: int
    pair_count: int

    def __init__(
        self,
        left: GenomicInterval,
        left_strand: bool,
        right: GenomicInterval,
        right_strand: bool,
        split_count: int = 0,
        pair_count: int = 0,
    ):
        """
        Args:
            left: the first breakpoint interval
            left_strand: True if the first side is on the forward strand
            right: the second breakpoint interval
            right_strand: True if the second side is on the forward strand
            split_count: number of split alignments supporting the link
            pair_count: number of discordant read pairs supporting the link

        Example:
            >>> TargetLink(GenomicInterval(0, 550, 650), False, GenomicInterval(0, 150, 250), True, 1, 2)
            TargetLink(GenomicInterval(0:150-250)+, GenomicInterval(0:550-650)-, split=1, pairs=2)
        """
        if split_count < 0 or pair_count < 0:
            raise ValueError('evidence counts cannot be negative', split_count, pair_count)
        left, left_strand, right, right_strand = canonical_sides(
            left, check_strand(left_strand), right, check_strand(right_strand)
        )
        object.__setattr__(self, 'left', left)
        object.__setattr__(self, 'left_strand', left_strand)
        object.__setattr__(self, 'right', right)
        object.__setattr__(self, 'right_strand', right_strand)
        object.__setattr__(self, 'split_count', int(split_count))
        object.__setattr__(self, 'pair_count', int(pair_count))

    def __setattr__(self, attr, value):
        raise AttributeError('TargetLink is immutable', attr)

    @classmethod
    def from_evidence(cls, evidence: Evidence) -> 'TargetLink':
        """
        a link supported by the single input evidence
        """
        left, left_strand, right, right_strand = evidence.canonical()
        if evidence.is_split:
            return cls(left, left_strand, right, right_strand, split_count=1)
        return cls(left, left_strand, right, right_strand, pair_count=1)

    @property
    def key(self) -> Tuple[int, int, int, int, int, int]:
        return self.left.key + self.right.key

    @property
    def sort_key(self):
        """total ordering used to make the output of deduplication deterministic"""
        return self.key + (self.left_strand, self.right_strand, self.split_count, self.pair_count)

    @property
    def interchromosomal(self) -> bool:
        """bool: True if the two sides are on different contigs"""
        return self.left.contig != self.right.contig

    def __eq__(self, other):
        if not isinstance(other, TargetLink):
            return False
        return self.sort_key == other.sort_key

    def __hash__(self):
        return hash(self.sort_key)

    def __lt__(self, other):
        return self.sort_key < other.sort_key

    def __repr__(self):
        return 'TargetLink({}{}, {}{}, split={}, pairs={})'.format(
            self.left,
            strand_symbol(self.left_strand),
            self.right,
            strand_symbol(self.right_strand),
            self.split_count,
            self.pair_count,
        )

    def compatible(self, other) -> bool:
        """True if both strand flags match"""
        return self.left_strand == other.left_strand and self.right_strand == other.right_strand

    def overlaps(self, other) -> bool:
        """
        True if the links share a strand configuration and their intervals overlap on both sides
        """
        return self.compatible(other) and self.left.overlaps(other.left) and self.right.overlaps(other.right)

    def merge(self, other: 'TargetLink') -> 'TargetLink':
        """
        combine two overlapping links

        The intervals become the intersection of the inputs. Split alignments are independent observations and are
        summed. Discordant pairs found by nearby candidate links are largely the same fragments so the maximum is
        kept instead

        Raises:
            NotOverlappingError: the links do not overlap or do not share a strand configuration
        """
        if not self.overlaps(other):
            raise NotOverlappingError('cannot merge non-overlapping links', self, other)
        return TargetLink(
            self.left.intersect(other.left),
            self.left_strand,
            self.right.intersect(other.right),
            self.right_strand,
            split_count=self.split_count + other.split_count,
            pair_count=max(self.pair_count, other.pair_count),
        )

    def add_evidence(self, evidence: Evidence) -> 'TargetLink':
        """
        narrow the link to the input evidence and count it

        Raises:
            NotOverlappingError: the evidence does not overlap the link
        """
        left, left_strand, right, right_strand = evidence.canonical()
        if left_strand != self.left_strand or right_strand != self.right_strand:
            raise NotOverlappingError('evidence strands do not match the link', self, evidence)
        return TargetLink(
            self.left.intersect(left),
            self.left_strand,
            self.right.intersect(right),
            self.right_strand,
            split_count=self.split_count + (1 if evidence.is_split else 0),
            pair_count=self.pair_count + (0 if evidence.is_split else 1),
        )

    def to_dict(self) -> Dict:
        return {
            'left_contig': self.left.contig,
            'left_start': self.left.start,
            'left_end': self.left.end,
            'left_strand': strand_symbol(self.left_strand),
            'right_contig': self.right.contig,
            'right_start': self.right.start,
            'right_end': self.right.end,
            'right_strand': strand_symbol(self.right_strand),
            'split_count': self.split_count,
            'pair_count': self.pair_count,
        }
