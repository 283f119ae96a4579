from .error import NotOverlappingError


class Interval:
    """
    inclusive integer range
    """

    def __init__(self, start, end=None):
        """
        Args:
            start (int): the start of the interval (inclusive)
            end (int): the end of the interval (inclusive)
        """
        end = start if end is None else end
        for pos in (start, end):
            if isinstance(pos, bool) or not isinstance(pos, int):
                raise TypeError('interval positions must be integers', start, end)
        if start > end:
            raise AttributeError('interval start > end is not allowed', start, end)
        object.__setattr__(self, 'start', start)
        object.__setattr__(self, 'end', end)

    def __setattr__(self, attr, value):
        raise AttributeError('{} is immutable'.format(self.__class__.__name__), attr)

    def __getitem__(self, index):
        try:
            index = int(index)
        except ValueError:
            raise IndexError('index input accessor must be an integer', index)
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('index input accessor is out of bounds: 1 or 2 only', index)

    @classmethod
    def overlaps(cls, first, other):
        """
        checks if two intervals have any portion of their given ranges in common

        Example:
            >>> Interval.overlaps(Interval(1, 4), Interval(5, 7))
            False
            >>> Interval.overlaps(Interval(1, 10), Interval(10, 11))
            True
            >>> Interval.overlaps((1, 10), (10, 11))
            True
        """
        if first[1] < other[0]:
            return False
        elif first[0] > other[1]:
            return False
        return True

    def __len__(self):
        """
        the number of positions covered by the interval

        Example:
            >>> len(Interval(1, 11))
            11
        """
        return self[1] - self[0] + 1

    def __lt__(self, other):
        if self[0] < other[0]:
            return True
        elif self[0] == other[0] and self[1] < other[1]:
            return True
        return False

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    def __eq__(self, other):
        try:
            return self[0] == other[0] and self[1] == other[1]
        except (TypeError, IndexError):
            return False

    def __hash__(self):
        return hash((self[0], self[1]))


class GenomicInterval(Interval):
    """
    an uncertain breakpoint position on a single contig. Coordinates are 1-based and inclusive.
    Intervals on different contigs are ordered by their contig id
    """

    def __init__(self, contig, start, end=None):
        """
        Args:
            contig (int): the id of the contig/reference sequence
            start (int): the first possible position of the breakpoint
            end (int): the last possible position of the breakpoint

        Example:
            >>> GenomicInterval(0, 100, 200)
            GenomicInterval(0:100-200)
        """
        if isinstance(contig, bool) or not isinstance(contig, int):
            raise TypeError('contig must be an integer id', contig)
        Interval.__init__(self, start, end)
        object.__setattr__(self, 'contig', contig)

    @property
    def key(self):
        return (self.contig, self.start, self.end)

    def __repr__(self):
        return '{}({}:{}-{})'.format(self.__class__.__name__, self.contig, self.start, self.end)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __lt__(self, other):
        return self.key < other.key

    def __le__(self, other):
        return self.key <= other.key

    def __gt__(self, other):
        return self.key > other.key

    def __ge__(self, other):
        return self.key >= other.key

    def overlaps(self, other):
        """
        Example:
            >>> GenomicInterval(0, 1, 10).overlaps(GenomicInterval(0, 10, 11))
            True
            >>> GenomicInterval(0, 1, 10).overlaps(GenomicInterval(1, 1, 10))
            False
        """
        return self.contig == other.contig and Interval.overlaps(self, other)

    def intersect(self, other):
        """
        Raises:
            NotOverlappingError: the intervals do not overlap

        Example:
            >>> GenomicInterval(0, 100, 200).intersect(GenomicInterval(0, 150, 250))
            GenomicInterval(0:150-200)
        """
        if not self.overlaps(other):
            raise NotOverlappingError('cannot intersect non-overlapping intervals', self, other)
        return GenomicInterval(self.contig, max(self.start, other.start), min(self.end, other.end))

