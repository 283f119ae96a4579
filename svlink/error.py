class UnsortedEvidenceError(ValueError):
    """
    raised when the evidence stream given to the clusterer is not sorted by the
    contig and start of the evidence source interval
    """
    pass


class NotOverlappingError(ValueError):
    """
    raised when two intervals or links are combined (intersected/merged) but do not overlap
    """
    pass
