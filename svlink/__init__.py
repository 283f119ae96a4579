"""
clustering and deduplication of structural variant breakpoint evidence into target links
"""
from .constants import EVIDENCE_CLASS, STRAND
from .interval import GenomicInterval, Interval
from .link import Evidence, TargetLink

__version__ = '1.0.0'
