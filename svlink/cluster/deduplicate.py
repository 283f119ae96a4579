import bisect
import itertools
from typing import Iterable, List, Optional, Tuple

from ..link import TargetLink
from ..util import logger, resolve_settings
from .constants import DEFAULTS


def _find_overlapping(
    merged_links: List[TargetLink], keys: List[Tuple], link: TargetLink, max_width: int
) -> Optional[int]:
    """
    find the index of the first merged link that overlaps the input link

    merged intervals are never wider than the widest input interval so only entries starting within that
    distance of the input link are checked
    """
    lower = bisect.bisect_left(keys, (link.left.contig, link.left.start - max_width + 1))
    upper = bisect.bisect_left(keys, (link.left.contig, link.left.end + 1))
    for index in range(lower, upper):
        if merged_links[index].overlaps(link):
            return index
    return None


def deduplicate_target_links(links: Iterable[TargetLink]) -> List[TargetLink]:
    """
    merge overlapping links with the same strands until no two links in the result overlap

    Links are processed in sort order. Each link is merged with the first existing result it overlaps, and the
    (narrower) merged link is checked again against the remaining results until nothing else overlaps it

    Args:
        links: candidate links, for example the output of clustering

    Returns:
        the non-overlapping links ordered by left then right interval
    """
    ordered = sorted(links, key=lambda link: link.sort_key)
    if not ordered:
        return []
    # either side can become the left side when a merge changes the canonical order
    max_width = max(max(len(link.left), len(link.right)) for link in ordered)
    merged_links: List[TargetLink] = []
    keys: List[Tuple] = []

    for link in ordered:
        current = link
        index = _find_overlapping(merged_links, keys, current, max_width)
        while index is not None:
            keys.pop(index)
            current = merged_links.pop(index).merge(current)
            index = _find_overlapping(merged_links, keys, current, max_width)
        position = bisect.bisect_left(keys, current.sort_key)
        keys.insert(position, current.sort_key)
        merged_links.insert(position, current)

    logger.info(f'deduplicated {len(ordered)} target links down to {len(merged_links)}')
    return merged_links


def reconcile_partitions(*partitions: Iterable[TargetLink]) -> List[TargetLink]:
    """
    deduplicate links computed independently for separate partitions of the genome. Links near the partition
    boundaries may have been found on both sides
    """
    return deduplicate_target_links(itertools.chain.from_iterable(partitions))


def filter_links(
    links: Iterable[TargetLink],
    min_split_count: Optional[int] = None,
    min_pair_count: Optional[int] = None,
) -> List[TargetLink]:
    """
    keep links which have enough split alignments or enough discordant pairs

    Args:
        min_split_count: see DEFAULTS.min_split_count
        min_pair_count: see DEFAULTS.min_pair_count
    """
    settings = resolve_settings(DEFAULTS, min_split_count=min_split_count, min_pair_count=min_pair_count)
    links = list(links)
    passed = [
        link
        for link in links
        if link.split_count >= settings['min_split_count'] or link.pair_count >= settings['min_pair_count']
    ]
    logger.info(f'filtered {len(links)} target links down to {len(passed)} (removed {len(links) - len(passed)})')
    return passed
