import pytest

from svlink.cluster import EvidenceClusterer, cluster_evidence, find_target_links
from svlink.constants import EVIDENCE_CLASS
from svlink.error import UnsortedEvidenceError
from svlink.interval import GenomicInterval
from svlink.link import Evidence, TargetLink


def evidence(left, left_strand, right, right_strand, evidence_class=EVIDENCE_CLASS.PAIR, **kwargs):
    """
    build evidence from (contig, start, end) tuples
    """
    return Evidence(
        GenomicInterval(*left),
        left_strand,
        GenomicInterval(*right) if right is not None else None,
        right_strand,
        evidence_class,
        **kwargs,
    )


def link(left, left_strand, right, right_strand, split_count=0, pair_count=0):
    return TargetLink(GenomicInterval(*left), left_strand, GenomicInterval(*right), right_strand, split_count, pair_count)


class TestClusterEvidence:
    def test_empty(self):
        assert list(cluster_evidence([])) == []

    def test_single(self):
        result = list(cluster_evidence([evidence((0, 100, 200), True, (0, 500, 600), False, EVIDENCE_CLASS.SPLIT)]))
        assert result == [link((0, 100, 200), True, (0, 500, 600), False, 1, 0)]

    def test_discordant_pairs(self):
        # the first and third pairs point at the same distal target, the second elsewhere
        evidence_list = [
            evidence((0, 1401, 1600), True, (0, 499550, 500100), False),
            evidence((0, 1426, 1625), True, (0, 599550, 600100), False),
            evidence((0, 1451, 1650), True, (0, 499575, 500100), False),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [
            link((0, 1426, 1625), True, (0, 599550, 600100), False, 0, 1),
            link((0, 1451, 1600), True, (0, 499575, 500100), False, 0, 2),
        ]

    def test_counts_by_evidence_class(self):
        evidence_list = [
            evidence((0, 100, 200), True, (0, 500, 600), False, EVIDENCE_CLASS.SPLIT),
            evidence((0, 110, 210), True, (0, 510, 610), False, EVIDENCE_CLASS.PAIR),
            evidence((0, 120, 220), True, (0, 520, 620), False, EVIDENCE_CLASS.SPLIT),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [link((0, 120, 200), True, (0, 520, 600), False, 2, 1)]

    def test_strands_must_match(self):
        evidence_list = [
            evidence((0, 100, 200), True, (0, 500, 600), False),
            evidence((0, 110, 210), True, (0, 510, 610), True),
            evidence((0, 120, 220), False, (0, 520, 620), False),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [
            link((0, 100, 200), True, (0, 500, 600), False, 0, 1),
            link((0, 110, 210), True, (0, 510, 610), True, 0, 1),
            link((0, 120, 220), False, (0, 520, 620), False, 0, 1),
        ]

    def test_first_open_cluster_absorbs(self):
        evidence_list = [
            evidence((0, 100, 200), True, (0, 500, 600), False),
            evidence((0, 150, 250), True, (0, 610, 700), False),
            # overlaps both open clusters on the left and right sides
            evidence((0, 180, 260), True, (0, 590, 620), False),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [
            link((0, 150, 250), True, (0, 610, 700), False, 0, 1),
            link((0, 180, 200), True, (0, 590, 600), False, 0, 2),
        ]

    def test_canonical_form(self):
        evidence_list = [
            evidence((0, 5000, 5100), True, (0, 100, 200), False),
            evidence((0, 5050, 5150), True, (0, 150, 250), False),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [link((0, 150, 200), False, (0, 5050, 5100), True, 0, 2)]

    def test_interchromosomal(self):
        evidence_list = [
            evidence((1, 100, 200), True, (0, 500, 600), False),
            evidence((1, 150, 250), True, (0, 550, 650), False),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [link((0, 550, 600), False, (1, 150, 200), True, 0, 2)]

    def test_closed_cluster_not_reopened(self):
        evidence_list = [
            evidence((0, 100, 200), True, (0, 500, 600), False),
            evidence((0, 300, 400), True, (0, 5000, 6000), False),
            # would overlap the first link on the right side but the left side has been passed
            evidence((0, 350, 450), True, (0, 550, 650), False),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [
            link((0, 100, 200), True, (0, 500, 600), False, 0, 1),
            link((0, 300, 400), True, (0, 5000, 6000), False, 0, 1),
            link((0, 350, 450), True, (0, 550, 650), False, 0, 1),
        ]

    def test_emits_lazily(self):
        consumed = []

        def stream():
            for item in [
                evidence((0, 100, 200), True, (1, 1000, 1100), False),
                evidence((0, 500, 600), True, (1, 5000, 5100), False),
                evidence((0, 900, 1000), True, (1, 9000, 9100), False),
            ]:
                consumed.append(item)
                yield item

        links = cluster_evidence(stream())
        first = next(links)
        assert first == link((0, 100, 200), True, (1, 1000, 1100), False, 0, 1)
        assert len(consumed) == 2
        assert len(list(links)) == 2
        assert len(consumed) == 3

    def test_contig_change_closes_clusters(self):
        consumed = []

        def stream():
            for item in [
                evidence((0, 100, 200), True, (0, 1000, 1100), False),
                evidence((1, 100, 200), True, (1, 1000, 1100), False),
            ]:
                consumed.append(item)
                yield item

        links = cluster_evidence(stream())
        assert next(links) == link((0, 100, 200), True, (0, 1000, 1100), False, 0, 1)
        assert len(consumed) == 2
        assert list(links) == [link((1, 100, 200), True, (1, 1000, 1100), False, 0, 1)]

    def test_output_ordered_while_wide_cluster_open(self):
        evidence_list = [
            evidence((0, 100, 10000), True, (2, 1, 100), False),
            evidence((0, 200, 300), True, (3, 1, 100), False),
            evidence((0, 400, 500), True, (4, 1, 100), False),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [
            link((0, 100, 10000), True, (2, 1, 100), False, 0, 1),
            link((0, 200, 300), True, (3, 1, 100), False, 0, 1),
            link((0, 400, 500), True, (4, 1, 100), False, 0, 1),
        ]

    def test_unsorted_error(self):
        evidence_list = [
            evidence((0, 500, 600), True, (0, 5000, 5100), False),
            evidence((0, 100, 200), True, (0, 1000, 1100), False),
        ]
        with pytest.raises(UnsortedEvidenceError):
            list(cluster_evidence(evidence_list))

    def test_unsorted_contig_error(self):
        evidence_list = [
            evidence((1, 100, 200), True, (1, 5000, 5100), False),
            evidence((0, 500, 600), True, (0, 1000, 1100), False),
        ]
        with pytest.raises(ValueError):
            list(cluster_evidence(evidence_list))

    def test_skip_without_distal_target(self):
        evidence_list = [
            evidence((0, 100, 200), True, None, False),
            evidence((0, 150, 250), True, (0, 500, 600), False),
        ]
        result = list(cluster_evidence(evidence_list))
        assert result == [link((0, 150, 250), True, (0, 500, 600), False, 0, 1)]

    def test_min_evidence_mapq(self):
        evidence_list = [
            evidence((0, 100, 200), True, (0, 500, 600), False, mapping_quality=10),
            evidence((0, 150, 250), True, (0, 550, 650), False, mapping_quality=60),
            evidence((0, 160, 260), True, (0, 560, 660), False),
        ]
        result = list(cluster_evidence(evidence_list, min_evidence_mapq=20))
        assert result == [link((0, 160, 250), True, (0, 560, 650), False, 0, 2)]
        result = list(cluster_evidence(evidence_list))
        assert result == [link((0, 160, 200), True, (0, 560, 600), False, 0, 3)]

    def test_min_evidence_mapq_from_environment(self, monkeypatch):
        monkeypatch.setenv('SVLINK_MIN_EVIDENCE_MAPQ', '30')
        assert EvidenceClusterer().min_evidence_mapq == 30
        assert EvidenceClusterer(min_evidence_mapq=5).min_evidence_mapq == 5

    def test_restart_on_new_input(self):
        evidence_list = [evidence((0, 100, 200), True, (0, 500, 600), False)]
        clusterer = EvidenceClusterer()
        assert list(clusterer.cluster(evidence_list)) == list(clusterer.cluster(evidence_list))


class TestFindTargetLinks:
    def test_cluster_and_deduplicate(self):
        evidence_list = [
            evidence((0, 100, 200), True, (0, 500, 600), False, EVIDENCE_CLASS.SPLIT),
            evidence((0, 300, 400), True, (0, 5000, 6000), False),
            # same breakpoint as the first but the first cluster was already closed
            evidence((0, 550, 650), False, (0, 150, 250), True, EVIDENCE_CLASS.SPLIT),
        ]
        result = find_target_links(evidence_list)
        assert result == [
            link((0, 150, 200), True, (0, 550, 600), False, 2, 0),
            link((0, 300, 400), True, (0, 5000, 6000), False, 0, 1),
        ]

    def test_filter(self):
        evidence_list = [
            evidence((0, 100, 200), True, (0, 500, 600), False, EVIDENCE_CLASS.SPLIT),
            evidence((0, 110, 210), True, (0, 510, 610), False, EVIDENCE_CLASS.SPLIT),
            evidence((0, 300, 400), True, (0, 5000, 6000), False),
        ]
        result = find_target_links(evidence_list, min_split_count=2, min_pair_count=2)
        assert result == [link((0, 110, 200), True, (0, 510, 600), False, 2, 0)]


class TestLogging:
    def test_summary_logged(self, caplog):
        evidence_list = [
            evidence((0, 100, 200), True, (0, 500, 600), False),
            evidence((0, 150, 250), True, None, False),
            evidence((0, 150, 250), True, (0, 550, 650), False, EVIDENCE_CLASS.SPLIT),
        ]
        with caplog.at_level('DEBUG', logger='svlink'):
            list(cluster_evidence(evidence_list))
        assert 'clustered 3 evidence items (1 skipped) into 1 target links' in caplog.text
