"""
Unit tests for cross-image consensus clustering.
"""

import pytest

from design_dna.services.colors.clustering import (
    CLUSTER_QUANT_STEP, DEFAULT_TOP_K, ColorCluster, bucket_key, cluster_colors
)
from design_dna.services.colors.errors import InvalidParameter
from design_dna.services.colors.extraction import PIXEL_QUANT_STEP, ExtractedColor


class TestBucketKey:

    def test_grids_stay_distinct(self):
        assert CLUSTER_QUANT_STEP == 32
        assert CLUSTER_QUANT_STEP != PIXEL_QUANT_STEP
        assert DEFAULT_TOP_K == 8

    def test_key_rounds_half_up(self):
        assert bucket_key((16, 15, 48)) == (32, 0, 64)

    def test_key_may_reach_256(self):
        assert bucket_key((255, 254, 0)) == (256, 256, 0)


class TestClusterColors:

    def test_empty_input(self):
        assert cluster_colors([]) == []

    def test_reds_group_before_green(self):
        """Two near-reds share a bucket and outrank a single green"""
        clusters = cluster_colors(
            [{"hex": "#ff0000"}, {"hex": "#fe0101"}, {"hex": "#00ff00"}], top_k=8
        )

        assert clusters == [
            ColorCluster(hex="#ff0101", count=2),
            ColorCluster(hex="#00ff00", count=1),
        ]

    def test_order_changes_representative(self):
        """Same multiset, different order, different representative"""
        forward = cluster_colors([{"hex": "#000000"}, {"hex": "#010101"}, {"hex": "#000000"}, {"hex": "#000000"}])
        backward = cluster_colors([{"hex": "#000000"}, {"hex": "#000000"}, {"hex": "#000000"}, {"hex": "#010101"}])

        # 0 -> round(0.5)=1 -> round(2/3)=1 -> round(3/4)=1
        # 0 -> 0 -> 0 -> round(1/4)=0
        assert forward[0].hex == "#010101"
        assert backward[0].hex == "#000000"

    def test_sorted_by_count_with_first_seen_ties(self):
        clusters = cluster_colors([
            {"hex": "#0000ff"},
            {"hex": "#ffffff"},
            {"hex": "#ff0000"},
            {"hex": "#ff0000"},
            {"hex": "#fdfdfd"},
        ])

        assert [c.count for c in clusters] == [2, 2, 1]
        assert clusters[0].hex == "#fefefe"
        assert clusters[1].hex == "#ff0000"
        assert clusters[2].hex == "#0000ff"

    def test_fewer_buckets_than_top_k_not_padded(self):
        clusters = cluster_colors([{"hex": "#000000"}, {"hex": "#ffffff"}], top_k=8)
        assert len(clusters) == 2

    def test_top_k_truncates(self):
        colors = [{"hex": f"#{value:02x}0000"} for value in range(0, 256, 32)]

        clusters = cluster_colors(colors, top_k=3)

        assert len(clusters) == 3

    def test_malformed_entries_are_skipped(self):
        clusters = cluster_colors([
            {"hex": "#ff0000"},
            {"hex": None},
            {},
            {"hex": "red"},
            {"hex": "#12345"},
            {"hex": "#gg0000"},
            {"name": "legacy"},
            {"hex": "00ff00"},
        ])

        assert clusters == [
            ColorCluster(hex="#ff0000", count=1),
            ColorCluster(hex="#00ff00", count=1),
        ]

    def test_accepts_extracted_colors(self):
        palette = [
            ExtractedColor(hex="#102030", rgb=(16, 32, 48), percentage=60),
            ExtractedColor(hex="#112131", rgb=(17, 33, 49), percentage=40),
        ]

        clusters = cluster_colors(palette)

        assert clusters == [ColorCluster(hex="#112131", count=2)]

    def test_uppercase_hex_is_normalized(self):
        assert cluster_colors([{"hex": "#AABBCC"}]) == [ColorCluster(hex="#aabbcc", count=1)]

    def test_reclustering_output_keeps_membership(self):
        """Feeding clusters back in keeps each one in its own bucket"""
        colors = [
            {"hex": "#2060c0"}, {"hex": "#2264c4"}, {"hex": "#f0f0f0"},
            {"hex": "#eeeeee"}, {"hex": "#101010"}, {"hex": "#c02040"},
        ]
        first = cluster_colors(colors)

        second = cluster_colors([cluster.to_dict() for cluster in first])

        assert [c.hex for c in second] == [c.hex for c in first]
        assert all(c.count == 1 for c in second)

    def test_deterministic_for_same_order(self):
        colors = [{"hex": f"#{(i * 37) % 256:02x}{(i * 91) % 256:02x}{(i * 13) % 256:02x}"} for i in range(50)]
        assert cluster_colors(colors) == cluster_colors(list(colors))

    @pytest.mark.parametrize("top_k", [0, -3, True])
    def test_invalid_top_k(self, top_k):
        with pytest.raises(InvalidParameter):
            cluster_colors([{"hex": "#000000"}], top_k=top_k)

    def test_to_dict(self):
        assert ColorCluster(hex="#abcdef", count=3).to_dict() == {"hex": "#abcdef", "count": 3}
