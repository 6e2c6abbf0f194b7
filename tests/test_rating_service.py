"""
Unit tests for RatingService.

Covers the tier table boundaries, filter bands and change formatting.
"""
import pytest

from schemas import FilterBand
from services.rating_service import RatingService


class TestClassifyRating:
    """Every threshold is an inclusive lower bound."""

    @pytest.mark.parametrize("rating,expected", [
        (3000, "legendary-grandmaster"),
        (2999, "international-grandmaster"),
        (2600, "international-grandmaster"),
        (2599, "grandmaster"),
        (2400, "grandmaster"),
        (2399, "international-master"),
        (2300, "international-master"),
        (2299, "master"),
        (2100, "master"),
        (2099, "candidate-master"),
        (1900, "candidate-master"),
        (1899, "expert"),
        (1600, "expert"),
        (1599, "specialist"),
        (1400, "specialist"),
        (1399, "pupil"),
        (1200, "pupil"),
        (1199, "newbie"),
        (0, "newbie"),
    ])
    def test_threshold_boundaries(self, rating, expected):
        assert RatingService.classify_rating(rating).css_class == expected

    def test_titles(self):
        assert RatingService.classify_rating(3500).title == "Legendary Grandmaster"
        assert RatingService.classify_rating(1500).title == "Specialist"
        assert RatingService.classify_rating(800).title == "Newbie"

    def test_all_tiers_highest_first(self):
        tiers = RatingService.all_tiers()
        assert len(tiers) == 10
        assert tiers[0].title == "Legendary Grandmaster"
        assert tiers[-1].title == "Newbie"
        bounds = [tier.min_rating for tier in tiers]
        assert bounds == sorted(bounds, reverse=True)


class TestBands:
    """Filter band membership."""

    def test_all_keeps_everything(self):
        for rating in (0, 1199, 1600, 3500):
            assert RatingService.in_band(rating, FilterBand.ALL)

    @pytest.mark.parametrize("rating,band,expected", [
        (1600, FilterBand.EXPERT, True),
        (3200, FilterBand.EXPERT, True),
        (1599, FilterBand.EXPERT, False),
        (1400, FilterBand.SPECIALIST, True),
        (1599, FilterBand.SPECIALIST, True),
        (1600, FilterBand.SPECIALIST, False),
        (1399, FilterBand.SPECIALIST, False),
        (1200, FilterBand.PUPIL, True),
        (1399, FilterBand.PUPIL, True),
        (1400, FilterBand.PUPIL, False),
        (1199, FilterBand.NEWBIE, True),
        (0, FilterBand.NEWBIE, True),
        (1200, FilterBand.NEWBIE, False),
    ])
    def test_band_edges(self, rating, band, expected):
        assert RatingService.in_band(rating, band) is expected

    def test_parse_band(self):
        assert RatingService.parse_band(None) == FilterBand.ALL
        assert RatingService.parse_band("") == FilterBand.ALL
        assert RatingService.parse_band(" Expert ") == FilterBand.EXPERT

    def test_parse_band_rejects_unknown(self):
        with pytest.raises(ValueError):
            RatingService.parse_band("grandmaster")


class TestChangeFormatting:

    def test_format_change(self):
        assert RatingService.format_change(50) == "+50"
        assert RatingService.format_change(-12) == "-12"
        assert RatingService.format_change(0) == "0"

    def test_change_class(self):
        assert RatingService.change_class(5) == "positive"
        assert RatingService.change_class(-5) == "negative"
        assert RatingService.change_class(0) == "neutral"
