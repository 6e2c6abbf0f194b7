"""
Service for classifying Codeforces ratings into tiers and filter bands.
"""
from typing import List, Optional, Tuple

from schemas import FilterBand, RatingTier


class RatingService:
    """Pure lookups over the Codeforces rating table."""

    # Highest first; lower bounds are inclusive
    TIERS: Tuple[RatingTier, ...] = (
        RatingTier(min_rating=3000, title="Legendary Grandmaster", css_class="legendary-grandmaster"),
        RatingTier(min_rating=2600, title="International Grandmaster", css_class="international-grandmaster"),
        RatingTier(min_rating=2400, title="Grandmaster", css_class="grandmaster"),
        RatingTier(min_rating=2300, title="International Master", css_class="international-master"),
        RatingTier(min_rating=2100, title="Master", css_class="master"),
        RatingTier(min_rating=1900, title="Candidate Master", css_class="candidate-master"),
        RatingTier(min_rating=1600, title="Expert", css_class="expert"),
        RatingTier(min_rating=1400, title="Specialist", css_class="specialist"),
        RatingTier(min_rating=1200, title="Pupil", css_class="pupil"),
    )
    LOWEST_TIER = RatingTier(min_rating=0, title="Newbie", css_class="newbie")

    # (lower bound inclusive, upper bound exclusive); None means open-ended
    BANDS = {
        FilterBand.EXPERT: (1600, None),
        FilterBand.SPECIALIST: (1400, 1600),
        FilterBand.PUPIL: (1200, 1400),
        FilterBand.NEWBIE: (None, 1200),
    }

    @staticmethod
    def classify_rating(rating: int) -> RatingTier:
        """
        Map a rating to its tier.

        Args:
            rating: Current rating (0 for unrated users)

        Returns:
            The first tier whose lower bound the rating reaches, or Newbie
        """
        for tier in RatingService.TIERS:
            if rating >= tier.min_rating:
                return tier
        return RatingService.LOWEST_TIER

    @staticmethod
    def all_tiers() -> List[RatingTier]:
        return list(RatingService.TIERS) + [RatingService.LOWEST_TIER]

    @staticmethod
    def in_band(rating: int, band: FilterBand) -> bool:
        """Check whether a rating falls inside a filter band."""
        if band == FilterBand.ALL:
            return True

        lower, upper = RatingService.BANDS[band]
        if lower is not None and rating < lower:
            return False
        if upper is not None and rating >= upper:
            return False
        return True

    @staticmethod
    def parse_band(value: Optional[str]) -> FilterBand:
        """
        Parse a filter band name.

        Raises:
            ValueError: If the value is not a known band
        """
        if not value:
            return FilterBand.ALL
        return FilterBand(value.strip().lower())

    @staticmethod
    def format_change(delta: int) -> str:
        if delta > 0:
            return f"+{delta}"
        return str(delta)

    @staticmethod
    def change_class(delta: int) -> str:
        if delta > 0:
            return "positive"
        if delta < 0:
            return "negative"
        return "neutral"
