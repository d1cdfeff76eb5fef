"""Player and team rating modules."""

from domain.ratings.ranking import RankingService
from domain.ratings.resolver import RatingResolver
from domain.ratings.team import TeamRatingCalculator
from domain.ratings.trend import rating_trend
from domain.ratings.win_probability import (
    calculate_expected_score,
    matchup_probabilities,
    win_probability_percentage,
)

__all__ = [
    "RankingService",
    "RatingResolver",
    "TeamRatingCalculator",
    "calculate_expected_score",
    "matchup_probabilities",
    "rating_trend",
    "win_probability_percentage",
]
