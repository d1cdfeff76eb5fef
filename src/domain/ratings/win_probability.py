"""Logistic expected-outcome helpers for display."""

from __future__ import annotations

from domain.common import MatchupProbabilities, round_half_up


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float = 400.0) -> float:
    """Compute the Elo expected score for one side.

    The result lies strictly between 0 and 1 for moderate gaps. Gaps large
    enough to exhaust float precision saturate to exactly 0.0 or 1.0 instead
    of overflowing.
    """
    exponent = (opponent_rating - rating) / scale_factor
    try:
        return 1.0 / (1.0 + 10.0**exponent)
    except OverflowError:
        return 0.0


def win_probability_percentage(rating: float, opponent_rating: float, scale_factor: float = 400.0) -> int:
    return round_half_up(calculate_expected_score(rating, opponent_rating, scale_factor) * 100.0)


def matchup_probabilities(
    team1_rating: float,
    team2_rating: float,
    scale_factor: float = 400.0,
) -> MatchupProbabilities:
    team1_probability = calculate_expected_score(team1_rating, team2_rating, scale_factor)
    team2_probability = 1.0 - team1_probability
    return MatchupProbabilities(
        team1_rating=team1_rating,
        team2_rating=team2_rating,
        team1_win_probability=team1_probability,
        team2_win_probability=team2_probability,
        team1_win_percentage=round_half_up(team1_probability * 100.0),
        team2_win_percentage=round_half_up(team2_probability * 100.0),
    )


__all__ = ["calculate_expected_score", "matchup_probabilities", "win_probability_percentage"]
