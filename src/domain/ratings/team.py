"""Aggregate resolved player ratings into team ratings."""

from __future__ import annotations

import logging
from datetime import datetime

from domain.common import MemberRating, Player, Team, TeamRatingSummary, round_half_up
from domain.ratings.resolver import RatingResolver
from domain.ratings.trend import rating_trend

logger = logging.getLogger(__name__)


class TeamRatingCalculator:
    """Team strength as the mean of member ratings.

    The membership set is the roster for the season plus the captain of a team
    from that season, and the captain counts exactly once whether or not they
    also have a roster row.
    """

    def __init__(self, resolver: RatingResolver) -> None:
        self.resolver = resolver
        self.snapshot = resolver.snapshot

    def members(self, team: Team, *, year: int | None = None) -> list[Player]:
        season = team.year if year is None else year
        members: list[Player] = []
        seen: set[str] = set()

        for roster_row in self.snapshot.members_by_team.get(team.id, ()):
            if season is not None and roster_row.year is not None and roster_row.year != season:
                continue
            if roster_row.player_id in seen:
                continue
            player = self.snapshot.players_by_id.get(roster_row.player_id)
            if player is None:
                logger.warning(
                    "skipping roster row for unknown player team_id=%s player_id=%s",
                    team.id,
                    roster_row.player_id,
                )
                continue
            seen.add(player.id)
            members.append(player)

        captain_in_season = season is None or team.year is None or team.year == season
        if team.captain_id is not None and team.captain_id not in seen and captain_in_season:
            captain = self.snapshot.players_by_id.get(team.captain_id)
            if captain is None:
                logger.warning(
                    "skipping unknown captain team_id=%s captain_id=%s",
                    team.id,
                    team.captain_id,
                )
            else:
                members.append(captain)

        return members

    def team_rating(
        self,
        team: Team,
        event_id: str | None = None,
        *,
        year: int | None = None,
    ) -> float | None:
        """Mean member rating, or ``None`` when the team has nobody to rate."""
        members = self.members(team, year=year)
        if not members:
            return None
        ratings = [self.resolver.resolve(member, event_id) for member in members]
        return sum(ratings) / float(len(ratings))

    def display_rating(self, team: Team, event_id: str | None = None) -> int | None:
        rating = self.team_rating(team, event_id)
        return None if rating is None else round_half_up(rating)

    def team_summary(
        self,
        team: Team,
        event_id: str | None = None,
        *,
        as_of: datetime | None = None,
        window_hours: int | None = None,
    ) -> TeamRatingSummary:
        hours = self.resolver.config.trend_window_hours if window_hours is None else window_hours
        member_ratings: list[MemberRating] = []
        for member in self.members(team):
            trend = None
            if as_of is not None:
                trend = rating_trend(
                    self.snapshot.history_for(member.id),
                    as_of=as_of,
                    window_hours=hours,
                    event_id=event_id,
                )
            member_ratings.append(
                MemberRating(
                    player_id=member.id,
                    player_name=member.name,
                    rating=self.resolver.resolve(member, event_id),
                    is_captain=member.id == team.captain_id,
                    trend=trend,
                )
            )

        average_rating = None
        average_trend = None
        if member_ratings:
            average_rating = round_half_up(
                sum(member.rating for member in member_ratings) / float(len(member_ratings))
            )
            if as_of is not None:
                average_trend = round_half_up(
                    sum(member.trend or 0 for member in member_ratings) / float(len(member_ratings))
                )

        return TeamRatingSummary(
            team_id=team.id,
            team_name=team.name,
            members=tuple(member_ratings),
            average_rating=average_rating,
            average_trend=average_trend,
        )


__all__ = ["TeamRatingCalculator"]
