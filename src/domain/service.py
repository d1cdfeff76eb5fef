"""Request-level entry points: read one snapshot, run the pure components over it."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime

from domain.common import (
    MatchupProbabilities,
    PlayerEventRanking,
    PlayerHistory,
    RankedPlayer,
    TeamRatingSummary,
)
from domain.config import EngineConfig
from domain.errors import NotFoundError
from domain.history.assembler import HistoryAssembler
from domain.protocol import RatingStore
from domain.ratings.ranking import RankingService
from domain.ratings.resolver import RatingResolver
from domain.ratings.team import TeamRatingCalculator
from domain.ratings.win_probability import matchup_probabilities
from domain.snapshot import RatingSnapshot, load_snapshot
from domain.standings.projector import StandingsProjector, StandingsResult

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class StandingsEngine:
    """Query facade over a :class:`RatingStore`.

    Every call reads a fresh snapshot, so results reflect the store at call
    time and no state is shared between calls. Unknown ids raise
    :class:`NotFoundError`; nothing is partially returned.
    """

    def __init__(self, store: RatingStore, config: EngineConfig | None = None) -> None:
        self.store = store
        self.config = config or EngineConfig()

    def _resolver(self, snapshot: RatingSnapshot) -> RatingResolver:
        return RatingResolver(snapshot, self.config)

    def standings(self, year: int | None = None) -> StandingsResult:
        snapshot = load_snapshot(self.store, year=year)
        projector = StandingsProjector(TeamRatingCalculator(self._resolver(snapshot)))
        result = projector.project(snapshot.events, snapshot.teams)
        logger.info(
            "computed standings year=%s events=%d teams=%d issues=%d",
            year,
            len(snapshot.events),
            len(snapshot.teams),
            len(result.issues),
        )
        return result

    def rankings(
        self,
        *,
        as_of: datetime | None = None,
        active_only: bool = False,
        include_trend: bool = True,
    ) -> tuple[RankedPlayer, ...]:
        snapshot = load_snapshot(self.store, history_for="all" if include_trend else ())
        ranking = RankingService(self._resolver(snapshot))
        population = None
        if active_only:
            population = [player for player in snapshot.players if player.is_active]
        trend_as_of = (as_of or _utc_now()) if include_trend else None
        ranked = ranking.rank(population, as_of=trend_as_of)
        logger.info("computed rankings players=%d active_only=%s", len(ranked), active_only)
        return ranked

    def global_rank(self, player_id: str) -> int:
        snapshot = load_snapshot(self.store)
        return RankingService(self._resolver(snapshot)).global_rank(player_id)

    def player_rating(self, player_id: str, event_id: str | None = None) -> int:
        snapshot = load_snapshot(self.store)
        if event_id is not None:
            snapshot.event(event_id)
        return self._resolver(snapshot).resolve_id(player_id, event_id)

    def team_rating(self, team_id: str, event_id: str | None = None) -> int | None:
        snapshot = load_snapshot(self.store)
        team = snapshot.team(team_id)
        if event_id is not None:
            snapshot.event(event_id)
        return TeamRatingCalculator(self._resolver(snapshot)).display_rating(team, event_id)

    def team_summary(
        self,
        team_id: str,
        event_id: str | None = None,
        *,
        as_of: datetime | None = None,
    ) -> TeamRatingSummary:
        snapshot = load_snapshot(self.store)
        team = snapshot.team(team_id)
        if event_id is not None:
            snapshot.event(event_id)
        members = TeamRatingCalculator(self._resolver(snapshot)).members(team)
        history = [
            entry for member in members for entry in self.store.get_elo_history(member.id)
        ]
        snapshot = replace(snapshot, elo_history=tuple(history))
        calculator = TeamRatingCalculator(self._resolver(snapshot))
        return calculator.team_summary(team, event_id, as_of=as_of or _utc_now())

    def player_history(self, player_id: str) -> PlayerHistory:
        if self.store.get_player(player_id) is None:
            raise NotFoundError("player", player_id)
        snapshot = load_snapshot(self.store, history_for=[player_id])
        history = HistoryAssembler(snapshot, self.config.history).assemble(snapshot.player(player_id))
        logger.info(
            "assembled history player_id=%s events=%d overall_points=%d votes=%d",
            player_id,
            len(history.event_histories),
            len(history.overall_history),
            history.overall_vote_count,
        )
        return history

    def player_event_rankings(
        self,
        player_id: str,
        *,
        as_of: datetime | None = None,
    ) -> tuple[PlayerEventRanking, ...]:
        if self.store.get_player(player_id) is None:
            raise NotFoundError("player", player_id)
        snapshot = load_snapshot(self.store, history_for=[player_id])
        ranking = RankingService(self._resolver(snapshot))
        return ranking.player_event_rankings(player_id, as_of=as_of or _utc_now())

    def team_matchup(
        self,
        team1_id: str,
        team2_id: str,
        event_id: str | None = None,
    ) -> MatchupProbabilities:
        snapshot = load_snapshot(self.store)
        team1 = snapshot.team(team1_id)
        team2 = snapshot.team(team2_id)
        if event_id is not None:
            snapshot.event(event_id)
        calculator = TeamRatingCalculator(self._resolver(snapshot))
        team1_rating = calculator.team_rating(team1, event_id)
        team2_rating = calculator.team_rating(team2, event_id)
        default = float(self.config.default_rating)
        return matchup_probabilities(
            default if team1_rating is None else team1_rating,
            default if team2_rating is None else team2_rating,
            self.config.scale_factor,
        )


__all__ = ["StandingsEngine"]
