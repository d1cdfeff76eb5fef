"""Team standings: earned points from recorded placements, projected points from ratings."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from domain.common import (
    DataIssue,
    Event,
    EventResult,
    EventType,
    Team,
    TeamStanding,
    creation_order_key,
)
from domain.errors import InvalidStateError
from domain.ratings.team import TeamRatingCalculator

logger = logging.getLogger(__name__)

UNKNOWN_TEAM_ISSUE = "unknown_team"
DUPLICATE_PLACEMENT_ISSUE = "duplicate_placement"


@dataclass
class _StandingAccumulator:
    team: Team
    earned_points: int = 0
    projected_points: int = 0
    first_place_finishes: int = 0
    second_place_finishes: int = 0
    event_results: list[EventResult] = field(default_factory=list)

    def freeze(self) -> TeamStanding:
        return TeamStanding(
            team_id=self.team.id,
            team_name=self.team.name,
            team_abbreviation=self.team.abbreviation or "TBD",
            team_color=self.team.color,
            team_logo=self.team.logo,
            earned_points=self.earned_points,
            projected_points=self.projected_points,
            first_place_finishes=self.first_place_finishes,
            second_place_finishes=self.second_place_finishes,
            event_results=tuple(self.event_results),
        )


@dataclass(frozen=True)
class StandingsResult:
    """Both orderings of the same standings plus any skipped input.

    ``insertion_ordered`` follows the team input order and is what callers use
    to map placements back to team ids; ``display_ordered`` is for showing.
    """

    display_ordered: tuple[TeamStanding, ...]
    insertion_ordered: tuple[TeamStanding, ...]
    issues: tuple[DataIssue, ...] = ()

    def placements(self, event_id: str) -> list[str]:
        """Team ids holding a result for the event, by finishing position."""
        placed = [
            (result.position, index, standing.team_id)
            for index, standing in enumerate(self.insertion_ordered)
            if (result := standing.result_for(event_id)) is not None
        ]
        return [team_id for _, _, team_id in sorted(placed)]


def _result(event: Event, *, points: int, placement: int, is_projected: bool) -> EventResult:
    return EventResult(
        event_id=event.id,
        event_name=event.name,
        event_symbol=event.symbol,
        event_abbreviation=event.abbreviation,
        points=points,
        position=placement + 1,
        is_projected=is_projected,
    )


def display_sort_key(standing: TeamStanding) -> tuple[int, int]:
    return (-standing.earned_points, -standing.total_points)


class StandingsProjector:
    """Walk events in order and accumulate per-team standings.

    Completed events are authoritative and never re-derived from ratings; every
    other status is projected from current team ratings for that event.
    """

    def __init__(self, team_ratings: TeamRatingCalculator) -> None:
        self.team_ratings = team_ratings

    def project(self, events: Iterable[Event], teams: Sequence[Team]) -> StandingsResult:
        accumulators = {team.id: _StandingAccumulator(team=team) for team in teams}
        issues: list[DataIssue] = []

        for event in events:
            _validate_points(event)
            if event.is_completed:
                if event.final_standings is None:
                    logger.debug("completed event without final standings event_id=%s", event.id)
                    continue
                issues.extend(self._apply_final_standings(event, accumulators))
            else:
                self._apply_projection(event, teams, accumulators)

        insertion_ordered = tuple(accumulators[team.id].freeze() for team in teams)
        display_ordered = tuple(sorted(insertion_ordered, key=display_sort_key))
        return StandingsResult(
            display_ordered=display_ordered,
            insertion_ordered=insertion_ordered,
            issues=tuple(issues),
        )

    def _apply_final_standings(
        self,
        event: Event,
        accumulators: dict[str, _StandingAccumulator],
    ) -> list[DataIssue]:
        issues: list[DataIssue] = []
        placed: set[str] = set()

        for placement, team_id in enumerate(event.final_standings or ()):
            accumulator = accumulators.get(team_id)
            if accumulator is None:
                issues.append(
                    _report(
                        UNKNOWN_TEAM_ISSUE,
                        f"final standings of event {event.id} reference unknown team {team_id}",
                        event_id=event.id,
                        entity_id=team_id,
                    )
                )
                continue
            if team_id in placed:
                issues.append(
                    _report(
                        DUPLICATE_PLACEMENT_ISSUE,
                        f"team {team_id} is placed more than once in event {event.id}",
                        event_id=event.id,
                        entity_id=team_id,
                    )
                )
                continue
            placed.add(team_id)

            points = event.points_for(placement)
            accumulator.earned_points += points
            _count_finish(accumulator, event.event_type, placement)
            accumulator.event_results.append(
                _result(event, points=points, placement=placement, is_projected=False)
            )

        return issues

    def _apply_projection(
        self,
        event: Event,
        teams: Sequence[Team],
        accumulators: dict[str, _StandingAccumulator],
    ) -> None:
        rated: list[tuple[float, Team]] = []
        for team in teams:
            rating = self.team_ratings.team_rating(team, event.id, year=event.year)
            if rating is not None:
                rated.append((rating, team))

        rated.sort(key=lambda item: (-item[0], creation_order_key(item[1].created_at, item[1].id)))

        for placement, (rating, team) in enumerate(rated[: len(event.points)]):
            points = event.points[placement]
            accumulator = accumulators[team.id]
            accumulator.projected_points += points
            accumulator.event_results.append(
                _result(event, points=points, placement=placement, is_projected=True)
            )
            logger.debug(
                "projected event_id=%s team_id=%s rating=%.2f position=%d points=%d",
                event.id,
                team.id,
                rating,
                placement + 1,
                points,
            )


def _count_finish(accumulator: _StandingAccumulator, event_type: EventType, placement: int) -> None:
    # Combined-team events pair two teams per slot.
    if event_type == EventType.COMBINED_TEAM:
        if placement < 2:
            accumulator.first_place_finishes += 1
        else:
            accumulator.second_place_finishes += 1
        return

    if placement == 0:
        accumulator.first_place_finishes += 1
    elif placement == 1:
        accumulator.second_place_finishes += 1


def _validate_points(event: Event) -> None:
    negative = [value for value in event.points if value < 0]
    if negative:
        raise InvalidStateError(f"event_id={event.id} has negative points values {negative}")


def _report(kind: str, message: str, *, event_id: str, entity_id: str) -> DataIssue:
    logger.warning("skipping %s: %s", kind, message)
    return DataIssue(kind=kind, message=message, event_id=event_id, entity_id=entity_id)


__all__ = ["StandingsProjector", "StandingsResult", "display_sort_key"]
