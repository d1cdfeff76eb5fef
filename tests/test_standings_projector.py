"""Unit tests for standings projection."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import pytest

from domain.common import Event, EventStatus, EventType, Player, Team, TeamMember, TeamStanding
from domain.errors import InvalidStateError
from domain.ratings.resolver import RatingResolver
from domain.ratings.team import TeamRatingCalculator
from domain.snapshot import RatingSnapshot
from domain.standings.projector import StandingsProjector, StandingsResult


def _builder(
    team_ratings: dict[str, int | None],
    *,
    created_at: dict[str, datetime] | None = None,
) -> tuple[RatingSnapshot, list[Team]]:
    """One single-player team per entry; ``None`` leaves the team without members."""
    created_at = created_at or {}
    players: list[Player] = []
    members: list[TeamMember] = []
    teams: list[Team] = []
    for team_id, rating in team_ratings.items():
        teams.append(Team(id=team_id, name=f"Team {team_id}", created_at=created_at.get(team_id)))
        if rating is None:
            continue
        player_id = f"{team_id}-player"
        players.append(Player(id=player_id, name=player_id, base_rating=rating))
        members.append(TeamMember(team_id=team_id, player_id=player_id))
    snapshot = RatingSnapshot(
        players=tuple(players),
        teams=tuple(teams),
        team_members=tuple(members),
    )
    return snapshot, teams


def _project(snapshot: RatingSnapshot, events: Sequence[Event], teams: Sequence[Team]) -> StandingsResult:
    projector = StandingsProjector(TeamRatingCalculator(RatingResolver(snapshot)))
    return projector.project(events, teams)


def _event(
    event_id: str,
    points: Sequence[int],
    *,
    status: EventStatus = EventStatus.UPCOMING,
    event_type: EventType = EventType.TOURNAMENT,
    final_standings: Sequence[str] | None = None,
) -> Event:
    return Event(
        id=event_id,
        name=f"Event {event_id}",
        event_type=event_type,
        status=status,
        points=tuple(points),
        final_standings=None if final_standings is None else tuple(final_standings),
    )


def _by_team(result: StandingsResult) -> dict[str, TeamStanding]:
    return {standing.team_id: standing for standing in result.insertion_ordered}


def test_completed_tournament_awards_earned_points_by_placement() -> None:
    snapshot, teams = _builder({"T1": 5000, "T2": 5000, "T3": 5000, "T4": 5000})
    event = _event(
        "E1",
        [10, 6, 3],
        status=EventStatus.COMPLETED,
        final_standings=["T2", "T1", "T3"],
    )

    standings = _by_team(_project(snapshot, [event], teams))

    assert standings["T2"].earned_points == 10
    assert standings["T2"].first_place_finishes == 1
    assert standings["T1"].earned_points == 6
    assert standings["T1"].second_place_finishes == 1
    assert standings["T3"].earned_points == 3
    assert standings["T3"].first_place_finishes == 0
    assert standings["T3"].second_place_finishes == 0
    assert standings["T4"].earned_points == 0
    assert standings["T4"].event_results == ()
    assert all(standing.projected_points == 0 for standing in standings.values())


def test_combined_team_event_counts_paired_finishes() -> None:
    snapshot, teams = _builder({"T1": 5000, "T2": 5000, "T3": 5000, "T4": 5000})
    event = _event(
        "E2",
        [8, 8, 2, 2],
        status=EventStatus.COMPLETED,
        event_type=EventType.COMBINED_TEAM,
        final_standings=["T1", "T4", "T2", "T3"],
    )

    standings = _by_team(_project(snapshot, [event], teams))

    for team_id in ("T1", "T4"):
        assert standings[team_id].earned_points == 8
        assert standings[team_id].first_place_finishes == 1
    for team_id in ("T2", "T3"):
        assert standings[team_id].earned_points == 2
        assert standings[team_id].second_place_finishes == 1


def test_upcoming_event_projects_points_by_team_rating() -> None:
    snapshot, teams = _builder({"low": 5000, "high": 6000, "mid": 5500})

    result = _project(snapshot, [_event("E3", [5, 3])], teams)
    standings = _by_team(result)

    assert standings["high"].projected_points == 5
    assert standings["mid"].projected_points == 3
    assert standings["low"].projected_points == 0
    assert standings["low"].event_results == ()
    assert standings["high"].result_for("E3").is_projected
    assert result.placements("E3") == ["high", "mid"]


def test_in_progress_event_is_projected() -> None:
    snapshot, teams = _builder({"T1": 5200, "T2": 5100})
    event = _event("E1", [4, 2], status=EventStatus.IN_PROGRESS, final_standings=["T2", "T1"])

    standings = _by_team(_project(snapshot, [event], teams))

    assert standings["T1"].projected_points == 4
    assert standings["T2"].projected_points == 2
    assert standings["T1"].earned_points == 0


def test_projection_skips_teams_without_members() -> None:
    snapshot, teams = _builder({"empty": None, "T1": 4000})

    standings = _by_team(_project(snapshot, [_event("E1", [5, 3])], teams))

    assert standings["T1"].projected_points == 5
    assert standings["empty"].projected_points == 0
    assert standings["empty"].event_results == ()


def test_projection_ties_follow_team_creation_order() -> None:
    snapshot, teams = _builder(
        {"late": 5000, "early": 5000},
        created_at={"late": datetime(2025, 3, 1), "early": datetime(2025, 1, 1)},
    )

    result = _project(snapshot, [_event("E1", [5, 3])], teams)

    assert result.placements("E1") == ["early", "late"]


def test_completed_event_without_final_standings_contributes_nothing() -> None:
    snapshot, teams = _builder({"T1": 6000, "T2": 5000})
    event = _event("E1", [10, 5], status=EventStatus.COMPLETED)

    result = _project(snapshot, [event], teams)

    assert all(standing.total_points == 0 for standing in result.insertion_ordered)
    assert result.issues == ()


def test_unknown_and_duplicate_teams_are_skipped_and_reported() -> None:
    snapshot, teams = _builder({"T1": 5000, "T2": 5000})
    event = _event(
        "E1",
        [10, 6, 3, 1],
        status=EventStatus.COMPLETED,
        final_standings=["T1", "ghost", "T1", "T2"],
    )

    result = _project(snapshot, [event], teams)
    standings = _by_team(result)

    assert standings["T1"].earned_points == 10
    assert standings["T2"].earned_points == 1
    assert standings["T2"].result_for("E1").position == 4
    assert [(issue.kind, issue.entity_id) for issue in result.issues] == [
        ("unknown_team", "ghost"),
        ("duplicate_placement", "T1"),
    ]


def test_placements_beyond_points_table_earn_zero() -> None:
    snapshot, teams = _builder({"T1": 5000, "T2": 5000, "T3": 5000})
    event = _event("E1", [3], status=EventStatus.COMPLETED, final_standings=["T3", "T2", "T1"])

    result = _project(snapshot, [event], teams)
    standings = _by_team(result)

    assert standings["T3"].earned_points == 3
    assert standings["T1"].earned_points == 0
    assert standings["T1"].result_for("E1").points == 0
    assert result.placements("E1") == ["T3", "T2", "T1"]


def test_negative_points_table_is_rejected() -> None:
    snapshot, teams = _builder({"T1": 5000})

    with pytest.raises(InvalidStateError):
        _project(snapshot, [_event("E1", [5, -1])], teams)


def test_points_are_conserved_and_projection_bounded() -> None:
    snapshot, teams = _builder({"T1": 6100, "T2": 5900, "T3": 5400, "T4": 5000, "T5": 4700})
    events = [
        _event("E1", [10, 6, 3], status=EventStatus.COMPLETED, final_standings=["T3", "T1", "T5"]),
        _event(
            "E2",
            [8, 8, 2, 2],
            status=EventStatus.COMPLETED,
            event_type=EventType.COMBINED_TEAM,
            final_standings=["T2", "T4", "T1", "T5"],
        ),
        _event("E3", [5, 3]),
        _event("E4", [7, 4, 2, 1, 1, 1, 1]),
    ]

    result = _project(snapshot, events, teams)

    assert sum(standing.earned_points for standing in result.insertion_ordered) == 19 + 20
    assert sum(standing.projected_points for standing in result.insertion_ordered) == 8 + 15
    assert len(result.placements("E3")) == 2
    assert len(result.placements("E4")) == len(teams)


def test_display_order_prefers_earned_then_total_points() -> None:
    snapshot, teams = _builder({"T1": 4000, "T2": 6000, "T3": 5000})
    events = [
        _event("E1", [10, 10, 4], status=EventStatus.COMPLETED, final_standings=["T1", "T3", "T2"]),
        _event("E2", [9, 1]),
    ]

    result = _project(snapshot, events, teams)

    assert [standing.team_id for standing in result.insertion_ordered] == ["T1", "T2", "T3"]
    assert [standing.team_id for standing in result.display_ordered] == ["T3", "T1", "T2"]
    for earlier, later in zip(result.display_ordered, result.display_ordered[1:]):
        assert earlier.earned_points > later.earned_points or (
            earlier.earned_points == later.earned_points
            and earlier.total_points >= later.total_points
        )


def test_standing_carries_team_display_fields() -> None:
    snapshot = RatingSnapshot(teams=(Team(id="T1", name="Reds", color="#f00", logo="reds.png"),))

    standing = _project(snapshot, [], snapshot.teams).insertion_ordered[0]

    assert standing.team_name == "Reds"
    assert standing.team_abbreviation == "TBD"
    assert standing.team_color == "#f00"
    assert standing.team_logo == "reds.png"
