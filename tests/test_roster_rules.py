import pytest

from spirit11.config import INITIAL_BUDGET, get_rules
from spirit11.models import PlayerRecord, RawStats, TeamMember, UserRecord
from spirit11.roster import (
    RosterRejection,
    RosterRuleViolation,
    add_player,
    check_budget_invariant,
    remove_player,
)
from spirit11.valuation import derive_stats


def _player(player_id: str, runs: int = 300, balls: int = 250, innings: int = 6) -> PlayerRecord:
    return PlayerRecord(
        player_id=player_id,
        name=f"Player {player_id}",
        university="University of Colombo",
        category="Batsman",
        stats=derive_stats(RawStats(total_runs=runs, balls_faced=balls, innings_played=innings)),
    )


def _full_team(size: int = 11) -> tuple[TeamMember, ...]:
    return tuple(TeamMember.from_player(_player(f"t{index}")) for index in range(size))


def test_add_deducts_value_and_appends_snapshot():
    user = UserRecord(user_id="u1", username="sam")
    player = _player("p1")

    updated = add_player(user, player)

    assert updated.budget == INITIAL_BUDGET - player.stats.value
    assert [member.player_id for member in updated.team] == ["p1"]
    assert updated.team[0].value == player.stats.value
    # input snapshot is untouched
    assert user.team == ()
    assert user.budget == INITIAL_BUDGET


def test_duplicate_checked_before_team_full():
    team = _full_team()
    user = UserRecord(user_id="u1", username="sam", team=team, budget=INITIAL_BUDGET - sum(m.value for m in team))
    duplicate = _player("t0")

    with pytest.raises(RosterRuleViolation) as exc:
        add_player(user, duplicate)
    assert exc.value.reason is RosterRejection.DUPLICATE
    assert exc.value.message == "This player is already in your team!"


def test_team_full_checked_before_budget():
    user = UserRecord(user_id="u1", username="sam", team=_full_team(), budget=0)

    with pytest.raises(RosterRuleViolation) as exc:
        add_player(user, _player("new"))
    assert exc.value.reason is RosterRejection.TEAM_FULL


def test_insufficient_budget():
    player = _player("p1")
    user = UserRecord(user_id="u1", username="sam", budget=player.stats.value - 50_000)

    with pytest.raises(RosterRuleViolation) as exc:
        add_player(user, player)
    assert exc.value.reason is RosterRejection.INSUFFICIENT_BUDGET


def test_exact_budget_is_enough():
    player = _player("p1")
    user = UserRecord(user_id="u1", username="sam", budget=player.stats.value)

    assert add_player(user, player).budget == 0


def test_remove_refunds_value_paid():
    user = add_player(UserRecord(user_id="u1", username="sam"), _player("p1"))

    # the catalog may have been re-imported since; the refund follows the snapshot
    restored = remove_player(user, "p1")
    assert restored.team == ()
    assert restored.budget == INITIAL_BUDGET


def test_remove_missing_player():
    user = UserRecord(user_id="u1", username="sam")

    with pytest.raises(RosterRuleViolation) as exc:
        remove_player(user, "ghost")
    assert exc.value.reason is RosterRejection.NOT_FOUND


def test_budget_invariant_holds_over_sequence():
    rules = get_rules()
    user = UserRecord(user_id="u1", username="sam")
    players = [_player(f"p{index}", runs=100 + index * 40) for index in range(14)]

    for player in players:
        try:
            user = add_player(user, player, rules=rules)
        except RosterRuleViolation as exc:
            assert exc.reason in (RosterRejection.TEAM_FULL, RosterRejection.INSUFFICIENT_BUDGET)
        assert check_budget_invariant(user, rules=rules)

    for player_id in ("p3", "p0", "p7"):
        user = remove_player(user, player_id)
        assert check_budget_invariant(user, rules=rules)

    assert len(user.team) <= rules.max_team_size
    assert 0 <= user.budget <= rules.initial_budget
