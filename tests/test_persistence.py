from pathlib import Path

import pytest

from spirit11.models import PlayerRecord, RawStats, TeamMember
from spirit11.persistence import Spirit11Store
from spirit11.valuation import derive_stats


def _player(player_id: str, runs: int = 120) -> PlayerRecord:
    return PlayerRecord(
        player_id=player_id,
        name=f"Player {player_id}",
        university="University of Sri Jayewardenepura",
        category="Batsman",
        stats=derive_stats(RawStats(total_runs=runs, balls_faced=100, innings_played=4)),
    )


@pytest.fixture
def store(tmp_path: Path) -> Spirit11Store:
    return Spirit11Store(tmp_path / "nested" / "spirit11.sqlite")


def test_players_round_trip_in_insert_order(store: Spirit11Store):
    players = [_player("b"), _player("a"), _player("c")]
    assert store.save_players(players) == 3

    assert [p.player_id for p in store.list_players()] == ["b", "a", "c"]
    assert store.get_player("a") == players[1]
    assert store.get_player("zzz") is None


def test_replace_clears_previous_catalog(store: Spirit11Store):
    store.save_players([_player("a"), _player("b")])
    store.save_players([_player("c")], replace=True)

    assert [p.player_id for p in store.list_players()] == ["c"]
    store.clear_players()
    assert store.list_players() == []


def test_create_user_twice_fails(store: Spirit11Store):
    user = store.create_user("u1", "sam")
    assert user.budget == 9_000_000
    assert user.team == ()

    with pytest.raises(ValueError):
        store.create_user("u1", "sam again")


def test_update_roster_checks_version(store: Spirit11Store):
    store.create_user("u1", "sam")
    member = TeamMember.from_player(_player("a"))

    assert store.update_roster("u1", team=[member], budget=9_000_000 - member.value, expected_version=0)
    user = store.get_user("u1")
    assert user.version == 1
    assert user.team == (member,)

    assert not store.update_roster("u1", team=[], budget=9_000_000, expected_version=0)
    assert store.get_user("u1").team == (member,)


def test_leaderboard_orders_by_points(store: Spirit11Store):
    store.create_user("u1", "sam")
    store.create_user("u2", "kim")
    store.create_user("u3", "ash")
    store.set_total_points("u2", 410.5)
    store.set_total_points("u3", 88)

    assert [u.user_id for u in store.leaderboard()] == ["u2", "u3", "u1"]
    assert [u.user_id for u in store.leaderboard(limit=1)] == ["u2"]
    assert {u.user_id for u in store.list_users()} == {"u1", "u2", "u3"}


def test_set_total_points_unknown_user(store: Spirit11Store):
    with pytest.raises(KeyError):
        store.set_total_points("ghost", 10)
