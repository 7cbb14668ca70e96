import pytest

from creaturecup.exceptions import (
    InvalidInputException,
    InvalidParticipantsException,
    InvalidResultException,
)
from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament import Match, MatchResult, Outcome, PairingHistory
from creaturecup.pairing import (
    calculate_standings,
    calculate_total_rounds,
    generate_pairings,
    get_score_for_result,
    sort_standings_by_tie_breaker,
)


def _ids(*names):
    return [CompetitorId(n) for n in names]


def _flatten(pairings):
    return [member for pairing in pairings for member in pairing]


def test_four_participants_without_history_pair_everyone_once():
    pairings = generate_pairings(["a", "b", "c", "d"])
    assert len(pairings) == 2
    assert all(len(p) == 2 for p in pairings)
    assert sorted(_flatten(pairings)) == _ids("a", "b", "c", "d")


def test_order_is_kept_without_standings():
    assert generate_pairings(["d", "c", "b", "a"]) == [
        tuple(_ids("d", "c")),
        tuple(_ids("b", "a")),
    ]


def test_five_with_standings_pairs_leader_with_three_pointer_and_one_bye():
    standings = {"a": 6, "b": 3, "c": 3, "d": 3, "e": 0}
    pairings = generate_pairings(["e", "d", "c", "b", "a"], None, standings)

    leader_pairing = next(p for p in pairings if CompetitorId("a") in p)
    opponent = next(c for c in leader_pairing if c != CompetitorId("a"))
    assert standings[opponent.value] == 3

    byes = [p for p in pairings if len(p) == 1]
    assert len(byes) == 1
    assert pairings == [
        tuple(_ids("a", "b")),
        tuple(_ids("c", "d")),
        tuple(_ids("e")),
    ]


def test_score_difference_ties_go_to_scan_order():
    standings = {"a": 3, "b": 0, "c": 6, "d": 3}
    # Sorted: c(6), a(3), d(3), b(0); c sees a and d at diff 3, a comes first
    assert generate_pairings(["a", "b", "c", "d"], None, standings)[0] == tuple(
        _ids("c", "a")
    )


def test_previous_matchups_are_avoided_in_either_order():
    pairings = generate_pairings(["a", "b", "c", "d"], [("b", "a"), ("d", "c")])
    assert tuple(_ids("a", "b")) not in pairings
    assert tuple(_ids("c", "d")) not in pairings
    assert pairings[0] == tuple(_ids("a", "c"))


def test_rematch_when_no_fresh_opponent_and_count_even():
    history = PairingHistory.from_pairs([("a", "b")])
    assert generate_pairings(["a", "b"], history) == [tuple(_ids("a", "b"))]


def test_single_participant_gets_bye():
    assert generate_pairings(["solo"]) == [(CompetitorId("solo"),)]


def test_at_most_one_bye_per_round():
    names = ["a", "b", "c", "d", "e"]
    played = [(x, y) for i, x in enumerate(names) for y in names[i + 1 :]]
    pairings = generate_pairings(names, played)
    assert len([p for p in pairings if len(p) == 1]) == 1
    assert sorted(_flatten(pairings)) == _ids(*names)


def test_invalid_participant_lists():
    with pytest.raises(InvalidParticipantsException):
        generate_pairings([])
    with pytest.raises(InvalidParticipantsException):
        generate_pairings(["a", "A"])


@pytest.mark.parametrize(
    "count,expected",
    [(1, 0), (2, 3), (8, 3), (9, 4), (16, 4), (17, 5), (100, 7), (256, 8), (5000, 8)],
)
def test_calculate_total_rounds(count, expected):
    assert calculate_total_rounds(count) == expected


def test_total_rounds_monotonic_and_bounded():
    previous = 0
    for count in range(2, 600):
        rounds = calculate_total_rounds(count)
        assert 3 <= rounds <= 8
        assert rounds >= previous
        previous = rounds


@pytest.mark.parametrize("count", [0, -3, 2.5, True])
def test_calculate_total_rounds_rejects_bad_counts(count):
    with pytest.raises(InvalidInputException):
        calculate_total_rounds(count)


def test_sort_standings_by_tie_breaker():
    standings = {"b": 3, "a": 3, "c": 6, "outsider": 9}
    ranked = sort_standings_by_tie_breaker(standings, ["a", "b", "c"])
    assert ranked == [
        (CompetitorId("c"), 6),
        (CompetitorId("a"), 3),
        (CompetitorId("b"), 3),
    ]


def test_get_score_for_result():
    assert get_score_for_result("win") == 3
    assert get_score_for_result(Outcome.LOSS) == 0
    assert get_score_for_result("draw") == 1
    with pytest.raises(InvalidResultException):
        get_score_for_result("forfeit")


def test_calculate_standings_from_matches():
    matches = [
        Match("a", "b", 0, MatchResult(Outcome.WIN, "a")),
        Match("c", None, 0, MatchResult(Outcome.WIN, "c")),
        Match("a", "c", 1, MatchResult(Outcome.DRAW)),
        Match("b", "c", 2),
    ]
    standings = calculate_standings(["a", "b", "c"], matches)
    assert standings == {
        CompetitorId("a"): 4,
        CompetitorId("b"): 0,
        CompetitorId("c"): 4,
    }
    assert calculate_standings(["a", "b", "c"], matches, before_round=1) == {
        CompetitorId("a"): 3,
        CompetitorId("b"): 0,
        CompetitorId("c"): 3,
    }
