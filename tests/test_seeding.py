import pytest

from creaturecup.exceptions import InvalidParticipantsException
from creaturecup.models.bracket import BracketKind
from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament import Participant
from creaturecup.seeding import create_playoff_bracket, seed_top_n


def test_seed_top_n_orders_by_score_then_id():
    pool = [Participant("b"), Participant("a"), Participant("c")]
    standings = {"a": 3, "b": 3, "c": 9}
    seeds = seed_top_n(pool, standings, 2)
    assert [s.competitor_id for s in seeds] == [CompetitorId("c"), CompetitorId("a")]
    assert seeds[0] is pool[2]


def test_seed_top_n_creates_placeholders_for_unknown_entries():
    seeds = seed_top_n([], {"newcomer": 5}, 4)
    assert len(seeds) == 1
    assert seeds[0].competitor_id == CompetitorId("newcomer")
    assert seeds[0].score == 0


def test_seed_top_n_rejects_empty_cut():
    with pytest.raises(InvalidParticipantsException):
        seed_top_n([], {"a": 1}, 0)


def test_create_playoff_bracket_double_elimination():
    names = [f"p{i:02d}" for i in range(20)]
    standings = {name: 60 - i for i, name in enumerate(names)}
    bracket = create_playoff_bracket([Participant(n) for n in names], standings)

    assert bracket.kind is BracketKind.DOUBLE_ELIMINATION
    first = bracket.get_match("w1_1")
    assert first.participants == (CompetitorId("p00"), CompetitorId("p15"))
    seeded = {c for m in bracket.iter_matches() for c in m.participants}
    assert CompetitorId("p16") not in seeded


def test_create_playoff_bracket_single_elimination_from_external_top_n():
    standings = {"x": 1, "y": 4, "z": 2, "w": 3}
    bracket = create_playoff_bracket([], standings, 4, "single-elimination")
    assert bracket.kind is BracketKind.SINGLE_ELIMINATION
    assert bracket.get_match("w1_1").participants == (
        CompetitorId("y"),
        CompetitorId("x"),
    )


def test_create_playoff_bracket_needs_enough_seeds():
    with pytest.raises(InvalidParticipantsException):
        create_playoff_bracket([], {"a": 1, "b": 2}, 16)
