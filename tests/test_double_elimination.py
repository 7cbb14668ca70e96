import pytest

from creaturecup.bracket import DoubleEliminationBracketEngine
from creaturecup.exceptions import (
    BracketMatchNotFoundException,
    DuplicateResultException,
    InvalidParticipantsException,
    InvalidResultException,
)
from creaturecup.models.bracket import Bracket, Ladder
from creaturecup.models.identifiers import CompetitorId


def _lower(match):
    return min(match.participants, key=lambda c: c.value)


def _play_out(engine, bracket, choose=_lower):
    played = []
    while not engine.is_bracket_complete(bracket):
        ready = engine.get_matches_ready_for_voting(bracket)
        assert len(ready) == 1, "bracket stalled"
        match = ready[0]
        assert match.is_ready, f"{match.id} reached with an empty slot"
        bracket = engine.record_match_result(bracket, match.id, choose(match))
        played.append(match.id)
    return bracket, played


def test_first_round_is_seeded_one_against_sixteen(sixteen):
    bracket = DoubleEliminationBracketEngine().create_bracket(sixteen)

    first_round = bracket.round_matches(Ladder.WINNER, 1)
    assert [m.id for m in first_round] == [f"w1_{i}" for i in range(1, 9)]
    assert first_round[0].participants == (CompetitorId("s01"), CompetitorId("s16"))
    assert first_round[7].participants == (CompetitorId("s08"), CompetitorId("s09"))
    assert bracket.get_match("gf_1").participants == ()
    assert len(bracket.loser_rounds) == 5


def test_winner_and_loser_of_first_match_move_on(sixteen):
    engine = DoubleEliminationBracketEngine()
    bracket = engine.create_bracket(sixteen)
    updated = engine.record_match_result(bracket, "w1_1", "s01")

    assert updated.get_match("w1_1").winner == CompetitorId("s01")
    assert updated.get_match("w2_1").participant1 == CompetitorId("s01")
    assert updated.get_match("l1_1").participant1 == CompetitorId("s16")
    # the input bracket is left untouched
    assert bracket.get_match("w1_1").winner is None
    assert "w2_1" not in bracket.matches


def test_ready_matches_follow_scan_order(sixteen):
    engine = DoubleEliminationBracketEngine()
    bracket = engine.create_bracket(sixteen)
    assert [m.id for m in engine.get_matches_ready_for_voting(bracket)] == ["w1_1"]

    bracket = engine.record_match_result(bracket, "w1_1", "s16")
    assert [m.id for m in engine.get_matches_ready_for_voting(bracket)] == ["w1_2"]


def test_full_bracket_reaches_a_champion(sixteen):
    engine = DoubleEliminationBracketEngine()
    bracket, played = _play_out(engine, engine.create_bracket(sixteen))

    assert len(played) == 30
    assert played[-1] == "gf_1"
    assert engine.get_champion(bracket) == CompetitorId("s01")
    assert engine.get_matches_ready_for_voting(bracket) == []

    loser_sizes = [len(r) * 2 for r in bracket.loser_rounds]
    assert loser_sizes == [8, 8, 6, 4, 2]
    assert [len(r) for r in bracket.winner_rounds] == [8, 4, 2, 1]


def test_grand_final_slots(sixteen):
    engine = DoubleEliminationBracketEngine()
    bracket, _ = _play_out(engine, engine.create_bracket(sixteen))
    grand_final = bracket.get_match("gf_1")

    # s01 wins the winner ladder; s02 loses only to s01 and takes the loser ladder
    assert grand_final.participant1 == CompetitorId("s01")
    assert grand_final.participant2 == CompetitorId("s02")


def test_underdog_from_loser_ladder_can_win(sixteen):
    engine = DoubleEliminationBracketEngine()

    def upset_in_final(match):
        if match.ladder is Ladder.GRAND_FINAL:
            return match.participant2
        return _lower(match)

    bracket, _ = _play_out(engine, engine.create_bracket(sixteen), upset_in_final)
    assert bracket.champion == CompetitorId("s02")


def test_every_seed_loses_at_most_twice(sixteen):
    engine = DoubleEliminationBracketEngine()
    bracket, _ = _play_out(engine, engine.create_bracket(sixteen))
    losses = {}
    for match in bracket.iter_matches():
        losses[match.loser] = losses.get(match.loser, 0) + 1
    assert max(losses.values()) <= 2
    assert CompetitorId("s01") not in losses


def test_bracket_survives_storage_round_trip(sixteen):
    engine = DoubleEliminationBracketEngine()
    bracket = engine.create_bracket(sixteen)
    bracket = engine.record_match_result(bracket, "w1_1", "s01")

    restored = Bracket.from_dict(bracket.to_dict())
    assert dict(restored.matches) == dict(bracket.matches)
    assert restored.winner_rounds == bracket.winner_rounds
    assert restored.loser_rounds == bracket.loser_rounds
    assert "round1" in bracket.to_dict()["loser_bracket"]


def test_create_bracket_requires_sixteen(sixteen):
    engine = DoubleEliminationBracketEngine()
    with pytest.raises(InvalidParticipantsException):
        engine.create_bracket(sixteen[:8])
    with pytest.raises(InvalidParticipantsException):
        engine.create_bracket(sixteen[:15] + ["s01"])


def test_record_result_errors(sixteen):
    engine = DoubleEliminationBracketEngine()
    bracket = engine.create_bracket(sixteen)

    with pytest.raises(BracketMatchNotFoundException):
        engine.record_match_result(bracket, "w9_9", "s01")
    with pytest.raises(InvalidResultException):
        engine.record_match_result(bracket, "w1_1", "s02")
    with pytest.raises(InvalidResultException):
        engine.record_match_result(bracket, "gf_1", "s01")

    bracket = engine.record_match_result(bracket, "w1_1", "s01")
    with pytest.raises(DuplicateResultException):
        engine.record_match_result(bracket, "w1_1", "s16")
