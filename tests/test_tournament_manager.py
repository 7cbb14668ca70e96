import random

import pytest

from creaturecup.controllers.tournament import TournamentManager
from creaturecup.exceptions import (
    BracketNotInitializedException,
    ConcurrentModificationException,
    DuplicateResultException,
    InsufficientQualifiersException,
    InvalidInputException,
    InvalidParticipantsException,
    InvalidResultException,
    ParticipantNotFoundException,
    RoundIncompleteException,
    TournamentCompleteException,
    TournamentNotCompleteException,
    TournamentNotFoundException,
)
from creaturecup.models.bracket import BracketKind
from creaturecup.models.identifiers import CompetitorId
from creaturecup.models.tournament import PairingHistory, TournamentFormat

OWNER = "trainer@example.com"


def _play_round(manager, tournament_id):
    for pairing in manager.get_current_round_pairings(tournament_id):
        if len(pairing) == 1:
            manager.record_bye(tournament_id, pairing[0])
        else:
            winner = min(pairing, key=lambda c: c.value)
            manager.record_match_result(
                tournament_id, pairing[0], pairing[1], "win", winner
            )


def _column(manager, tournament_id, field):
    return {
        entry.participant.value: getattr(entry, field)
        for entry in manager.get_current_standings(tournament_id)
    }


def _finish_qualification(manager, tournament_id):
    tournament = manager.get_tournament(tournament_id)
    while not tournament.is_complete:
        _play_round(manager, tournament_id)
        tournament = manager.advance_to_next_round(tournament_id)
    return tournament


def test_create_tournament(manager):
    tournament = manager.create_tournament(["Pikachu", "eevee", "snorlax"], OWNER)
    assert tournament.current_round == 0
    assert tournament.total_rounds == 3
    assert tournament.participant_ids == [
        CompetitorId("pikachu"),
        CompetitorId("eevee"),
        CompetitorId("snorlax"),
    ]
    assert manager.get_tournament(str(tournament.id)).owner == OWNER
    assert [t.id for t in manager.get_user_tournaments(OWNER)] == [tournament.id]


@pytest.mark.parametrize(
    "participants,error",
    [
        ([], InvalidParticipantsException),
        (["a", "A"], InvalidParticipantsException),
        (["bad name"], InvalidInputException),
    ],
)
def test_create_tournament_rejects_bad_fields(manager, participants, error):
    with pytest.raises(error):
        manager.create_tournament(participants, OWNER)


def test_create_tournament_needs_owner(manager):
    with pytest.raises(InvalidInputException):
        manager.create_tournament(["a", "b"], "  ")


def test_two_participants_play_three_rounds(manager):
    tournament = manager.create_tournament(["a", "b"], OWNER)
    assert tournament.total_rounds == 3

    for _ in range(3):
        assert manager.get_current_round_pairings(tournament.id) == [
            (CompetitorId("a"), CompetitorId("b"))
        ]
        manager.record_match_result(tournament.id, "a", "b", "win", "a")
        assert manager.is_current_round_complete(tournament.id)
        tournament = manager.advance_to_next_round(tournament.id)

    assert tournament.is_complete
    assert tournament.current_round == 3
    assert manager.get_current_round_pairings(tournament.id) == []
    assert manager.is_current_round_complete(tournament.id)
    standings = manager.get_final_standings(tournament.id)
    assert [(e.participant.value, e.score) for e in standings] == [("a", 9), ("b", 0)]
    # two entrants cannot fill the default playoff
    assert manager.get_bracket(tournament.id) is None


def test_single_participant_tournament_is_complete_at_once(manager):
    tournament = manager.create_tournament(["solo"], OWNER)
    assert tournament.is_complete
    assert manager.is_current_round_complete(tournament.id)
    with pytest.raises(TournamentCompleteException):
        manager.advance_to_next_round(tournament.id)


def test_round_pairings_do_not_shift_while_results_arrive(manager):
    tournament = manager.create_tournament(list("abcdef"), OWNER)
    _play_round(manager, tournament.id)
    manager.advance_to_next_round(tournament.id)

    before = manager.get_current_round_pairings(tournament.id)
    first = before[0]
    manager.record_match_result(tournament.id, first[0], first[1], "draw")
    assert manager.get_current_round_pairings(tournament.id) == before
    assert not manager.is_current_round_complete(tournament.id)


def test_advance_requires_complete_round(manager):
    tournament = manager.create_tournament(["a", "b", "c", "d"], OWNER)
    manager.record_match_result(tournament.id, "a", "b", "draw")
    with pytest.raises(RoundIncompleteException):
        manager.advance_to_next_round(tournament.id)
    assert manager.get_tournament(tournament.id).current_round == 0


def test_odd_field_gets_a_bye(manager):
    tournament = manager.create_tournament(["a", "b", "c"], OWNER)
    pairings = manager.get_current_round_pairings(tournament.id)
    assert pairings[-1] == (CompetitorId("c"),)

    manager.record_match_result(tournament.id, "a", "b", "loss", "b")
    # byes need no stored match for the round to be complete
    assert manager.is_current_round_complete(tournament.id)
    manager.record_bye(tournament.id, "c")
    standings = _column(manager, tournament.id, "score")
    assert standings == {"a": 0, "b": 3, "c": 3}


def test_record_result_errors(manager):
    tournament = manager.create_tournament(["a", "b", "c", "d"], OWNER)

    with pytest.raises(ParticipantNotFoundException):
        manager.record_match_result(tournament.id, "a", "zz", "win", "a")
    with pytest.raises(InvalidResultException):
        manager.record_match_result(tournament.id, "a", "b", "forfeit", "a")
    with pytest.raises(InvalidResultException):
        manager.record_match_result(tournament.id, "a", "b", "draw", "a")
    with pytest.raises(InvalidResultException):
        manager.record_match_result(tournament.id, "a", "b", "win", "c")
    with pytest.raises(InvalidResultException):
        manager.record_match_result(tournament.id, "a", "a", "win", "a")

    manager.record_match_result(tournament.id, "a", "b", "win", "a")
    with pytest.raises(DuplicateResultException):
        manager.record_match_result(tournament.id, "b", "a", "win", "b")
    manager.record_bye(tournament.id, "c")
    with pytest.raises(DuplicateResultException):
        manager.record_bye(tournament.id, "c")

    # rejected calls leave the stored record untouched
    standings = _column(manager, tournament.id, "wins")
    assert standings == {"a": 1, "b": 0, "c": 1, "d": 0}


def test_off_pairing_result_does_not_block_the_round(manager):
    tournament = manager.create_tournament(["a", "b", "c", "d"], OWNER)
    assert manager.get_current_round_pairings(tournament.id) == [
        (CompetitorId("a"), CompetitorId("b")),
        (CompetitorId("c"), CompetitorId("d")),
    ]
    manager.record_match_result(tournament.id, "a", "c", "win", "a")
    manager.record_bye(tournament.id, "d")
    assert not manager.is_current_round_complete(tournament.id)

    # the expected pairings can still be recorded
    manager.record_match_result(tournament.id, "a", "b", "win", "a")
    manager.record_match_result(tournament.id, "c", "d", "win", "c")
    assert manager.is_current_round_complete(tournament.id)
    assert manager.advance_to_next_round(tournament.id).current_round == 1
    assert _column(manager, tournament.id, "wins") == {"a": 2, "b": 0, "c": 1, "d": 1}


@pytest.mark.parametrize("size,seed", [(3, 1), (5, 2), (6, 3), (7, 4), (18, 5)])
def test_rematch_only_when_no_fresh_opponent_is_left(repository, size, seed):
    manager = TournamentManager(repository, TournamentFormat(playoff=None))
    rng = random.Random(seed)
    field = [f"c{i:02d}" for i in range(size)]
    tournament = manager.create_tournament(field, OWNER)

    while not tournament.is_complete:
        pairings = manager.get_current_round_pairings(tournament.id)
        history = PairingHistory.from_matches(repository.load_matches(tournament.id))
        assert sum(1 for pairing in pairings if len(pairing) == 1) <= 1

        paired = set()
        for pairing in pairings:
            current = pairing[0]
            paired.add(current)
            if len(pairing) == 2 and history.have_played(*pairing):
                unpaired = [c for c in tournament.participant_ids if c not in paired]
                assert all(history.have_played(current, c) for c in unpaired)
            paired.update(pairing)

        for pairing in pairings:
            if len(pairing) == 1:
                manager.record_bye(tournament.id, pairing[0])
            elif rng.random() < 0.2:
                manager.record_match_result(
                    tournament.id, pairing[0], pairing[1], "draw"
                )
            else:
                manager.record_match_result(
                    tournament.id, pairing[0], pairing[1], "win", rng.choice(pairing)
                )
        tournament = manager.advance_to_next_round(tournament.id)


def test_results_rejected_after_qualification(manager):
    tournament = manager.create_tournament(["a", "b"], OWNER)
    _finish_qualification(manager, tournament.id)
    with pytest.raises(TournamentCompleteException):
        manager.record_match_result(tournament.id, "a", "b", "draw")
    with pytest.raises(TournamentCompleteException):
        manager.advance_to_next_round(tournament.id)


def test_unknown_tournament(manager):
    with pytest.raises(TournamentNotFoundException):
        manager.get_tournament("tournament-missing")
    with pytest.raises(TournamentNotFoundException):
        manager.delete_tournament("tournament-missing")


def test_final_standings_need_complete_qualification(manager):
    tournament = manager.create_tournament(["a", "b"], OWNER)
    with pytest.raises(TournamentNotCompleteException):
        manager.get_final_standings(tournament.id)
    with pytest.raises(TournamentNotCompleteException):
        manager.initialize_bracket(tournament.id)


def test_bracket_is_seeded_when_qualification_ends(manager, repository, sixteen):
    field = sixteen + ["s17", "s18"]
    tournament = manager.create_tournament(field, OWNER)
    assert manager.get_bracket(tournament.id) is None
    assert manager.get_next_bracket_match(tournament.id) is None
    assert manager.get_bracket_champion(tournament.id) is None
    assert not manager.is_bracket_complete(tournament.id)

    _finish_qualification(manager, tournament.id)
    bracket = manager.get_bracket(tournament.id)
    assert bracket.kind is BracketKind.DOUBLE_ELIMINATION
    assert bracket.version == 1
    # lexically lower always wins, so s01 tops the standings
    assert bracket.get_match("w1_1").participant1 == CompetitorId("s01")
    assert manager.initialize_bracket(tournament.id).version == 1

    while not manager.is_bracket_complete(tournament.id):
        match = manager.get_next_bracket_match(tournament.id)
        manager.record_bracket_match_result(
            tournament.id, match.id, min(match.participants, key=lambda c: c.value)
        )
    assert manager.get_bracket_champion(tournament.id) == CompetitorId("s01")
    assert manager.get_bracket(tournament.id).version == 31

    # a finished bracket stays finished
    final = manager.get_bracket(tournament.id).get_match("gf_1")
    with pytest.raises(DuplicateResultException):
        manager.record_bracket_match_result(tournament.id, "gf_1", final.loser)
    assert manager.is_bracket_complete(tournament.id)
    assert manager.get_bracket(tournament.id).version == 31
    assert TournamentManager(repository).is_bracket_complete(tournament.id)


def test_single_elimination_format(repository):
    knockout = TournamentFormat(playoff="single-elimination", playoff_cutoff=8)
    manager = TournamentManager(repository, knockout)
    tournament = manager.create_tournament([f"c{i}" for i in range(10)], OWNER)
    _finish_qualification(manager, tournament.id)
    bracket = manager.get_bracket(tournament.id)
    assert bracket.kind is BracketKind.SINGLE_ELIMINATION
    assert len(bracket.matches) == 7


def test_no_playoff_format(manager, sixteen):
    tournament = manager.create_tournament(
        sixteen, OWNER, TournamentFormat(playoff=None)
    )
    _finish_qualification(manager, tournament.id)
    assert manager.get_bracket(tournament.id) is None


def test_explicit_bracket_needs_enough_qualifiers(manager):
    tournament = manager.create_tournament(["a", "b", "c"], OWNER)
    _finish_qualification(manager, tournament.id)
    with pytest.raises(InsufficientQualifiersException):
        manager.initialize_bracket(tournament.id)
    with pytest.raises(BracketNotInitializedException):
        manager.record_bracket_match_result(tournament.id, "w1_1", "a")


def test_stale_tournament_cannot_be_saved(manager, repository):
    tournament = manager.create_tournament(["a", "b"], OWNER)
    first = repository.find_by_id(tournament.id)
    second = repository.find_by_id(tournament.id)
    repository.save(first)
    with pytest.raises(ConcurrentModificationException):
        repository.save(second)


def test_delete_tournament(manager):
    tournament = manager.create_tournament(["a", "b"], OWNER)
    manager.record_match_result(tournament.id, "a", "b", "draw")
    manager.delete_tournament(tournament.id)
    with pytest.raises(TournamentNotFoundException):
        manager.get_tournament(tournament.id)
    assert manager.get_user_tournaments(OWNER) == []
