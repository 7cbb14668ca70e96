import pytest

from creaturecup.exceptions import (
    DuplicateResultException,
    InvalidConfigurationException,
    InvalidIdentifierException,
    InvalidParticipantsException,
    InvalidResultException,
    TournamentCompleteException,
)
from creaturecup.models.identifiers import CompetitorId, TournamentId
from creaturecup.models.tournament import (
    Match,
    MatchResult,
    Outcome,
    PairingHistory,
    Participant,
    Tournament,
    TournamentFormat,
)


def test_competitor_id_is_normalized():
    assert CompetitorId("  Pikachu ") == CompetitorId("pikachu")
    assert str(CompetitorId("Mr-Mime")) == "mr-mime"
    assert CompetitorId.of(CompetitorId("eevee")) == CompetitorId("eevee")


@pytest.mark.parametrize("value", ["", "   ", "farfetch'd", "a" * 51, 42])
def test_competitor_id_rejects_bad_values(value):
    with pytest.raises(InvalidIdentifierException):
        CompetitorId(value)


def test_tournament_id_generate_and_validation():
    generated = TournamentId.generate()
    assert str(generated).startswith("tournament-")
    assert TournamentId.of(str(generated)) == generated

    with pytest.raises(InvalidIdentifierException):
        TournamentId("ab")
    with pytest.raises(InvalidIdentifierException):
        TournamentId("has spaces")


def test_participant_score_counts_wins_and_draws():
    participant = Participant("bulbasaur")
    participant.add_win()
    participant.add_win()
    participant.add_draw()
    participant.add_loss()
    assert participant.score == 7
    assert participant.matches_played == 4
    entry = participant.standings_entry()
    assert (entry.score, entry.wins, entry.losses, entry.draws) == (7, 2, 1, 1)


def test_participant_rejects_negative_record():
    with pytest.raises(InvalidParticipantsException):
        Participant("ditto", wins=-1)


def test_outcome_parse():
    assert Outcome.parse(" WIN ") is Outcome.WIN
    assert Outcome.parse(Outcome.DRAW) is Outcome.DRAW
    with pytest.raises(InvalidResultException):
        Outcome.parse("forfeit")


def test_match_result_requires_consistent_winner():
    with pytest.raises(InvalidResultException):
        MatchResult(Outcome.DRAW, CompetitorId("a"))
    with pytest.raises(InvalidResultException):
        MatchResult(Outcome.WIN)


def test_match_record_result_updates_both_sides():
    participants = {p.competitor_id: p for p in (Participant("a"), Participant("b"))}
    match = Match("a", "b", 0)
    match.record_result(MatchResult(Outcome.WIN, "b"), participants)

    assert match.loser == CompetitorId("a")
    assert participants[CompetitorId("b")].score == 3
    assert participants[CompetitorId("a")].losses == 1

    with pytest.raises(DuplicateResultException):
        match.record_result(MatchResult(Outcome.DRAW), participants)


def test_match_rejects_outsider_winner_and_self_pairing():
    participants = {p.competitor_id: p for p in (Participant("a"), Participant("b"))}
    with pytest.raises(InvalidResultException):
        Match("a", "b", 0).record_result(MatchResult(Outcome.WIN, "c"), participants)
    with pytest.raises(InvalidResultException):
        Match("a", "A", 0)


def test_bye_match_counts_as_win():
    participants = {CompetitorId("a"): Participant("a")}
    match = Match("a", None, 2)
    match.record_result(MatchResult(Outcome.WIN, "a"), participants)
    assert match.is_bye
    assert match.loser is None
    assert participants[CompetitorId("a")].score == 3
    assert "round 3" in match.describe()


def test_match_dict_round_trip_keeps_result():
    match = Match("a", "b", 1, MatchResult(Outcome.DRAW))
    restored = Match.from_dict(match.to_dict())
    assert restored == match
    assert match.to_dict()["outcome"] == "draw"


def test_pairing_history_ignores_order_and_byes():
    history = PairingHistory.from_pairs([("a", "b"), ("c",)])
    assert history.have_played("b", "a")
    assert len(history) == 1

    matches = [Match("a", "b", 0), Match("c", "d", 1), Match("e", None, 0)]
    assert len(PairingHistory.from_matches(matches)) == 2
    assert len(PairingHistory.from_matches(matches, before_round=1)) == 1


def test_tournament_format_validation():
    assert TournamentFormat().has_playoff
    assert TournamentFormat(playoff="single-elimination", playoff_cutoff=8)
    assert not TournamentFormat(playoff=None).has_playoff

    with pytest.raises(InvalidConfigurationException):
        TournamentFormat(format="round-robin")
    with pytest.raises(InvalidConfigurationException):
        TournamentFormat(playoff="triple-elimination")
    with pytest.raises(InvalidConfigurationException):
        TournamentFormat(playoff="single-elimination", playoff_cutoff=6)
    with pytest.raises(InvalidConfigurationException):
        TournamentFormat(playoff="double-elimination", playoff_cutoff=8)


def test_tournament_advance_and_serialization():
    tournament = Tournament(
        id="tournament-test",
        owner="ash@example.com",
        participants=[Participant("a"), Participant("b")],
        total_rounds=1,
    )
    tournament.advance_round()
    assert tournament.is_complete
    with pytest.raises(TournamentCompleteException):
        tournament.advance_round()

    restored = Tournament.from_dict(tournament.to_dict())
    assert restored.current_round == 1
    assert restored.created_at == tournament.created_at
    assert restored.format == tournament.format


def test_tournament_needs_participants():
    with pytest.raises(InvalidParticipantsException):
        Tournament(id="tournament-empty", owner="x", participants=[], total_rounds=3)
