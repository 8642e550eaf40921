"""
End-to-end tests through the Election facade.
"""

from votechain.election import Election
from votechain.models import VoteOutcome


def test_recorded_vote(election):
    assert election.cast_vote(1, "A") is VoteOutcome.RECORDED
    assert len(election.get_chain()) == 2


def test_duplicate_returns_outcome(election):
    assert election.cast_vote(3, "A") is VoteOutcome.RECORDED
    assert election.cast_vote(3, "B") is VoteOutcome.DUPLICATE_VOTE
    assert election.cast_vote(3, "A") is VoteOutcome.DUPLICATE_VOTE
    assert election.get_results().counts == {"A": 1}


def test_unregistered_returns_outcome(election):
    assert election.cast_vote(11, "B") is VoteOutcome.UNREGISTERED_VOTER
    assert len(election.get_chain()) == 1


def test_unknown_candidate_returns_outcome(election):
    assert election.cast_vote(7, "C") is VoteOutcome.UNKNOWN_CANDIDATE
    assert len(election.get_chain()) == 1


def test_encoding_failure_returns_outcome():
    e = Election()
    e.register_voter(2**63)
    e.declare_candidate("A")
    assert e.cast_vote(2**63, "A") is VoteOutcome.HASH_ENCODING_FAILURE
    assert not VoteOutcome.HASH_ENCODING_FAILURE.accepted
    assert len(e.get_chain()) == 1


def test_reference_scenario(election):
    """Ten ballots: six recorded, four rejected, ending in a tie."""
    ballots = [
        (1, "A", VoteOutcome.RECORDED),
        (2, "B", VoteOutcome.RECORDED),
        (3, "A", VoteOutcome.RECORDED),
        (3, "B", VoteOutcome.DUPLICATE_VOTE),
        (4, "B", VoteOutcome.RECORDED),
        (5, "A", VoteOutcome.RECORDED),
        (5, "A", VoteOutcome.DUPLICATE_VOTE),
        (6, "B", VoteOutcome.RECORDED),
        (7, "C", VoteOutcome.UNKNOWN_CANDIDATE),
        (11, "B", VoteOutcome.UNREGISTERED_VOTER),
    ]
    for voter_id, candidate, expected in ballots:
        assert election.cast_vote(voter_id, candidate) is expected

    result = election.get_results()
    assert result.counts == {"A": 3, "B": 3}
    assert result.is_tie
    assert result.winner is None
    assert len(election.get_chain()) == 7
    assert election.verify_chain()
    assert election.audit()["valid"]


def test_results_come_from_chain_not_counters(election):
    """Roster counters are informational; the chain decides."""
    election.cast_vote(1, "A")
    election.cast_vote(2, "A")
    election.roster._counts["B"] = 100
    assert election.roster_counts()["B"] == 100
    assert election.get_results().winner == "A"


def test_no_votes_means_no_winner(election):
    result = election.get_results()
    assert result.counts == {}
    assert result.status == "no_winner"


def test_chain_snapshot_shape(election):
    election.cast_vote(1, "A")
    chain = election.get_chain()
    assert chain[0] == {"previous_digest": "", "digest": "", "votes": []}
    assert chain[1]["previous_digest"] == ""
    assert chain[1]["votes"] == [{"voter_id": 1, "candidate": "A"}]
    assert len(chain[1]["digest"]) == 64


def test_identical_inputs_identical_chains():
    def build():
        e = Election()
        for voter_id in (1, 2, 3):
            e.register_voter(voter_id)
        e.declare_candidate("A")
        e.declare_candidate("B")
        for voter_id, candidate in [(1, "A"), (2, "B"), (3, "B")]:
            e.cast_vote(voter_id, candidate)
        return e.get_chain()

    assert build() == build()


def test_elections_are_independent():
    first, second = Election(), Election()
    first.register_voter(1)
    first.declare_candidate("A")
    assert second.cast_vote(1, "A") is VoteOutcome.UNREGISTERED_VOTER
    assert first.cast_vote(1, "A") is VoteOutcome.RECORDED
