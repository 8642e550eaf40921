"""
Tests for scenario models, the JSON loader and the scenario runner.
"""

import json

import pytest

from votechain.exceptions import ScenarioError
from votechain.models import VoteOutcome
from votechain.scenario import DEMO_SCENARIO, ScenarioSpec, load_scenario, run_scenario


class TestDemoScenario:
    """The built-in ten-ballot run."""

    def test_all_expectations_met(self):
        report = run_scenario(DEMO_SCENARIO)
        assert report.mismatches == []
        assert report.valid
        assert report.result.counts == {"Candidate A": 3, "Candidate B": 3}
        assert report.result.is_tie
        assert len(report.chain) == 7

    def test_last_block_policy_gives_same_outcome(self):
        report = run_scenario(DEMO_SCENARIO, policy="last")
        assert report.mismatches == []

    def test_report_dict(self):
        data = run_scenario(DEMO_SCENARIO).to_dict()
        assert data["name"] == "demo"
        assert data["result"]["status"] == "tie"
        assert data["outcomes"][3] == {
            "voter_id": 3,
            "candidate": "Candidate B",
            "outcome": "duplicate_vote",
        }


class TestLoadScenario:
    """JSON loading and validation errors."""

    def test_load_valid(self, tmp_path):
        path = tmp_path / "election.json"
        path.write_text(json.dumps({
            "name": "small",
            "voters": [1, 2],
            "candidates": ["X", "Y"],
            "ballots": [
                {"voter_id": 1, "candidate": "X", "expect": "recorded"},
                {"voter_id": 2, "candidate": "Z"},
            ],
        }))
        spec = load_scenario(path)
        assert spec.name == "small"
        assert spec.ballots[0].expect is VoteOutcome.RECORDED
        assert spec.ballots[1].expect is None

        report = run_scenario(spec)
        assert [o for _, o in report.outcomes] == [
            VoteOutcome.RECORDED, VoteOutcome.UNKNOWN_CANDIDATE,
        ]
        assert report.result.winner == "X"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioError):
            load_scenario(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ScenarioError):
            load_scenario(path)

    def test_missing_candidates(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"voters": [1]}))
        with pytest.raises(ScenarioError):
            load_scenario(path)

    def test_blank_candidate(self):
        with pytest.raises(ValueError):
            ScenarioSpec(candidates=["A", "  "])


def test_mismatch_reported():
    """A ballot whose expectation is wrong shows up in mismatches."""
    spec = ScenarioSpec(
        voters=[1],
        candidates=["A"],
        ballots=[{"voter_id": 1, "candidate": "A", "expect": "duplicate_vote"}],
    )
    report = run_scenario(spec)
    assert len(report.mismatches) == 1
    ballot, outcome = report.mismatches[0]
    assert outcome is VoteOutcome.RECORDED
