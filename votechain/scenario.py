"""
VOTECHAIN v1.0 — Election Scenarios.

Pydantic models describing a scripted election (voters, candidates and
ballots in submission order), a JSON loader, and a runner that plays a
scenario against a fresh ``Election``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from votechain.election import Election
from votechain.exceptions import ScenarioError
from votechain.models import DuplicatePolicy, VoteOutcome
from votechain.tally import ElectionResult

logger = logging.getLogger("votechain.scenario")


class BallotSpec(BaseModel):
    voter_id: int = Field(..., description="Voter casting the ballot")
    candidate: str = Field(..., max_length=200, description="Candidate name")
    expect: VoteOutcome | None = Field(None, description="Expected outcome, if asserted")


class ScenarioSpec(BaseModel):
    name: str = Field("election", max_length=100)
    voters: list[int] = Field(default_factory=list, description="Voter IDs to register")
    candidates: list[str] = Field(..., min_length=1, description="Candidates to declare")
    ballots: list[BallotSpec] = Field(default_factory=list)

    @field_validator("candidates")
    @classmethod
    def not_empty(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name or not name.strip():
                raise ValueError("Candidate names must not be empty or whitespace only")
        return v


@dataclass
class ScenarioReport:
    name: str
    outcomes: list[tuple[BallotSpec, VoteOutcome]] = field(default_factory=list)
    result: ElectionResult = field(default_factory=ElectionResult)
    chain: list[dict[str, Any]] = field(default_factory=list)
    valid: bool = True

    @property
    def mismatches(self) -> list[tuple[BallotSpec, VoteOutcome]]:
        """Ballots whose outcome differs from the one they expected."""
        return [
            (ballot, outcome) for ballot, outcome in self.outcomes
            if ballot.expect is not None and ballot.expect != outcome
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "outcomes": [
                {
                    "voter_id": ballot.voter_id,
                    "candidate": ballot.candidate,
                    "outcome": outcome.value,
                }
                for ballot, outcome in self.outcomes
            ],
            "result": self.result.to_dict(),
            "chain": self.chain,
            "valid": self.valid,
        }


# The reference run: ten voters, two candidates, two double-vote
# attempts, one unknown candidate and one unregistered voter.
DEMO_SCENARIO = ScenarioSpec(
    name="demo",
    voters=list(range(1, 11)),
    candidates=["Candidate A", "Candidate B"],
    ballots=[
        BallotSpec(voter_id=1, candidate="Candidate A", expect=VoteOutcome.RECORDED),
        BallotSpec(voter_id=2, candidate="Candidate B", expect=VoteOutcome.RECORDED),
        BallotSpec(voter_id=3, candidate="Candidate A", expect=VoteOutcome.RECORDED),
        BallotSpec(voter_id=3, candidate="Candidate B", expect=VoteOutcome.DUPLICATE_VOTE),
        BallotSpec(voter_id=4, candidate="Candidate B", expect=VoteOutcome.RECORDED),
        BallotSpec(voter_id=5, candidate="Candidate A", expect=VoteOutcome.RECORDED),
        BallotSpec(voter_id=5, candidate="Candidate A", expect=VoteOutcome.DUPLICATE_VOTE),
        BallotSpec(voter_id=6, candidate="Candidate B", expect=VoteOutcome.RECORDED),
        BallotSpec(voter_id=7, candidate="Candidate C", expect=VoteOutcome.UNKNOWN_CANDIDATE),
        BallotSpec(voter_id=11, candidate="Candidate B", expect=VoteOutcome.UNREGISTERED_VOTER),
    ],
)


def load_scenario(path: str | Path) -> ScenarioSpec:
    """Read and validate a JSON scenario file.

    Raises:
        ScenarioError: if the file is unreadable or does not validate.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ScenarioSpec.model_validate(data)
    except OSError as e:
        raise ScenarioError(f"Cannot read scenario {path}: {e}") from e
    except ValidationError as e:
        raise ScenarioError(f"Invalid scenario {path}: {e}") from e
    except ValueError as e:
        raise ScenarioError(f"Malformed JSON in {path}: {e}") from e


def run_scenario(
    spec: ScenarioSpec,
    policy: DuplicatePolicy | str | None = None,
) -> ScenarioReport:
    """Register, declare, cast every ballot in order, then tally."""
    election = Election(policy=policy)
    for voter_id in spec.voters:
        election.register_voter(voter_id)
    for name in spec.candidates:
        election.declare_candidate(name)

    report = ScenarioReport(name=spec.name)
    for ballot in spec.ballots:
        outcome = election.cast_vote(ballot.voter_id, ballot.candidate)
        report.outcomes.append((ballot, outcome))

    report.result = election.get_results()
    report.chain = election.get_chain()
    report.valid = election.verify_chain()

    if report.mismatches:
        logger.warning("Scenario %s: %d unexpected outcome(s)", spec.name, len(report.mismatches))
    return report
