import pytest

from votechain import config
from votechain.election import Election


@pytest.fixture(autouse=True)
def reset_votechain_config(monkeypatch):
    """Reset config from a clean environment between every test."""
    monkeypatch.delenv("VOTECHAIN_DUPLICATE_POLICY", raising=False)
    monkeypatch.delenv("VOTECHAIN_LOG_LEVEL", raising=False)
    config.reload()

    yield

    config.reload()


@pytest.fixture
def election():
    """Voters 1..10 registered, candidates A and B declared."""
    e = Election()
    for voter_id in range(1, 11):
        e.register_voter(voter_id)
    e.declare_candidate("A")
    e.declare_candidate("B")
    return e
