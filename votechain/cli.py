"""
VOTECHAIN v1.0 — CLI Interface.

Command-line harness that plays election scenarios against the ledger
and prints outcomes, the tally and the chain.
"""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from votechain import __version__, config
from votechain.canonical import canonical_json, compute_digest
from votechain.exceptions import VotechainError
from votechain.models import DuplicatePolicy, Vote, VoteOutcome
from votechain.scenario import DEMO_SCENARIO, ScenarioReport, load_scenario, run_scenario
from votechain.tally import TIE, WINNER

console = Console()

POLICY_CHOICE = click.Choice([p.value for p in DuplicatePolicy])
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_OUTCOME_STYLE = {
    VoteOutcome.RECORDED: "green",
    VoteOutcome.DUPLICATE_VOTE: "yellow",
    VoteOutcome.UNKNOWN_CANDIDATE: "yellow",
    VoteOutcome.UNREGISTERED_VOTER: "red",
    VoteOutcome.HASH_ENCODING_FAILURE: "red",
}


def setup_logging(level: str) -> None:
    level = level.upper()
    if level not in LOG_LEVELS:
        raise click.BadParameter(
            f"{level!r} is not one of {', '.join(LOG_LEVELS)}", param_hint="VOTECHAIN_LOG_LEVEL"
        )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ─── Rendering ───────────────────────────────────────────────────


def render_report(report: ScenarioReport) -> None:
    table = Table(title=f"🗳  Ballots — {report.name}")
    table.add_column("#", style="dim", width=4)
    table.add_column("Voter", style="cyan")
    table.add_column("Candidate")
    table.add_column("Outcome")

    for i, (ballot, outcome) in enumerate(report.outcomes, start=1):
        style = _OUTCOME_STYLE[outcome]
        table.add_row(str(i), str(ballot.voter_id), ballot.candidate, f"[{style}]{outcome.value}[/]")
    console.print(table)

    result = report.result
    lines = [f"{candidate}: {votes} votes" for candidate, votes in result.counts.items()]
    if result.status == WINNER:
        lines.append(f"[bold green]Winner: {result.winner}[/]")
    elif result.status == TIE:
        lines.append(f"[bold yellow]Election resulted in a tie.[/] ({', '.join(result.tied)})")
    else:
        lines.append("[dim]No votes recorded — no winner.[/]")
    console.print(Panel("\n".join(lines), title="📊 Election Results", border_style="cyan"))

    chain = Table(title="⛓  Blockchain")
    chain.add_column("Block", style="dim", width=5)
    chain.add_column("PrevHash", style="magenta")
    chain.add_column("CurrentHash", style="green")
    chain.add_column("Votes")
    for i, block in enumerate(report.chain):
        votes = ", ".join(f"{v['voter_id']}→{v['candidate']}" for v in block["votes"])
        chain.add_row(
            str(i),
            (block["previous_digest"][:16] + "…") if block["previous_digest"] else "—",
            (block["digest"][:16] + "…") if block["digest"] else "—",
            votes or "[dim]genesis[/]",
        )
    console.print(chain)

    if report.valid:
        console.print(f"[green]✓ Chain verified[/] ({len(report.chain)} blocks)")
    else:
        console.print("[bold red]✗ Chain integrity check FAILED[/]")

    for ballot, outcome in report.mismatches:
        console.print(
            f"[red]✗ Ballot {ballot.voter_id}/{ballot.candidate}: "
            f"expected {ballot.expect.value}, got {outcome.value}[/]"
        )


def resolve_policy(policy: str | None) -> DuplicatePolicy:
    """Pick the duplicate policy from the option, falling back to config."""
    value = policy or config.DUPLICATE_POLICY
    try:
        return DuplicatePolicy(value)
    except ValueError as e:
        raise click.BadParameter(
            f"{value!r} is not a valid duplicate policy", param_hint="VOTECHAIN_DUPLICATE_POLICY"
        ) from e


def _finish(report: ScenarioReport, as_json: bool) -> None:
    if as_json:
        click.echo(canonical_json(report.to_dict()))
    else:
        render_report(report)
    if report.mismatches or not report.valid:
        sys.exit(1)


# ─── Main Group ──────────────────────────────────────────────────


@click.group()
@click.version_option(__version__, prog_name="votechain")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: VOTECHAIN_LOG_LEVEL)",
)
def cli(log_level) -> None:
    """VOTECHAIN — Hash-chained election ledger."""
    setup_logging(log_level or config.LOG_LEVEL)


@cli.command()
@click.option("--policy", type=POLICY_CHOICE, default=None, help="Duplicate-vote scan policy")
@click.option("--json", "as_json", is_flag=True, help="Emit a canonical JSON report")
def demo(policy, as_json) -> None:
    """Run the built-in ten-ballot election."""
    _finish(run_scenario(DEMO_SCENARIO, policy=resolve_policy(policy)), as_json)


@cli.command()
@click.argument("scenario", type=click.Path(exists=True, dir_okay=False))
@click.option("--policy", type=POLICY_CHOICE, default=None, help="Duplicate-vote scan policy")
@click.option("--json", "as_json", is_flag=True, help="Emit a canonical JSON report")
def run(scenario, policy, as_json) -> None:
    """Run an election scenario from a JSON file."""
    resolved = resolve_policy(policy)
    try:
        spec = load_scenario(scenario)
    except VotechainError as e:
        raise click.ClickException(str(e)) from e
    _finish(run_scenario(spec, policy=resolved), as_json)


@cli.command("hash")
@click.argument("voter_id", type=int)
@click.argument("candidate")
@click.option("--prev", "previous_digest", default=config.GENESIS_DIGEST, help="Previous block digest")
def hash_cmd(voter_id, candidate, previous_digest) -> None:
    """Compute the digest a block for this vote would carry."""
    vote = Vote(voter_id=voter_id, candidate=candidate)
    try:
        digest = compute_digest(vote, (vote,), previous_digest)
    except VotechainError as e:
        raise click.ClickException(str(e)) from e
    click.echo(digest)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
