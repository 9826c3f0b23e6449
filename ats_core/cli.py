"""
ats-core Command Line Interface

Provides CLI commands for browsing candidates, jobs, applications and
assessments, scoring matches, and driving the application workflow.

The store is in-memory, so every invocation starts from the demo data set.
"""

from typing import Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from ats_core.services import ATSService, build_service
from ats_core.utils.exceptions import ATSError

app = typer.Typer(
    name="ats-core",
    help="Hiring pipeline domain service CLI",
    add_completion=False,
)
console = Console()

STATUS_COLORS = {
    "RECEIVED": "cyan",
    "SCREENING": "yellow",
    "PHONE_INTERVIEW": "yellow",
    "TECHNICAL_INTERVIEW": "blue",
    "FINAL_INTERVIEW": "blue",
    "OFFER_EXTENDED": "magenta",
    "OFFER_ACCEPTED": "green",
    "HIRED": "green",
    "OFFER_DECLINED": "dim",
    "REJECTED": "red",
    "WITHDRAWN": "dim",
    "ACTIVE": "green",
    "INACTIVE": "dim",
    "BLACKLISTED": "red",
    "OPEN": "green",
    "ON_HOLD": "yellow",
    "FILLED": "blue",
    "CLOSED": "red",
}

RECOMMENDATION_COLORS = {
    "STRONG_MATCH": "green",
    "PARTIAL_MATCH": "yellow",
    "WEAK_MATCH": "red",
}


@app.callback()
def main() -> None:
    """Hiring pipeline domain service CLI."""
    from ats_core.utils.logger import setup_logging

    setup_logging()


def _service() -> ATSService:
    return build_service(seed=True)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _colored(value: str) -> str:
    color = STATUS_COLORS.get(value, "white")
    return f"[{color}]{value}[/{color}]"


def _truncate(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


@app.command()
def version():
    """Show application version."""
    from ats_core import __version__, __app_name__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration."""
    from ats_core.utils.config import get_settings

    settings = get_settings()

    table = Table(title="ats-core Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Enforce Transitions", str(settings.workflow.enforce_transitions))
    table.add_row("Stuck Threshold (days)", str(settings.workflow.default_stuck_threshold_days))
    table.add_row("Clamp Match Score", str(settings.matching.clamp_score))
    table.add_row("Default Min Score", str(settings.matching.default_min_score))
    table.add_row("Max Page Size", str(settings.store.max_page_size))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


# =============================================================================
# Candidates
# =============================================================================


def _candidate_table(title: str, candidates: list) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Role")
    table.add_column("Location")
    table.add_column("Exp", justify="right")
    table.add_column("Status", justify="center")
    for c in candidates:
        table.add_row(
            c.id,
            _truncate(c.name, 30),
            _truncate(c.current_role, 30),
            _truncate(c.location, 20),
            str(c.years_of_experience),
            _colored(c.status.value),
        )
    return table


@app.command()
def list_candidates(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status (ACTIVE/INACTIVE/HIRED/BLACKLISTED)"),
    after: Optional[str] = typer.Option(None, "--after", "-a", help="Cursor: show candidates after this ID"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
):
    """List candidates ordered by ID."""
    service = _service()
    try:
        if status:
            candidates = service.find_candidates_by_status(status)
        else:
            candidates = service.find_page(after, limit)
    except ATSError as e:
        _fail(str(e))

    if not candidates:
        console.print("[yellow]No candidates found.[/yellow]")
        raise typer.Exit(0)

    console.print(_candidate_table(f"Candidates ({len(candidates)} shown)", candidates))


@app.command()
def show_candidate(
    candidate_id: str = typer.Argument(..., help="Candidate ID to display"),
):
    """Show detailed information about a specific candidate."""
    service = _service()
    try:
        candidate = service.require_candidate(candidate_id)
    except ATSError as e:
        _fail(str(e))

    console.print("\n[bold cyan]Candidate Details[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")
    console.print(f"[bold]ID:[/bold] {candidate.id}")
    console.print(f"[bold]Name:[/bold] {candidate.name}")
    console.print(f"[bold]Email:[/bold] {candidate.email}")
    if candidate.phone:
        console.print(f"[bold]Phone:[/bold] {candidate.phone}")
    if candidate.linkedin_url:
        console.print(f"[bold]LinkedIn:[/bold] {candidate.linkedin_url}")
    console.print(f"[bold]Location:[/bold] {candidate.location}")
    console.print(f"[bold]Role:[/bold] {candidate.current_role} at {candidate.current_company}")
    console.print(f"[bold]Experience:[/bold] {candidate.years_of_experience} years")
    console.print(f"[bold]Status:[/bold] {_colored(candidate.status.value)}")

    if candidate.skills:
        console.print(f"\n[bold]Skills ({len(candidate.skills)}):[/bold] {', '.join(candidate.skills)}")
    if candidate.summary:
        console.print(f"\n[bold]Summary:[/bold]\n  {candidate.summary}")

    average = service.average_score_percent(candidate.id)
    if average is not None:
        console.print(f"\n[bold]Average assessment score:[/bold] {average:.1f}%")


@app.command()
def search_candidates(
    query: Optional[str] = typer.Argument(None, help="Text to find in name, role or summary"),
    skill: Optional[list[str]] = typer.Option(None, "--skill", "-s", help="Skill filter (repeatable, matches any)"),
    min_exp: Optional[int] = typer.Option(None, "--min-exp", "-e", help="Minimum years of experience"),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Location keyword"),
):
    """Search candidates."""
    service = _service()
    try:
        candidates = service.search_candidates(query, skill, min_exp, location)
    except ATSError as e:
        _fail(str(e))

    if not candidates:
        console.print("[yellow]No candidates found.[/yellow]")
        raise typer.Exit(0)

    console.print(_candidate_table(f"Search results ({len(candidates)})", candidates))


# =============================================================================
# Jobs and Matching
# =============================================================================


@app.command()
def list_jobs(
    open_only: bool = typer.Option(False, "--open", "-o", help="Only OPEN jobs"),
    department: Optional[str] = typer.Option(None, "--department", "-d", help="Department name"),
):
    """List job requisitions."""
    service = _service()
    if open_only:
        jobs = service.list_open_jobs(department)
    elif department:
        jobs = service.find_jobs_by_department(department)
    else:
        jobs = service.list_jobs()

    if not jobs:
        console.print("[yellow]No jobs found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Jobs ({len(jobs)} total)")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Department")
    table.add_column("Location")
    table.add_column("Status", justify="center")
    table.add_column("Skills", justify="right")

    for job in jobs:
        table.add_row(
            job.id,
            _truncate(job.title, 40),
            job.department,
            _truncate(job.location, 25),
            _colored(job.status.value),
            f"{len(job.required_skills)}+{len(job.preferred_skills)}",
        )

    console.print(table)


def _print_match(result: Any) -> None:
    color = RECOMMENDATION_COLORS.get(result.recommendation.value, "white")
    console.print(
        f"\n[bold]{result.candidate_name}[/bold] ({result.candidate_id}) vs "
        f"[bold]{result.job_title}[/bold] ({result.job_id})"
    )
    console.print(
        f"  Overall: [bold]{result.overall_score}[/bold]  "
        f"[{color}]{result.recommendation.value}[/{color}]"
    )
    console.print(
        f"  Required {result.required_score:.1f} | Preferred {result.preferred_score:.1f} | "
        f"Experience {result.experience_score:.1f} ({result.years_of_experience} years)"
    )
    if result.required_matched:
        console.print(f"  [green]Required matched:[/green] {', '.join(result.required_matched)}")
    if result.required_missing:
        console.print(f"  [red]Required missing:[/red] {', '.join(result.required_missing)}")
    if result.preferred_matched:
        console.print(f"  [green]Preferred matched:[/green] {', '.join(result.preferred_matched)}")


@app.command()
def match(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
    job_id: str = typer.Argument(..., help="Job ID"),
):
    """Score one candidate against one job."""
    service = _service()
    try:
        service.require_candidate(candidate_id)
        service.require_job(job_id)
    except ATSError as e:
        _fail(str(e))

    _print_match(service.match_score(candidate_id, job_id))


@app.command()
def matching_jobs(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
    min_score: Optional[int] = typer.Option(None, "--min-score", "-m", help="Minimum overall score (0-100)"),
):
    """Find OPEN jobs that fit a candidate, best first."""
    service = _service()
    try:
        service.require_candidate(candidate_id)
        results = service.find_matching_jobs(candidate_id, min_score) or []
    except ATSError as e:
        _fail(str(e))

    if not results:
        console.print("[yellow]No matching open jobs.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Matching jobs for {candidate_id}")
    table.add_column("Job", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Recommendation", justify="center")
    table.add_column("Missing required")

    for r in results:
        color = RECOMMENDATION_COLORS.get(r.recommendation.value, "white")
        table.add_row(
            r.job_id,
            r.job_title,
            str(r.overall_score),
            f"[{color}]{r.recommendation.value}[/{color}]",
            ", ".join(r.required_missing) or "-",
        )

    console.print(table)


# =============================================================================
# Applications and Workflow
# =============================================================================


@app.command()
def show_application(
    application_id: str = typer.Argument(..., help="Application ID"),
):
    """Show an application's stage, SLA, history and feedback."""
    service = _service()
    try:
        application = service.require_application(application_id)
    except ATSError as e:
        _fail(str(e))

    view = service.queries.application_status(application.id)
    steps = service.queries.next_steps(application.id)

    console.print("\n[bold cyan]Application Details[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")
    console.print(f"[bold]ID:[/bold] {view['application_id']}")
    console.print(f"[bold]Candidate:[/bold] {view['candidate_id']}")
    console.print(f"[bold]Job:[/bold] {view['job_id']} ({service.queries.job_title(application.job_id)})")
    console.print(f"[bold]Status:[/bold] {_colored(view['current_status'])}")
    console.print(f"[bold]Interview round:[/bold] {view['current_interview_round']}")
    console.print(f"[bold]Days in stage:[/bold] {view['days_in_current_stage']}")
    console.print(f"[bold]SLA:[/bold] {view['sla_status']}")

    table = Table(title="Status history")
    table.add_column("Status")
    table.add_column("Changed at")
    table.add_column("By", style="dim")
    table.add_column("Reason")
    for entry in application.status_history:
        table.add_row(
            _colored(entry.status.value),
            entry.changed_at.strftime("%Y-%m-%d %H:%M"),
            entry.changed_by,
            entry.reason,
        )
    console.print(table)

    if application.notes:
        console.print(f"\n[bold]Recruiter notes ({len(application.notes)}):[/bold]")
        for note in application.notes:
            console.print(f"  • [dim]{note.created_at:%Y-%m-%d}[/dim] {note.author_name}: {note.note}")

    console.print(f"\n[bold]Next steps:[/bold] {steps['candidate_action']}")
    console.print(f"[bold]Typical wait:[/bold] {steps['typical_wait']}")


@app.command()
def journey(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
):
    """Show every application of a candidate."""
    service = _service()
    view = service.queries.candidate_journey(candidate_id)
    if view is None:
        _fail(f"Candidate not found: {candidate_id}")

    console.print(
        f"\n[bold cyan]{view['name']}[/bold cyan] ({view['candidate_id']}) - "
        f"{view['total_applications']} applications, {view['active_applications']} active"
    )

    table = Table()
    table.add_column("Application", style="dim")
    table.add_column("Job")
    table.add_column("Status", justify="center")
    table.add_column("Days in pipeline", justify="right")
    table.add_column("Days in stage", justify="right")
    table.add_column("Assessments", justify="right")
    table.add_column("Notes", justify="right")
    for a in view["applications"]:
        table.add_row(
            a["application_id"],
            f"{a['job_title']} ({a['job_id']})",
            _colored(a["status"]),
            str(a["days_in_pipeline"]),
            str(a["days_in_current_stage"]),
            str(len(a["assessments"])),
            str(a["recruiter_notes"]),
        )
    console.print(table)


@app.command()
def transition(
    application_id: str = typer.Argument(..., help="Application ID"),
    new_status: str = typer.Argument(..., help="Target status, e.g. SCREENING"),
    actor: str = typer.Option("system", "--actor", "-a", help="User making the change"),
    reason: str = typer.Option("", "--reason", "-r", help="Reason for the change"),
):
    """Move an application to a new status."""
    service = _service()
    try:
        service.require_application(application_id)
        updated = service.apply_transition(application_id, new_status, actor, reason)
    except ATSError as e:
        _fail(str(e))

    console.print(
        f"[green]✓[/green] {updated.id} is now {_colored(updated.status.value)} "
        f"(interview round {updated.current_interview_round})"
    )


@app.command()
def note(
    application_id: str = typer.Argument(..., help="Application ID"),
    body: str = typer.Argument(..., help="Note text"),
    author_id: str = typer.Option("recruiter", "--author-id", help="Author user ID"),
    author_name: str = typer.Option("Recruiter", "--author-name", help="Author display name"),
):
    """Add a recruiter note to an application."""
    service = _service()
    try:
        service.require_application(application_id)
        updated = service.add_note(application_id, body, author_id, author_name)
    except ATSError as e:
        _fail(str(e))

    added = updated.notes[-1]
    console.print(f"[green]✓[/green] Added note {added.id} to {updated.id}")


@app.command()
def stuck(
    days: Optional[int] = typer.Option(None, "--days", "-d", help="Days without a status change"),
):
    """List applications stuck in a non-terminal stage."""
    service = _service()
    try:
        rows = service.queries.stuck_report(days)
    except ATSError as e:
        _fail(str(e))

    if not rows:
        console.print("[green]No stuck applications.[/green]")
        raise typer.Exit(0)

    table = Table(title=f"Stuck applications ({len(rows)})")
    table.add_column("Application", style="dim")
    table.add_column("Candidate")
    table.add_column("Job")
    table.add_column("Status", justify="center")
    table.add_column("Days in stage", justify="right")
    table.add_column("SLA", justify="right")
    for row in rows:
        table.add_row(
            row["application_id"],
            row["candidate_id"],
            row["job_id"],
            _colored(row["current_status"]),
            str(row["days_in_stage"]),
            str(row["sla_threshold"]),
        )
    console.print(table)


@app.command()
def stats():
    """Show the application count per workflow status."""
    service = _service()
    pipeline = service.pipeline_stats()

    table = Table(title=f"Pipeline ({pipeline.total} applications, {pipeline.active} active)")
    table.add_column("Status")
    table.add_column("Count", justify="right")
    for status, count in pipeline.by_status.items():
        table.add_row(_colored(status.value), str(count))
    console.print(table)


@app.command()
def workflow(
    status: Optional[str] = typer.Argument(None, help="Describe transitions from this status"),
):
    """Show the workflow transition graph."""
    service = _service()
    try:
        description = service.describe_transitions(status)
    except ATSError as e:
        _fail(str(e))

    if status:
        next_states = description["valid_next_states"]
        console.print(f"[bold]{description['from_status']}[/bold]")
        console.print(f"  Next: {', '.join(next_states) if next_states else '(terminal)'}")
        sla = description["expected_days_in_stage"]
        console.print(f"  SLA: {sla if sla is not None else 'none'} days")
        return

    table = Table(title="Workflow transitions")
    table.add_column("From")
    table.add_column("Allowed next")
    table.add_column("SLA days", justify="right")
    for from_status, next_states in description["transitions"].items():
        sla = description["sla_days"].get(from_status)
        table.add_row(
            _colored(from_status),
            ", ".join(next_states) or "[dim](terminal)[/dim]",
            str(sla) if sla is not None else "-",
        )
    console.print(table)


# =============================================================================
# Assessments
# =============================================================================


@app.command()
def assessments(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
    assessment_type: Optional[str] = typer.Option(None, "--type", "-t", help="Only the latest result of this type"),
):
    """Show a candidate's assessment results."""
    service = _service()
    try:
        service.require_candidate(candidate_id)
        if assessment_type:
            latest = service.get_assessment_by_type(candidate_id, assessment_type)
            results = [latest] if latest else []
        else:
            results = service.get_assessment_results(candidate_id)
    except ATSError as e:
        _fail(str(e))

    if not results:
        console.print(f"[yellow]No assessments found for candidate {candidate_id}.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Assessments for {candidate_id}")
    table.add_column("ID", style="dim")
    table.add_column("Type")
    table.add_column("Score", justify="right")
    table.add_column("Percentile", justify="right")
    table.add_column("Reading")
    table.add_column("Completed")
    for r in results:
        table.add_row(
            r.id,
            r.type.value,
            f"{r.score:g}/{r.max_score:g}",
            str(r.percentile),
            r.percentile_label,
            f"{r.completed_at:%Y-%m-%d}",
        )
    console.print(table)

    average = service.average_score_percent(candidate_id)
    if average is not None:
        console.print(f"Average score: [bold]{average:.1f}%[/bold]")


if __name__ == "__main__":
    app()
