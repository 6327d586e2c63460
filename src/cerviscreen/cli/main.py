"""CerviScreen CLI entry point."""
from __future__ import annotations

import json

import click


@click.group()
@click.option("--log-level", default=None, help="Logging level (default from environment)")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """CerviScreen: cervical screening portal."""
    from cerviscreen.config import PortalConfig
    from cerviscreen.logging_config import configure_logging

    config = PortalConfig.from_env()
    configure_logging(log_level or config.log_level)
    ctx.obj = config


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--db", default=None, help="Database path")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
@click.pass_obj
def serve(config, host: str | None, port: int | None, db: str | None, debug: bool) -> None:
    """Start the CerviScreen API server."""
    from dataclasses import replace

    from cerviscreen.store import open_store
    from cerviscreen.web.app import create_app

    config = replace(
        config,
        host=host or config.host,
        port=port or config.port,
        db_path=db or config.db_path,
    )
    app = create_app(store=open_store(config))
    click.echo(f"Starting CerviScreen on {config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=debug)


@cli.command()
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the answers to this JSON file instead of stdout",
)
def questionnaire(output: str | None) -> None:
    """Answer the screening questionnaire in the terminal."""
    from cerviscreen.questionnaire.interviewer import ConsoleInterviewer, run_questionnaire
    from cerviscreen.questionnaire.sequencer import Sequencer

    try:
        answers = run_questionnaire(Sequencer(), ConsoleInterviewer())
    except (EOFError, KeyboardInterrupt):
        raise click.Abort() from None

    payload = json.dumps([a.to_dict() for a in answers], indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(payload + "\n")
        click.echo(f"Saved {len(answers)} answers to {output}")
    else:
        click.echo(payload)


@cli.command("add-physician")
@click.option("--name", "full_name", required=True, help="Physician's full name")
@click.option("--specialization", default="", help="Specialization")
@click.option("--license", "license_number", default="", help="License number")
@click.option("--phone", default="", help="Contact phone")
@click.option("--years", default=0, type=int, help="Years of experience")
@click.option("--id", "physician_id", default=None, help="Physician id (generated if omitted)")
@click.option("--db", default=None, help="Database path")
@click.pass_obj
def add_physician(
    config,
    full_name: str,
    specialization: str,
    license_number: str,
    phone: str,
    years: int,
    physician_id: str | None,
    db: str | None,
) -> None:
    """Register a physician patients can choose."""
    import uuid
    from dataclasses import replace

    from cerviscreen.model.profile import Physician
    from cerviscreen.store import open_store
    from cerviscreen.store.repositories import PhysicianRepository

    store = open_store(replace(config, db_path=db or config.db_path))
    physician = Physician(
        id=physician_id or uuid.uuid4().hex[:12],
        full_name=full_name,
        specialization=specialization,
        license_number=license_number,
        phone=phone,
        years_of_experience=years,
    )
    PhysicianRepository(store).upsert(physician)
    click.echo(f"Physician added: {physician.id} ({physician.display_name})")


@cli.command()
@click.option("--physician-id", required=True, help="Physician whose queue to show")
@click.option("--pending/--all", default=False, help="Only show submissions awaiting review")
@click.option("--db", default=None, help="Database path")
@click.pass_obj
def queue(config, physician_id: str, pending: bool, db: str | None) -> None:
    """Show a physician's review queue."""
    from dataclasses import replace

    from cerviscreen.model.submission import SubmissionStatus
    from cerviscreen.store import open_store
    from cerviscreen.workflow.review import ClinicalReview

    review = ClinicalReview(open_store(replace(config, db_path=db or config.db_path)))
    status = SubmissionStatus.PENDING_REVIEW if pending else None
    submissions = review.queue_for(physician_id, status)
    if not submissions:
        click.echo("No submissions")
        return

    for s in submissions:
        score = s.primary_quality_score
        flags = f"  [{', '.join(s.triage_flags)}]" if s.triage_flags else ""
        click.echo(
            f"{s.id}  {s.patient_name or s.patient_id}  {s.status}  "
            f"quality={score if score is not None else '-'}  {s.submitted_at}{flags}"
        )
    stats = review.stats(physician_id)
    click.echo(
        f"Total: {stats.total_submissions}  Pending: {stats.pending_review}  "
        f"High priority: {stats.high_priority}  Low quality images: {stats.low_quality_images}"
    )
