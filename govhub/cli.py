"""
Command-line interface for the GovHub feedback service.

Usage:
    govhub serve                    # Run the HTTP API
    govhub classify "Great work"    # Print the sentiment summary of a text
    govhub submit p1 --author "Aisha Bello" --comment "Great progress" --rating 5
    govhub projects                 # List seeded projects
"""

import asyncio
import json
import os

import click

from govhub.config.settings import get_settings
from govhub.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """GovHub - citizen feedback on government projects."""
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    setup_logging()


@main.command()
@click.option("--host", default=None, help="Bind address (defaults to API_HOST)")
@click.option("--port", default=None, type=int, help="Port (defaults to API_PORT)")
@click.option("--metrics/--no-metrics", default=False, help="Enable metrics server")
def serve(host: str | None, port: int | None, metrics: bool) -> None:
    """Run the feedback API server."""
    import uvicorn

    from govhub.api.app import create_app
    from govhub.observability.metrics import get_metrics

    settings = get_settings()
    if metrics:
        get_metrics().start_server()

    logger.info(
        "Starting feedback API",
        host=host or settings.api_host,
        port=port or settings.api_port,
        storage_backend=settings.storage_backend,
    )
    uvicorn.run(
        create_app(),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
    )


@main.command()
@click.argument("text")
def classify(text: str) -> None:
    """Classify TEXT and print its sentiment summary."""
    from govhub.sentiment import ClassificationError, build_classifier

    async def run():
        classifier = build_classifier()
        try:
            return await classifier.classify(text)
        finally:
            await classifier.close()

    try:
        result = asyncio.run(run())
    except ClassificationError as e:
        raise click.ClickException(f"Classification failed: {e}")

    click.echo(result.sentiment_summary)
    click.echo(
        "  "
        + ", ".join(f"{k}={v:.2f}" for k, v in sorted(result.scores.items()))
    )


@main.command()
@click.argument("project_id")
@click.option("--author", required=True, help="Submitter display name")
@click.option("--comment", required=True, help="Feedback text")
@click.option("--rating", type=click.IntRange(1, 5), default=None, help="Star rating 1-5")
@click.option("--user-id", default=None, help="Submitting user id")
def submit(
    project_id: str,
    author: str,
    comment: str,
    rating: int | None,
    user_id: str | None,
) -> None:
    """Submit feedback for PROJECT_ID against the seeded in-memory store."""
    from govhub.feedback import (
        FeedbackDraft,
        FeedbackPipeline,
        InMemoryFeedbackStore,
        InMemoryViewCache,
    )
    from govhub.projects import InMemoryProjectDirectory
    from govhub.sentiment import build_classifier

    try:
        draft = FeedbackDraft(
            author_name=author,
            comment=comment,
            rating=rating,
            user_id=user_id,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    async def run():
        store = InMemoryFeedbackStore(InMemoryProjectDirectory.seeded())
        classifier = build_classifier()
        pipeline = FeedbackPipeline(store, classifier, InMemoryViewCache())
        try:
            return await pipeline.submit(project_id, draft)
        finally:
            await classifier.close()

    result = asyncio.run(run())
    click.echo(json.dumps(result.to_dict(), indent=2))
    if not result.success:
        raise SystemExit(1)


@main.command()
def projects() -> None:
    """List the seeded projects."""
    from govhub.projects import InMemoryProjectDirectory

    async def run():
        return await InMemoryProjectDirectory.seeded().list_all()

    for project in asyncio.run(run()):
        click.echo(f"{project.id:<4} {project.status:<10} {project.title}")


if __name__ == "__main__":
    main()
