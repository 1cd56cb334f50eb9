"""CLI commands for exercising the cloud providers by hand."""

import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from handy_cloud import __version__
from handy_cloud.features.llm.chat import send_chat_completion
from handy_cloud.features.llm.errors import LlmError
from handy_cloud.features.llm.model_list import fetch_models
from handy_cloud.features.transcription.cloud import transcribe_cloud
from handy_cloud.features.transcription.services import CloudTranscriptionService
from handy_cloud.features.transcription.wav import SAMPLE_RATE_HZ, decode_wav
from handy_cloud.observability.logging import configure_logging, parse_log_level
from handy_cloud.settings import AppSettings, get_settings


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Handy cloud client CLI."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        _fail(f"Invalid configuration: {exc}")
        return
    level = "debug" if verbose else settings.log_level
    configure_logging(level=parse_log_level(level), json_format=settings.log_json)
    ctx.obj = settings


@cli.command()
@click.argument("prompt")
@click.option("--provider", "provider_id", default=None, help="Provider id.")
@click.option("--model", default=None, help="Model identifier.")
@click.pass_obj
def chat(
    settings: AppSettings, prompt: str, provider_id: str | None, model: str | None
) -> None:
    """Send PROMPT as a single-turn chat completion."""
    try:
        provider = settings.provider(provider_id)
        content = asyncio.run(
            send_chat_completion(
                provider,
                settings.post_process_api_key,
                model or settings.post_process_model,
                prompt,
                timeout=settings.http_timeout_seconds,
            )
        )
    except (LlmError, ValueError) as exc:
        _fail(str(exc))
        return

    if content is None:
        click.echo("(provider returned no content)", err=True)
        return
    click.echo(content)


@cli.command()
@click.option("--provider", "provider_id", default=None, help="Provider id.")
@click.pass_obj
def models(settings: AppSettings, provider_id: str | None) -> None:
    """List the models a provider offers."""
    try:
        provider = settings.provider(provider_id)
        model_ids = asyncio.run(
            fetch_models(
                provider,
                settings.post_process_api_key,
                timeout=settings.http_timeout_seconds,
            )
        )
    except (LlmError, ValueError) as exc:
        _fail(str(exc))
        return

    for model_id in model_ids:
        click.echo(model_id)


@cli.command()
@click.argument("wav_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--service",
    type=click.Choice([service.value for service in CloudTranscriptionService]),
    default=None,
    help="Cloud transcription service.",
)
@click.option("--model", default=None, help="Transcription model.")
@click.pass_obj
def transcribe(
    settings: AppSettings, wav_path: Path, service: str | None, model: str | None
) -> None:
    """Transcribe a 16 kHz 16-bit WAV file."""
    selected = CloudTranscriptionService(service) if service else None
    api_key, base_url = settings.transcription_endpoint(selected)

    try:
        data = wav_path.read_bytes()
    except OSError as exc:
        _fail(f"Cannot read {wav_path}: {exc}")
        return

    try:
        audio = decode_wav(data)
        if audio.sample_rate != SAMPLE_RATE_HZ:
            _fail(
                f"Expected a {SAMPLE_RATE_HZ} Hz WAV file, got {audio.sample_rate} Hz"
            )
            return
        text = asyncio.run(
            transcribe_cloud(
                api_key,
                base_url,
                model or settings.transcription_model,
                audio.samples,
                timeout=settings.http_timeout_seconds,
            )
        )
    except LlmError as exc:
        _fail(str(exc))
        return

    click.echo(text)


if __name__ == "__main__":
    cli()
