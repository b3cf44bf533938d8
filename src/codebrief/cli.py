"""codebrief CLI interface.

Commands:
- analyze: Build an interview brief for a GitHub repository or a zip archive
- check: Validate dependencies and credentials
- init: Write a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from codebrief import __version__
from codebrief.config import CodebriefConfig, create_default_config, load_config
from codebrief.errors import CodebriefError, MalformedResponseError
from codebrief.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="codebrief",
    help="Interview briefs for source-code projects",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: CodebriefConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"codebrief {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON log lines"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """codebrief - interview briefs for source-code projects."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, TypeError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


# =============================================================================
# analyze command
# =============================================================================


def _print_summary(run_dict: dict) -> None:
    """Print a short human-readable summary of an analysis."""
    data = run_dict["data"]
    typer.echo(f"\n📦 {run_dict['title']} ({data['project_type'] or 'Unclassified'})")
    typer.echo(f"   Complexity score: {data['complexity_score']:.0f}/100")
    typer.echo(f"   Model: {run_dict['model']}")
    if data["star_intro"]:
        typer.echo(f"\n{data['star_intro']}")
    typer.echo(
        f"\n   {len(data['tech_stack_analysis'])} tech choices, "
        f"{len(data['interview_questions'])} interview questions, "
        f"{len(data['red_flags'])} red flags, "
        f"{len(data['resume_bullets'])} resume bullets"
    )


@app.command()
def analyze(
    github: Annotated[
        str | None,
        typer.Option("--github", "-g", help="GitHub repository URL"),
    ] = None,
    zip_file: Annotated[
        Path | None,
        typer.Option(
            "--zip",
            "-z",
            help="Path to a zip archive of the project",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the analysis (with provenance) as JSON"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the analysis record as JSON on stdout"),
    ] = False,
    no_save: Annotated[
        bool,
        typer.Option("--no-save", help="Do not append the result to the result store"),
    ] = False,
    raw_output: Annotated[
        Path | None,
        typer.Option("--raw-output", help="Where to write an unparsable model reply"),
    ] = None,
) -> None:
    """Analyze a project and produce an interview brief.

    Exit codes:
        0: Analysis completed
        1: Invalid input or a pipeline stage failed
    """
    from codebrief.models.repository import ProjectSource
    from codebrief.pipeline import AnalysisPipeline
    from codebrief.storage import NullResultStore

    if github and zip_file:
        _logger.error("Provide either a GitHub link (--github) or a zip file (--zip), not both.")
        raise typer.Exit(1)
    if not github and not zip_file:
        _logger.error("Please provide a GitHub link (--github) or a zip file (--zip).")
        raise typer.Exit(1)

    config = _config or CodebriefConfig()

    if not config.llm.has_credentials:
        _logger.error(f"API key for the {config.llm.provider} provider is missing.")
        raise typer.Exit(1)

    if github:
        source = ProjectSource.from_url(github)
    elif zip_file:
        source = ProjectSource.from_archive(zip_file.read_bytes(), filename=zip_file.name)

    pipeline = AnalysisPipeline(
        config=config,
        store=NullResultStore() if no_save else None,
    )

    try:
        run = pipeline.run(source)
    except MalformedResponseError as e:
        _logger.error(e.message)
        if raw_output:
            raw_output.write_text(e.raw_text, encoding="utf-8")
            _logger.error(f"Raw model reply written to {raw_output}")
        else:
            typer.echo(e.raw_text, err=True)
        raise typer.Exit(1)
    except CodebriefError as e:
        _logger.error(e.message)
        raise typer.Exit(1)

    run_dict = run.to_dict()

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(run_dict, indent=2, ensure_ascii=False), encoding="utf-8")
        _logger.info(f"Analysis written to {output}")

    if json_output:
        typer.echo(json.dumps(run.record.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_summary(run_dict)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
    offline: Annotated[
        bool,
        typer.Option("--offline", help="Skip checks that need the network"),
    ] = False,
) -> None:
    """Validate dependencies and credentials.

    Exit codes:
        0: All checks passed
        1: A required check failed
        2: Only optional checks failed (warnings)
    """
    from codebrief.utils.preflight import PreflightChecker

    checker = PreflightChecker()
    result = checker.check_all(_config or CodebriefConfig(), offline=offline)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        typer.echo("\n🔍 Preflight Check Results\n")
        for check_result in result.checks:
            status = "✅" if check_result.available else "❌"
            version_str = f" ({check_result.version})" if check_result.version else ""
            required_str = " [required]" if check_result.required else " [optional]"
            typer.echo(f"  {status} {check_result.name}{version_str}{required_str}")
            if check_result.message:
                typer.echo(f"     └─ {check_result.message}")
        typer.echo()

    if result.errors:
        if not json_output:
            typer.echo("❌ Preflight check FAILED")
            for error in result.errors:
                typer.echo(f"   • {error}")
        raise typer.Exit(1)
    elif result.warnings:
        if not json_output:
            typer.echo("⚠️  Preflight check passed with WARNINGS")
            for warning in result.warnings:
                typer.echo(f"   • {warning}")
        raise typer.Exit(2)

    if not json_output:
        typer.echo("✅ All preflight checks passed")
    raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Write a default configuration to .codebrief/config.yaml."""
    config_dir = Path(".codebrief")
    config_dir.mkdir(exist_ok=True)
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config())
    _logger.info(f"Created config: {config_file}")

    typer.echo("\n✅ codebrief configuration initialized")
    typer.echo(f"   Config: {config_file}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
