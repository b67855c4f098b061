"""
Command-line interface for brevit.

Provides commands for optimizing input files or stdin, inspecting the
strategy selection, and managing configuration.
"""

import asyncio
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from . import __version__
from .core.client import BrevitClient
from .core.config import BrevitConfig, get_config
from .exceptions import ConfigurationError
from .models.enums import (
    ImageOptimizationMode,
    JsonOptimizationMode,
    LogLevel,
    TextOptimizationMode,
)
from .utils.error_handler import ErrorHandler
from .utils.logging import get_logger, setup_logging
from .utils.rich_logging import BrevitConsole

app = typer.Typer(
    name="brevit",
    help="Token-efficient encoder for LLM prompts",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


@app.callback()
def main_callback(
    log_level: Optional[LogLevel] = typer.Option(
        None, "--log-level", help="Override the configured log level"
    ),
):
    """Configure logging before any command runs."""
    config = get_config()
    if log_level is not None:
        config = config.model_copy(update={"log_level": log_level})
    setup_logging(config)


def _read_input(path: Optional[Path]) -> Any:
    """Read raw input from a file or stdin; undecodable bytes stay binary."""
    if path is None:
        data = typer.get_binary_stream("stdin").read()
    else:
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        data = path.read_bytes()

    text = ErrorHandler.handle_with_fallback(
        lambda: data.decode("utf-8"),
        fallback=None,
        error_msg="input_not_utf8",
        log_level="debug",
        exceptions=(UnicodeDecodeError,),
    )
    return data if text is None else text


def _build_config(**overrides: Any) -> BrevitConfig:
    """Apply CLI options on top of the active configuration."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    try:
        return BrevitConfig(**{**get_config().model_dump(), **updates})
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ConfigurationError(error["msg"], field=field, value=updates.get(field)) from e


def _build_client(config: BrevitConfig, llm: bool) -> BrevitClient:
    if llm:
        from .optimizers.llm_summarizer import LiteLLMTextOptimizer

        return BrevitClient(config, text_optimizer=LiteLLMTextOptimizer())
    return BrevitClient(config)


def _fail(message: str) -> NoReturn:
    BrevitConsole().print_error(message)
    raise typer.Exit(code=1)


InputArgument = typer.Argument(None, help="Input file (default: stdin)")
JsonModeOption = typer.Option(None, "--json-mode", help="JSON optimization mode")
TextModeOption = typer.Option(None, "--text-mode", help="Long text optimization mode")
ImageModeOption = typer.Option(None, "--image-mode", help="Image optimization mode")
AbbreviateOption = typer.Option(
    None, "--abbreviate/--no-abbreviate", help="Alias repeated top-level path segments"
)
ThresholdOption = typer.Option(
    None, "--threshold", help="Minimum occurrences before a segment gets an alias"
)
LongTextOption = typer.Option(
    None, "--long-text-threshold", help="Strings longer than this are long text"
)
LlmOption = typer.Option(False, "--llm", help="Summarize long text with LiteLLM")


def _run(
    entry_point: str,
    input_file: Optional[Path],
    llm: bool,
    explain: bool = False,
    **overrides: Any,
) -> None:
    try:
        config = _build_config(**overrides)
        raw = _read_input(input_file)
    except ConfigurationError as e:
        _fail(e.user_message)
    except FileNotFoundError as e:
        _fail(str(e))

    client = _build_client(config, llm)

    if explain:
        BrevitConsole().print_candidates(client.rank_strategies(raw), stderr=True)

    with ErrorHandler.log_duration(entry_point, log_level="debug"):
        result = asyncio.run(getattr(client, entry_point)(raw))

    if explain and isinstance(raw, str):
        BrevitConsole().print_savings(raw, result, stderr=True)

    typer.echo(result)


@app.command()
def optimize(
    input_file: Optional[Path] = InputArgument,
    json_mode: Optional[JsonOptimizationMode] = JsonModeOption,
    text_mode: Optional[TextOptimizationMode] = TextModeOption,
    image_mode: Optional[ImageOptimizationMode] = ImageModeOption,
    abbreviate: Optional[bool] = AbbreviateOption,
    threshold: Optional[int] = ThresholdOption,
    long_text_threshold: Optional[int] = LongTextOption,
    llm: bool = LlmOption,
):
    """
    Optimize input with the configured modes, routing on its shape.
    """
    _run(
        "optimize",
        input_file,
        llm,
        json_mode=json_mode,
        text_mode=text_mode,
        image_mode=image_mode,
        enable_abbreviations=abbreviate,
        abbreviation_threshold=threshold,
        long_text_threshold=long_text_threshold,
    )


@app.command()
def brevity(
    input_file: Optional[Path] = InputArgument,
    text_mode: Optional[TextOptimizationMode] = TextModeOption,
    image_mode: Optional[ImageOptimizationMode] = ImageModeOption,
    abbreviate: Optional[bool] = AbbreviateOption,
    threshold: Optional[int] = ThresholdOption,
    long_text_threshold: Optional[int] = LongTextOption,
    llm: bool = LlmOption,
    explain: bool = typer.Option(
        False, "--explain", help="Print ranked strategy candidates and savings to stderr"
    ),
):
    """
    Analyze input, select a strategy automatically and optimize with it.
    """
    _run(
        "brevity",
        input_file,
        llm,
        explain=explain,
        text_mode=text_mode,
        image_mode=image_mode,
        enable_abbreviations=abbreviate,
        abbreviation_threshold=threshold,
        long_text_threshold=long_text_threshold,
    )


@app.command()
def analyze(
    input_file: Optional[Path] = InputArgument,
    long_text_threshold: Optional[int] = LongTextOption,
):
    """
    Show structural metrics and ranked strategy candidates for input.
    """
    try:
        config = _build_config(long_text_threshold=long_text_threshold)
        raw = _read_input(input_file)
    except ConfigurationError as e:
        _fail(e.user_message)
    except FileNotFoundError as e:
        _fail(str(e))

    client = BrevitClient(config)
    brevit_console = BrevitConsole()
    brevit_console.print_analysis(client.analyze(raw))
    brevit_console.print_candidates(client.rank_strategies(raw))


@app.command()
def version():
    """Show version information."""
    BrevitConsole().print_banner()
    console.print(f"[bold cyan]brevit[/bold cyan] version {__version__}")


# Configuration management subcommand group
config_app = typer.Typer(help="Configuration management commands")
app.add_typer(config_app, name="config")


@config_app.command("export")
def config_export(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: .brevit/config.yaml)"
    ),
):
    """
    Export current configuration to YAML file.
    """
    from .utils.config_export import export_config

    try:
        output_path = export_config(get_config(), output)
    except OSError as e:
        _fail(f"Export failed: {e}")

    BrevitConsole().print_success(f"Configuration exported to: {output_path}")


@config_app.command("load")
def config_load(
    config_file: Path = typer.Argument(..., help="Path to configuration YAML file"),
):
    """
    Load and validate configuration from YAML file.

    This loads the configuration and displays it for verification.
    To actually use this config, set it as your environment or .env file.
    """
    from .utils.config_export import import_config

    try:
        config = import_config(config_file)
    except FileNotFoundError as e:
        _fail(str(e))
    except (ValidationError, ConfigurationError, yaml.YAMLError) as e:
        _fail(f"Invalid configuration file: {e}")

    brevit_console = BrevitConsole()
    brevit_console.print_success(f"Configuration loaded from: {config_file}")
    brevit_console.print_config_summary(config)


@config_app.command("show")
def config_show():
    """
    Display current configuration settings.
    """
    from rich.table import Table

    config = get_config()

    table = Table(title="Active Settings")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")

    for key, value in sorted(config.model_dump(exclude_none=True, mode="json").items()):
        table.add_row(key, str(value))

    console.print(table)


@config_app.command("diff")
def config_diff(
    config1: Path = typer.Argument(..., help="First configuration file"),
    config2: Path = typer.Argument(..., help="Second configuration file"),
):
    """
    Compare two configuration files and show differences.
    """
    from .utils.config_export import import_config, print_config_diff

    try:
        cfg1 = import_config(config1)
        cfg2 = import_config(config2)
    except FileNotFoundError as e:
        _fail(str(e))
    except (ValidationError, ConfigurationError, yaml.YAMLError) as e:
        _fail(f"Invalid configuration file: {e}")

    console.print("\n[bold]Comparing:[/bold]")
    console.print(f"  Config 1: {config1}")
    console.print(f"  Config 2: {config2}\n")

    print_config_diff(cfg1, cfg2)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
