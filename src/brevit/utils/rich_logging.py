"""Enhanced console output with Rich library"""

from typing import TYPE_CHECKING, Optional

import structlog
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

if TYPE_CHECKING:
    from ..core.config import BrevitConfig
    from ..models.schemas import DataAnalysis, StrategyCandidate

# Custom Brevit theme
BREVIT_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "metric": "magenta",
        "strategy": "blue",
        "score": "green",
        "savings": "bright_green",
    }
)


class BrevitConsole:
    """Singleton console with Brevit branding and theme"""

    _instance: Optional["BrevitConsole"] = None

    def __new__(cls) -> "BrevitConsole":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, "initialized"):
            self.console = Console(theme=BREVIT_THEME)
            self.err_console = Console(theme=BREVIT_THEME, stderr=True)
            self.initialized = True

    def print_banner(self):
        """Print Brevit banner"""
        self.console.print(
            Panel.fit(
                "[bold cyan]Brevit[/bold cyan] - Token-Efficient Encoder for LLM Prompts\n"
                "[dim]Flatten • Tabular Arrays • Abbreviations[/dim]",
                border_style="cyan",
            )
        )

    def print_config_summary(self, config: "BrevitConfig"):
        """Print configuration summary table"""
        table = Table(title="Configuration", show_header=False, border_style="cyan")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="yellow")

        table.add_row("JSON Mode", str(config.json_mode))
        table.add_row("Text Mode", str(config.text_mode))
        table.add_row("Image Mode", str(config.image_mode))
        table.add_row("Long Text Threshold", f"{config.long_text_threshold:,} chars")

        if config.enable_abbreviations:
            table.add_row("Abbreviations", f"✓ (threshold {config.abbreviation_threshold})")
        else:
            table.add_row("Abbreviations", "off")

        if config.json_paths_to_keep:
            table.add_row("Paths To Keep", ", ".join(config.json_paths_to_keep))

        table.add_row("Log Level", str(config.log_level))

        self.console.print(table)

    def print_analysis(self, analysis: "DataAnalysis"):
        """Print structural analysis metrics"""
        table = Table(title="Structural Analysis", show_header=True, border_style="cyan")
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", style="yellow", justify="right")

        table.add_row("Inferred Type", str(analysis.inferred_type))
        table.add_row("Complexity", str(analysis.complexity))
        table.add_row("Depth", str(analysis.depth))
        table.add_row("Objects", f"{analysis.object_count:,}")
        table.add_row("Arrays", f"{analysis.array_count:,}")
        table.add_row("Text Length", f"{analysis.text_length:,}")
        table.add_row("Uniform Arrays", "✓" if analysis.has_uniform_arrays else "-")
        table.add_row("Primitive Arrays", "✓" if analysis.has_primitive_arrays else "-")
        table.add_row("Nested Objects", "✓" if analysis.has_nested_objects else "-")

        self.console.print(table)

    def print_candidates(self, candidates: list["StrategyCandidate"], stderr: bool = False):
        """Print ranked strategy candidates; the first row is the winner"""
        table = Table(title="Strategy Candidates", show_header=True, border_style="cyan")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Strategy", style="strategy")
        table.add_column("Score", style="score", justify="right")
        table.add_column("Overrides", style="yellow")
        table.add_column("Reason", style="dim")

        for rank, candidate in enumerate(candidates, start=1):
            overrides = ", ".join(f"{k}={v}" for k, v in candidate.overrides().items())
            name = f"{candidate.name} (custom)" if candidate.is_custom else candidate.name
            table.add_row(str(rank), name, str(candidate.score), overrides, candidate.reason)

        if not candidates:
            table.add_row("-", "Flatten", "50", "json_mode=flatten", "Default flatten strategy")

        (self.err_console if stderr else self.console).print(table)

    def print_savings(self, original: str, optimized: str, stderr: bool = False):
        """Print character savings of an optimization"""
        saved = len(original) - len(optimized)
        pct = (saved / len(original) * 100) if original else 0
        (self.err_console if stderr else self.console).print(
            f"[metric]{len(original):,}[/metric] → [metric]{len(optimized):,}[/metric] chars "
            f"([savings]{pct:.1f}% saved[/savings])"
        )

    def print_success(self, message: str):
        """Print success message"""
        self.console.print(f"[success]✓[/success] {message}")

    def print_error(self, message: str):
        """Print error message to stderr"""
        self.err_console.print(f"[error]✗[/error] {message}")


# Global console instance
console = BrevitConsole()


def setup_rich_logging() -> None:
    """
    Setup Rich traceback formatting for better error messages.

    Note: structlog configuration is handled separately in utils/logging.py.
    This function only handles rich traceback installation, not log formatting.
    """
    install_rich_traceback(
        show_locals=True,
        width=120,
        extra_lines=3,
        theme="monokai",
        word_wrap=False,
        suppress=[structlog],
    )
