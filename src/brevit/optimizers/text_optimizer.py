"""
Default text optimizer.

Clean mode tidies whitespace and drops trailing signatures locally. The
summarize modes are stubs; plug in LiteLLMTextOptimizer (or any
TextOptimizer) for real summaries.
"""

import re

from ..core.config import BrevitConfig
from ..models.enums import TextOptimizationMode

# "-- " on its own line starts a conventional e-mail signature
_SIGNATURE = re.compile(r"\n-- ?\n.*\Z", re.DOTALL)
_INLINE_SPACE = re.compile(r"[ \t\f\v]+")
_BLANK_LINES = re.compile(r"\n{3,}")


def clean_text(text: str) -> str:
    """
    Remove excessive whitespace and a trailing signature block.

    Runs of spaces/tabs collapse to one space, lines are stripped, and more
    than one consecutive blank line collapses to a single blank line.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _SIGNATURE.sub("", text)
    lines = [_INLINE_SPACE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip()


def stub_summary(text: str, mode: TextOptimizationMode, length: int) -> str:
    """Truncate and annotate text in place of a real summary."""
    head = text[:length]
    label = "".join(part.capitalize() for part in mode.value.split("_"))
    return f"[{label} Stub: Summary of text follows...]\n{head}...\n[End of summary]"


class DefaultTextOptimizer:
    """Local, model-free text optimizer."""

    async def optimize_text(self, text: str, config: BrevitConfig) -> str:
        """
        Optimize long text according to config.text_mode.

        Args:
            text: Long text
            config: Configuration for this call

        Returns:
            Cleaned text, a stub summary, or the text unchanged
        """
        match config.text_mode:
            case TextOptimizationMode.NONE:
                return text
            case TextOptimizationMode.CLEAN:
                return clean_text(text)
            case _:
                return stub_summary(text, config.text_mode, config.summary_stub_length)
