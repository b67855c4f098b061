"""
JSON Optimizer - the default JSON collaborator.

Dispatches on the configured JSON mode. Flatten mode runs the flatten
encoder and, when enabled, the abbreviation post-pass. YAML conversion and
path filtering are clearly-marked pass-through stubs.
"""

from ..core.adapter import parse_json
from ..core.config import BrevitConfig
from ..exceptions import MalformedInputError
from ..models.enums import JsonOptimizationMode
from ..models.nodes import ValueNode
from ..serializers.abbreviations import AbbreviationEngine
from ..serializers.flatten import FlattenEncoder
from ..utils.logging import get_logger

logger = get_logger(__name__)


class JsonOptimizer:
    """
    Default JSON optimizer.

    Example:
        optimizer = JsonOptimizer()
        text = await optimizer.optimize_json('{"user": {"name": "J"}}', config)
        # "user.name:J"
    """

    def __init__(self, encoder: FlattenEncoder | None = None):
        self.encoder = encoder or FlattenEncoder()

    async def optimize_json(
        self, json_string: str, config: BrevitConfig, tree: ValueNode | None = None
    ) -> str:
        """
        Optimize JSON text according to config.json_mode.

        Args:
            json_string: JSON text
            config: Configuration for this call
            tree: Already parsed tree for json_string, if available

        Returns:
            Optimized text; never raises for malformed JSON
        """
        match config.json_mode:
            case JsonOptimizationMode.FLATTEN:
                return self.flatten_json(json_string, config, tree)
            case JsonOptimizationMode.TO_YAML:
                return self._convert_to_yaml(json_string)
            case JsonOptimizationMode.FILTER:
                return self._filter_json(json_string, config.json_paths_to_keep)
            case _:
                return json_string

    def flatten_json(
        self, json_string: str, config: BrevitConfig, tree: ValueNode | None = None
    ) -> str:
        """
        Flatten JSON text into path/value lines.

        Malformed JSON yields a single error line embedding the parser message.
        """
        if tree is None:
            try:
                tree = parse_json(json_string)
            except MalformedInputError as e:
                logger.warning("malformed_json", error=e.message)
                return e.user_message

        lines = self.encoder.flatten(tree)

        if config.enable_abbreviations:
            engine = AbbreviationEngine(threshold=config.abbreviation_threshold)
            return "\n".join(engine.apply(lines))

        return "\n".join(line.render() for line in lines)

    def _convert_to_yaml(self, json_string: str) -> str:
        """Stub for YAML conversion."""
        logger.warning("unsupported_mode", mode=str(JsonOptimizationMode.TO_YAML))
        return f"--- # YAML Conversion Stub\n# (not implemented)\n{json_string}\n"

    def _filter_json(self, json_string: str, paths_to_keep: list[str]) -> str:
        """Stub for JSON path filtering."""
        logger.warning("unsupported_mode", mode=str(JsonOptimizationMode.FILTER))
        if paths_to_keep:
            return f"[Filtered JSON, keeping: {', '.join(paths_to_keep)}]\n{json_string}"
        return json_string
