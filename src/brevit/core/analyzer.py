"""
Structural Analyzer.

Walks a value tree once and aggregates the shape metrics the strategy
selector consumes.
"""

from ..models.enums import Complexity, InferredType
from ..models.nodes import (
    ArrayNode,
    NullNode,
    ObjectNode,
    ValueNode,
    is_primitive_array,
    uniform_keys,
)
from ..models.schemas import DataAnalysis
from .adapter import (
    AdaptedInput,
    BinaryBlob,
    JsonDocument,
    MalformedJson,
    PlainText,
    StructuredRecord,
    Unserializable,
)


class StructuralAnalyzer:
    """
    Computes a DataAnalysis for one input.

    Example:
        analysis = StructuralAnalyzer().analyze(parse_json('{"a": [1, 2]}'))
        analysis.has_primitive_arrays  # True
        analysis.complexity            # Complexity.MODERATE
    """

    def analyze(self, node: ValueNode, inferred_type: InferredType | None = None) -> DataAnalysis:
        """
        Analyze a value tree.

        Args:
            node: Root of the tree
            inferred_type: Input kind known from the caller; derived from the
                root node when omitted

        Returns:
            Fresh DataAnalysis for this tree
        """
        metrics = {
            "depth": 0,
            "object_count": 0,
            "array_count": 0,
            "text_length": 0,
            "has_uniform_arrays": False,
            "has_primitive_arrays": False,
            "has_nested_objects": False,
        }
        self._visit(node, 0, metrics)

        return DataAnalysis(
            **metrics,
            complexity=self.classify_complexity(
                metrics["depth"], metrics["array_count"], metrics["object_count"]
            ),
            inferred_type=inferred_type or self._infer_from_root(node),
        )

    def analyze_input(self, adapted: AdaptedInput) -> DataAnalysis:
        """
        Analyze an adapted input of any kind.

        Inputs without a tree (text, binary, failures) get zero metrics and
        only carry their inferred type.
        """
        match adapted:
            case JsonDocument(node=node) | StructuredRecord(node=node):
                return self.analyze(node)
            case PlainText(is_long=is_long, text=text) | MalformedJson(is_long=is_long, text=text):
                return DataAnalysis(
                    text_length=len(text),
                    inferred_type=InferredType.LONG_TEXT if is_long else InferredType.TEXT,
                )
            case BinaryBlob():
                return DataAnalysis(inferred_type=InferredType.IMAGE)
            case Unserializable():
                return DataAnalysis()
        raise TypeError(f"Unsupported input variant: {type(adapted).__name__}")

    @staticmethod
    def classify_complexity(depth: int, array_count: int, object_count: int) -> Complexity:
        """Derive the complexity class from depth, array and object counts."""
        if depth > 3 or array_count > 5 or object_count > 10:
            return Complexity.COMPLEX
        if depth > 1 or array_count > 0 or object_count > 3:
            return Complexity.MODERATE
        return Complexity.SIMPLE

    def _visit(self, node: ValueNode, depth: int, metrics: dict) -> None:
        """Depth-first visit; null scalars are not counted."""
        if isinstance(node, NullNode):
            return

        metrics["depth"] = max(metrics["depth"], depth)

        match node:
            case ObjectNode(fields=fields):
                metrics["object_count"] += 1
                if depth > 0:
                    metrics["has_nested_objects"] = True
                for child in fields.values():
                    self._visit(child, depth + 1, metrics)
            case ArrayNode(items=items):
                metrics["array_count"] += 1
                if uniform_keys(node) is not None:
                    metrics["has_uniform_arrays"] = True
                elif is_primitive_array(node):
                    metrics["has_primitive_arrays"] = True
                for child in items:
                    self._visit(child, depth + 1, metrics)
            case _:
                metrics["text_length"] += len(node.render())

    @staticmethod
    def _infer_from_root(node: ValueNode) -> InferredType:
        if isinstance(node, ArrayNode):
            return InferredType.ARRAY
        return InferredType.OBJECT
