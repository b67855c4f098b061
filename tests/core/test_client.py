"""
Unit tests for BrevitClient.

Tests cover:
- Explicit entry point routing on input shape
- Automatic entry point with strategy selection and config merge
- Custom strategies
- Collaborator injection
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from brevit.core.client import BrevitClient
from brevit.core.config import BrevitConfig
from brevit.models.enums import (
    ImageOptimizationMode,
    InferredType,
    JsonOptimizationMode,
    TextOptimizationMode,
)


class UpperStrategy:
    """Custom strategy that upper-cases text input."""

    def __init__(self, score):
        self.score = score
        self.configs = []

    def analyze(self, data, analysis):
        return self.score if isinstance(data, str) else 0

    async def optimize(self, data, config):
        self.configs.append(config)
        return data.upper()


class FailingStrategy:
    """Custom strategy that wins selection and then fails."""

    def analyze(self, data, analysis):
        return 99

    async def optimize(self, data, config):
        raise RuntimeError("backend down")


class TestOptimize:
    """Tests for the explicit entry point."""

    @pytest.mark.asyncio
    async def test_structured_record(self, client):
        data = {"user": {"name": "Javian", "email": "x@y.com"}}
        assert await client.optimize(data) == "user.name:Javian\nuser.email:x@y.com"

    @pytest.mark.asyncio
    async def test_json_text(self, client):
        text = await client.optimize('{"order":{"orderId":"o-456","status":"SHIPPED"}}')
        assert text == "order.orderId:o-456\norder.status:SHIPPED"

    @pytest.mark.asyncio
    async def test_short_text_unchanged(self, client):
        assert await client.optimize("Hello   World") == "Hello   World"

    @pytest.mark.asyncio
    async def test_none_is_empty(self, client):
        assert await client.optimize(None) == ""

    @pytest.mark.asyncio
    async def test_long_text_goes_to_text_optimizer(self):
        client = BrevitClient(BrevitConfig(long_text_threshold=10))
        assert await client.optimize("lots    of   spaces here") == "lots of spaces here"

    @pytest.mark.asyncio
    async def test_binary_goes_to_image_optimizer(self, client, png_bytes):
        text = await client.optimize(png_bytes)
        assert text.startswith("[OCR Stub: Extracted text from image (32 bytes)]")

    @pytest.mark.asyncio
    async def test_malformed_json(self, client):
        text = await client.optimize('{"a": [1, }')
        assert text.startswith("[Error: Invalid JSON - ")

    @pytest.mark.asyncio
    async def test_malformed_json_follows_json_mode(self):
        none_client = BrevitClient(BrevitConfig(json_mode=JsonOptimizationMode.NONE))
        yaml_client = BrevitClient(BrevitConfig(json_mode=JsonOptimizationMode.TO_YAML))

        assert await none_client.optimize("{not json}") == "{not json}"
        assert await yaml_client.optimize("{not json}") == (
            "--- # YAML Conversion Stub\n# (not implemented)\n{not json}\n"
        )

    @pytest.mark.asyncio
    async def test_deeply_nested_json_degrades(self, client):
        text = "[" * 5000 + "]" * 5000

        assert (await client.optimize(text)).startswith("[Error: Invalid JSON - ")
        assert (await client.brevity(text)).startswith("[Error: Invalid JSON - ")

    @pytest.mark.asyncio
    async def test_deeply_nested_record_degrades(self, client):
        data = {}
        for _ in range(5000):
            data = {"a": data}

        assert await client.optimize(data) == "[Error: Could not process object dict]"

    @pytest.mark.asyncio
    async def test_unserializable(self, client):
        class Widget:
            pass

        assert await client.optimize(Widget()) == "[Error: Could not process object Widget]"

    @pytest.mark.asyncio
    async def test_uses_config_verbatim(self):
        client = BrevitClient(BrevitConfig(json_mode=JsonOptimizationMode.NONE))

        assert await client.optimize('{"a": 1}') == '{"a": 1}'
        assert await client.optimize({"a": 1}) == '{"a":1}'

    @pytest.mark.asyncio
    async def test_abbreviations(self, order_data):
        client = BrevitClient(BrevitConfig(enable_abbreviations=True))
        text = await client.optimize(order_data)

        assert text.startswith("@o=order\n@o.id:o-456\n")


class TestBrevity:
    """Tests for the automatic entry point."""

    @pytest.mark.asyncio
    async def test_flatten_overrides_json_mode(self):
        client = BrevitClient(BrevitConfig(json_mode=JsonOptimizationMode.NONE))
        assert await client.brevity('{"a": {"b": 1}}') == "a.b:1"

    @pytest.mark.asyncio
    async def test_tabular(self, client):
        data = {"items": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]}
        assert await client.brevity(data) == "items[2]{id,name}:\n1,A\n2,B"

    @pytest.mark.asyncio
    async def test_short_text_unchanged(self, client):
        assert await client.brevity("Hello World") == "Hello World"

    @pytest.mark.asyncio
    async def test_long_text_uses_configured_text_mode(self):
        config = BrevitConfig(
            long_text_threshold=10,
            text_mode=TextOptimizationMode.SUMMARIZE_FAST,
            summary_stub_length=3,
        )
        text = await BrevitClient(config).brevity("abcdefghijklmnop")

        assert text == "[SummarizeFast Stub: Summary of text follows...]\nabc...\n[End of summary]"

    @pytest.mark.asyncio
    async def test_image_uses_configured_image_mode(self, png_bytes):
        config = BrevitConfig(image_mode=ImageOptimizationMode.METADATA)
        assert await BrevitClient(config).brevity(png_bytes) == "[Image: PNG, 32 bytes]"

    @pytest.mark.asyncio
    async def test_failures_degrade_to_text(self, client):
        assert (await client.brevity("[1, 2,]")).startswith("[Error: Invalid JSON - ")
        assert await client.brevity(object()) == "[Error: Could not process object object]"

    @pytest.mark.asyncio
    async def test_base_config_not_mutated(self):
        config = BrevitConfig(json_mode=JsonOptimizationMode.NONE)
        client = BrevitClient(config)

        await client.brevity({"a": [1, 2]})

        assert client.config is config
        assert config.json_mode == JsonOptimizationMode.NONE

    @pytest.mark.asyncio
    async def test_merged_config_reaches_collaborator(self):
        text_optimizer = AsyncMock()
        text_optimizer.optimize_text.return_value = "summary"
        config = BrevitConfig(
            long_text_threshold=5, text_mode=TextOptimizationMode.SUMMARIZE_HIGH_QUALITY
        )
        client = BrevitClient(config, text_optimizer=text_optimizer)

        assert await client.brevity("long enough text") == "summary"

        text, passed_config = text_optimizer.optimize_text.await_args.args
        assert text == "long enough text"
        assert passed_config.text_mode == TextOptimizationMode.SUMMARIZE_HIGH_QUALITY

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self, client):
        results = await asyncio.gather(
            client.brevity({"a": 1}),
            client.brevity({"b": [1, 2]}),
            client.brevity("plain"),
        )

        assert results == ["a:1", "b[2]:1,2", "plain"]


class TestCustomStrategies:
    """Tests for custom strategies in the automatic entry point."""

    @pytest.mark.asyncio
    async def test_custom_strategy_wins(self, client):
        strategy = UpperStrategy(95)
        client.register_strategy("upper", strategy)

        assert await client.brevity("hello") == "HELLO"
        assert strategy.configs == [client.config]

    @pytest.mark.asyncio
    async def test_explicit_path_ignores_custom_strategies(self, client):
        client.register_strategy("upper", UpperStrategy(95))
        assert await client.optimize("hello") == "hello"

    @pytest.mark.asyncio
    async def test_builtin_wins_tie(self):
        client = BrevitClient(BrevitConfig(long_text_threshold=3))
        client.register_strategy("upper", UpperStrategy(90))

        # Long text scores 90 built-in; the custom strategy ties and loses
        assert await client.brevity("a   b") == "a b"

    @pytest.mark.asyncio
    async def test_failing_custom_strategy_falls_back_to_builtin(self, client):
        client.register_strategy("broken", FailingStrategy())

        assert await client.brevity({"a": [1, 2]}) == "a[2]:1,2"
        assert await client.brevity("hello") == "hello"

    def test_register_rejects_non_strategy(self, client):
        with pytest.raises(TypeError):
            client.register_strategy("bad", object())


class TestInspection:
    """Tests for analyze() and rank_strategies()."""

    def test_analyze(self, client, order_data):
        analysis = client.analyze(order_data)

        assert analysis.has_uniform_arrays is True
        assert analysis.has_primitive_arrays is True
        assert analysis.inferred_type == InferredType.OBJECT

    def test_rank_strategies(self, client, order_data):
        ranked = client.rank_strategies(order_data)
        assert [c.score for c in ranked] == [100, 70]

    def test_rank_includes_custom(self, client):
        client.register_strategy("upper", UpperStrategy(40))
        ranked = client.rank_strategies("hello")

        assert [(c.name, c.is_custom) for c in ranked] == [("upper", True)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
