"""
Basic usage example for brevit.

Demonstrates the explicit and automatic entry points, abbreviations and
custom strategies.
"""

import asyncio

from brevit import BrevitClient, BrevitConfig, JsonOptimizationMode
from brevit.serializers.abbreviations import AbbreviationEngine


ORDER = {
    "order": {
        "id": "o-456",
        "customer": {"name": "Javian", "email": "x@y.com"},
        "items": [
            {"sku": "A-1", "name": "Pen", "qty": 2},
            {"sku": "B-2", "name": "Ink, blue", "qty": 1},
        ],
        "tags": ["rush", "gift"],
    }
}


class ShoutStrategy:
    """Upper-cases short greetings."""

    def analyze(self, data, analysis):
        return 95 if isinstance(data, str) and data.lower().startswith("hello") else 0

    async def optimize(self, data, config):
        return data.upper()


async def main():
    print("🚀 brevit - Token-efficient LLM input encoder\n")

    # ========================================================================
    # Step 1: Explicit entry point
    # ========================================================================
    print("📋 Step 1: optimize() with the configured modes")
    print("-" * 50)

    client = BrevitClient(BrevitConfig())
    print(await client.optimize(ORDER))

    raw = BrevitClient(BrevitConfig(json_mode=JsonOptimizationMode.NONE))
    print(f"\nWith json_mode=none: {await raw.optimize(ORDER)}\n")

    # ========================================================================
    # Step 2: Automatic entry point
    # ========================================================================
    print("📊 Step 2: brevity() picks a strategy from the data's shape")
    print("-" * 50)

    analysis = client.analyze(ORDER)
    print(f"Depth: {analysis.depth}, complexity: {analysis.complexity.value}")
    for candidate in client.rank_strategies(ORDER):
        print(f"  {candidate.score:>3}  {candidate.name}  ({candidate.reason})")
    print()
    print(await client.brevity(ORDER))
    print()

    # ========================================================================
    # Step 3: Abbreviations
    # ========================================================================
    print("✂️  Step 3: Abbreviated output")
    print("-" * 50)

    short = BrevitClient(BrevitConfig(enable_abbreviations=True))
    abbreviated = await short.brevity(ORDER)
    print(abbreviated)
    print(f"\nExpands back to plain output: "
          f"{AbbreviationEngine.expand(abbreviated) == await client.brevity(ORDER)}\n")

    # ========================================================================
    # Step 4: Custom strategies
    # ========================================================================
    print("🧩 Step 4: Custom strategy")
    print("-" * 50)

    client.register_strategy("shout", ShoutStrategy())
    print(await client.brevity("hello there"))
    print(await client.brevity("Goodbye"))


if __name__ == "__main__":
    asyncio.run(main())
