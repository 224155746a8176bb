"""
Example: Explain a supplement/drug interaction against the live API.

Usage: uv run python scripts/explain_pair.py ashwagandha sertraline
Requires VAULT_API_KEY in the environment or .env.
"""

import asyncio
import sys

from rich.console import Console

from supp_ix.client import VaultClient
from supp_ix.service import explain_interaction, get_evidence

console = Console()


async def main(supplement: str, drug: str) -> None:
    async with VaultClient() as client:
        explanation = await explain_interaction(client, supplement, drug)
        bundle = await get_evidence(client, supplement, drug)

    console.print(
        f"[bold]{supplement} + {drug}[/]: {explanation['severity']} "
        f"(confidence={explanation['confidence']})"
    )
    console.print(explanation["explanation"])
    console.print(f"\nEvidence types: {bundle.get('evidence_types', [])}")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        sys.exit("usage: explain_pair.py SUPPLEMENT DRUG")
    asyncio.run(main(sys.argv[1], sys.argv[2]))
