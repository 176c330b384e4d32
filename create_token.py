#!/usr/bin/env python3
"""
Create and deploy a token directly from the command line

Usage: python create_token.py <tokenName> <tokenSymbol> <initialSupply> [ownerAddress]
Example: python create_token.py "My Token" MTK 1000000
"""

import asyncio
import sys

from tokenagent.agent import build_dispatcher, setup_logging
from tokenagent.config import Settings
from tokenagent.models import DirectArgs, TokenParameters
from tokenagent.services import parse_supply


async def main(argv) -> int:
    if len(argv) < 3:
        print("Usage: python create_token.py <tokenName> <tokenSymbol> <initialSupply> [ownerAddress]")
        print("Example: python create_token.py \"My Token\" MTK 1000000")
        return 1

    supply = parse_supply(argv[2])
    if not supply:
        print(f"❌ Initial supply must be a positive number, got {argv[2]!r}")
        return 1

    params = TokenParameters(
        name=argv[0],
        symbol=argv[1],
        initial_supply=supply,
        owner_address=argv[3] if len(argv) > 3 else '',
    )

    settings = Settings.from_env()
    setup_logging(settings.debug)

    print("Creating token with the following parameters:")
    print(f"- Name: {params.name}")
    print(f"- Symbol: {params.symbol}")
    print(f"- Initial Supply: {params.initial_supply}")

    report = await build_dispatcher(settings).dispatch(DirectArgs(params))
    print(report)
    return 0 if report.startswith("Token deployment successful") else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
