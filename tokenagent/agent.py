#!/usr/bin/env python3
"""
Token Agent - ERC20 deployer on Polygon Amoy
Accepts createToken / handleTask / processTask calls over HTTP and deploys
tokens through the Hardhat toolchain.

Usage:
- Set up your .env file with PRIVATE_KEY, POLYGON_AMOY_RPC_URL, etc.
- Run: token-agent  (or python -m tokenagent.agent)
"""

import asyncio
import logging
import os

from web3 import Web3

from .capabilities import build_agent
from .config import Settings
from .dispatcher import TaskDispatcher
from .orchestrator import DeploymentOrchestrator
from .server import serve


def setup_logging(debug: bool = False) -> logging.Logger:
    """Setup logging"""
    os.makedirs('logs', exist_ok=True)

    logger = logging.getLogger('token_agent')
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    file_handler = logging.FileHandler('logs/agent.log', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s'
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger


def print_banner(settings: Settings, logger: logging.Logger) -> None:
    """Print startup status, including chain details when the RPC is reachable"""
    print("🚀 TOKEN AGENT")
    print("=" * 50)
    print(f"🌐 Network: {settings.network_name} ({settings.network})")
    print(f"📄 Config file: {settings.config_file}")
    print(f"⚖️  Stderr policy: {settings.stderr_policy}")
    if settings.command_timeout:
        print(f"⏱️  Command timeout: {settings.command_timeout:g}s")

    problems = settings.missing_secrets()
    if problems:
        for problem in problems:
            print(f"⚠️  {problem}")
        print("=" * 50)
        return

    deployer = settings.deployer_address()
    if deployer:
        print(f"👛 Deployer: {deployer}")

    try:
        w3 = Web3(Web3.HTTPProvider(settings.rpc_url))
        if not w3.is_connected():
            print("⚠️  RPC endpoint is not reachable right now")
        else:
            print(f"✅ Connected (Chain ID: {w3.eth.chain_id})")
            if deployer:
                balance = w3.from_wei(w3.eth.get_balance(deployer), 'ether')
                print(f"💰 Balance: {float(balance):.4f}")
    except Exception as e:
        logger.warning(f"Could not query RPC endpoint: {e}")
    print("=" * 50)


def build_dispatcher(settings: Settings) -> TaskDispatcher:
    return TaskDispatcher(DeploymentOrchestrator(settings))


async def main():
    settings = Settings.from_env()
    logger = setup_logging(settings.debug)
    print_banner(settings, logger)

    agent = build_agent(build_dispatcher(settings))
    print("Agent started successfully. Use the createToken capability to deploy tokens.")
    await serve(agent, settings.host, settings.port)


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n👋 Agent stopped")


if __name__ == "__main__":
    run()
