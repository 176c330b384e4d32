"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path

import pytest

# Make the project root importable when running without an install
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tokenagent.config import Settings
from tokenagent.models import SubprocessResult
from tokenagent.services import CommandRunner

# Well-known Hardhat development account #0
TEST_PRIVATE_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'
TEST_DEPLOYER = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'


class FakeRunner(CommandRunner):
    """Records commands and answers compile/deploy with canned results"""

    def __init__(self, compile_result=None, deploy_results=None):
        self.compile_result = compile_result or SubprocessResult('Compiled 1 Solidity file', '', False, 0)
        self.deploy_results = list(deploy_results or [])
        self.calls = []

    @property
    def commands(self):
        return [command for command, _ in self.calls]

    async def run(self, command, env=None):
        self.calls.append((command, env))
        if 'compile' in command:
            return self.compile_result
        return self.deploy_results.pop(0)


def deploy_output(address):
    return SubprocessResult(
        stdout=(
            f"Deploying contracts with the account: {TEST_DEPLOYER}\n"
            f"Token deployed to: {address}\n"
            "Token Name: Acme\n"
        ),
        stderr='',
        failed=False,
        returncode=0,
    )


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / '.env'


@pytest.fixture
def settings(config_path):
    return Settings(
        private_key=TEST_PRIVATE_KEY,
        rpc_url='https://rpc-amoy.example.org',
        config_file=str(config_path),
    )
