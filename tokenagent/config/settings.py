"""
Agent settings loaded from the environment and .env file
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from eth_account import Account

PRIVATE_KEY_PLACEHOLDER = 'your_wallet_private_key_here'

logger = logging.getLogger('token_agent')


@dataclass
class Settings:
    """Secrets, toolchain commands and network details for the agent"""
    private_key: Optional[str] = None
    rpc_url: Optional[str] = None
    config_file: str = '.env'
    compile_command: str = 'npx hardhat compile'
    deploy_script: str = 'scripts/deploy.js'
    network: str = 'polygonAmoy'
    network_name: str = 'Polygon Amoy Testnet'
    explorer_url: str = 'https://www.oklink.com/amoy/address/'
    stderr_policy: str = 'strict'
    command_timeout: Optional[float] = None
    workdir: Optional[str] = None
    host: str = '0.0.0.0'
    port: int = 7378
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables

        When ``environ`` is not given the process environment is used, after
        loading the .env file into it.
        """
        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = os.environ

        timeout = environ.get('COMMAND_TIMEOUT')

        return cls(
            private_key=environ.get('PRIVATE_KEY'),
            rpc_url=environ.get('POLYGON_AMOY_RPC_URL'),
            config_file=environ.get('CONFIG_FILE', '.env'),
            compile_command=environ.get('COMPILE_COMMAND', 'npx hardhat compile'),
            deploy_script=environ.get('DEPLOY_SCRIPT', 'scripts/deploy.js'),
            network=environ.get('NETWORK', 'polygonAmoy'),
            network_name=environ.get('NETWORK_NAME', 'Polygon Amoy Testnet'),
            explorer_url=environ.get('EXPLORER_URL', 'https://www.oklink.com/amoy/address/'),
            stderr_policy=environ.get('STDERR_POLICY', 'strict').lower(),
            command_timeout=float(timeout) if timeout else None,
            workdir=environ.get('WORKDIR') or None,
            host=environ.get('AGENT_HOST', '0.0.0.0'),
            port=int(environ.get('AGENT_PORT', '7378')),
            debug=environ.get('DEBUG', 'false').lower() == 'true',
        )

    @property
    def deploy_command(self) -> str:
        return f"npx hardhat run {self.deploy_script} --network {self.network}"

    def missing_secrets(self) -> List[str]:
        """Messages for each required secret that is absent or still a placeholder"""
        problems = []
        if not self.private_key or self.private_key == PRIVATE_KEY_PLACEHOLDER:
            problems.append('Please set your PRIVATE_KEY in the .env file before deploying a token.')
        if not self.rpc_url:
            problems.append('Please set your POLYGON_AMOY_RPC_URL in the .env file before deploying a token.')
        return problems

    def deployer_address(self) -> Optional[str]:
        """Address of the signing key, or None if the key is unusable"""
        if not self.private_key or self.private_key == PRIVATE_KEY_PLACEHOLDER:
            return None
        try:
            return Account.from_key(self.private_key).address
        except Exception as e:
            logger.warning(f"PRIVATE_KEY is not a usable signing key: {e}")
            return None

    def explorer_link(self, address: Optional[str]) -> Optional[str]:
        if not address:
            return None
        return f"{self.explorer_url}{address}"
