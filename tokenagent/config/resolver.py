"""
Resolve deployment parameters from arguments, the config file and the environment
"""

import logging
import re
from typing import Mapping, Optional

from web3 import Web3

from ..errors import ConfigMissingError
from ..models import DeploymentRequest, TokenParameters
from ..services.field_extractor import MAX_SUPPLY_DIGITS
from .store import EnvFileStore

logger = logging.getLogger('token_agent')

DEFAULT_TOKEN_NAME = 'MyToken'
DEFAULT_TOKEN_SYMBOL = 'MTK'
DEFAULT_INITIAL_SUPPLY = 1_000_000

# Keys written back after every resolution; the owner is never persisted
PERSISTED_KEYS = ('TOKEN_NAME', 'TOKEN_SYMBOL', 'INITIAL_SUPPLY')


def _text(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _supply(value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    digits = str(value).strip().replace('_', '').replace(',', '')
    if not re.fullmatch(r'\d+', digits) or len(digits.lstrip('0')) > MAX_SUPPLY_DIGITS:
        return None
    try:
        supply = int(digits)
    except ValueError:
        return None
    return supply if supply > 0 else None


def _first(*candidates):
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


class ConfigResolver:
    """Merges the four resolution tiers into one deployment request

    Precedence, highest first: call arguments, persisted file, environment,
    built-in defaults. Each field is resolved on its own.
    """

    def __init__(self, store: EnvFileStore, deployer_address: Optional[str] = None):
        self.store = store
        self.deployer_address = deployer_address

    def resolve(self, file_config: Mapping, env_config: Mapping, arg_config: TokenParameters) -> DeploymentRequest:
        name = _first(
            _text(arg_config.name),
            _text(file_config.get('TOKEN_NAME')),
            _text(env_config.get('TOKEN_NAME')),
            DEFAULT_TOKEN_NAME,
        )
        symbol = _first(
            _text(arg_config.symbol),
            _text(file_config.get('TOKEN_SYMBOL')),
            _text(env_config.get('TOKEN_SYMBOL')),
            DEFAULT_TOKEN_SYMBOL,
        )
        supply = _first(
            _supply(arg_config.initial_supply),
            _supply(file_config.get('INITIAL_SUPPLY')),
            _supply(env_config.get('INITIAL_SUPPLY')),
            DEFAULT_INITIAL_SUPPLY,
        )
        owner = _first(
            _text(arg_config.owner_address),
            _text(file_config.get('OWNER_ADDRESS')),
            _text(env_config.get('OWNER_ADDRESS')),
            _text(self.deployer_address),
        )

        if owner is None:
            raise ConfigMissingError(
                'No owner address given and no deployer account is available. '
                'Provide an owner address or set PRIVATE_KEY.'
            )
        if not Web3.is_address(owner):
            raise ConfigMissingError(f"Owner address {owner} is not a valid address.")

        return DeploymentRequest(
            name=name,
            symbol=symbol,
            initial_supply=supply,
            owner_address=Web3.to_checksum_address(owner),
        )

    def resolve_and_persist(self, arg_config: TokenParameters, env_config: Mapping) -> DeploymentRequest:
        """Resolve against the current file and write the result back as new defaults"""
        with self.store.transaction() as document:
            request = self.resolve(document.values, env_config, arg_config)
            values = (request.name, request.symbol, request.initial_supply)
            for key, value in zip(PERSISTED_KEYS, values):
                document.set(key, value)

        logger.info(
            f"Resolved token {request.name} ({request.symbol}), supply {request.initial_supply}, "
            f"owner {request.owner_address}"
        )
        return request
