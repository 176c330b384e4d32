"""
Deployment request and outcome models for token deployments
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union


@dataclass
class TokenParameters:
    """Token parameters as supplied by a caller or extracted from text

    Empty strings and a zero supply mean "not supplied".
    """
    name: str = ""
    symbol: str = ""
    initial_supply: int = 0
    owner_address: str = ""

    def missing_fields(self) -> List[str]:
        """Names of the required fields that are not usable yet"""
        missing = []
        if not self.name:
            missing.append("name")
        if not self.symbol:
            missing.append("symbol")
        if self.initial_supply <= 0:
            missing.append("initial_supply")
        return missing

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def is_empty(self) -> bool:
        """True when no field at all was supplied"""
        return not (self.name or self.symbol or self.initial_supply > 0 or self.owner_address)


@dataclass
class DeploymentRequest:
    """Fully resolved parameters for one token deployment"""
    name: str
    symbol: str
    initial_supply: int
    owner_address: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("Token name must not be empty")
        if not self.symbol:
            raise ValueError("Token symbol must not be empty")
        if self.initial_supply < 1:
            raise ValueError(f"Initial supply must be positive, got {self.initial_supply}")


@dataclass
class SubprocessResult:
    """Captured result of one external command"""
    stdout: str
    stderr: str
    failed: bool
    returncode: Optional[int] = None

    @property
    def error_detail(self) -> str:
        """Text describing why the command failed"""
        if self.stderr.strip():
            return self.stderr.strip()
        if self.returncode is not None:
            return f"command exited with status {self.returncode}"
        return "command failed"


class FailureStage(Enum):
    CONFIG_MISSING = "config_missing"
    COMPILE = "compile"
    DEPLOY = "deploy"


@dataclass
class DeploymentSuccess:
    """Deploy step finished; address is None when the output did not contain it"""
    request: DeploymentRequest
    address: Optional[str]
    network: str
    explorer_url: Optional[str]

    def render(self) -> str:
        address = self.address or "Address not found in output"
        lines = [
            "Token deployment successful!",
            "",
            "Token Details:",
            f"- Name: {self.request.name}",
            f"- Symbol: {self.request.symbol}",
            f"- Initial Supply: {self.request.initial_supply}",
            f"- Owner: {self.request.owner_address}",
            f"- Contract Address: {address}",
            f"- Network: {self.network}",
        ]
        if self.explorer_url:
            lines += ["", "You can view your token on the explorer:", self.explorer_url]
        return "\n".join(lines)


@dataclass
class DeploymentFailure:
    """Pipeline stopped at the given stage"""
    stage: FailureStage
    detail: str

    def render(self) -> str:
        if self.stage is FailureStage.COMPILE:
            return f"Error compiling contracts: {self.detail}"
        if self.stage is FailureStage.DEPLOY:
            return f"Error deploying token: {self.detail}"
        return f"Error: {self.detail}"


DeploymentOutcome = Union[DeploymentSuccess, DeploymentFailure]
