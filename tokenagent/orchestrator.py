"""
Compile-then-deploy pipeline for a single token
"""

import logging
import os
from typing import Mapping, Optional

from .config import ConfigResolver, EnvFileStore, Settings
from .errors import ConfigMissingError
from .models import (
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentSuccess,
    FailureStage,
    TokenParameters,
)
from .services import CommandRunner, StderrPolicy, SubprocessRunner, extract_address

logger = logging.getLogger('token_agent')


class DeploymentOrchestrator:
    """Deploys one token per call by driving the Hardhat toolchain

    Calls are not idempotent: every successful call deploys a new contract.
    """

    def __init__(
        self,
        settings: Settings,
        runner: Optional[CommandRunner] = None,
        resolver: Optional[ConfigResolver] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.settings = settings
        self.runner = runner or SubprocessRunner(
            policy=StderrPolicy.parse(settings.stderr_policy),
            timeout=settings.command_timeout,
            cwd=settings.workdir,
        )
        self.resolver = resolver or ConfigResolver(
            EnvFileStore(settings.config_file),
            deployer_address=settings.deployer_address(),
        )
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    async def deploy(self, params: TokenParameters) -> DeploymentOutcome:
        # Step 1: secrets must be in place before anything runs
        problems = self.settings.missing_secrets()
        if problems:
            logger.warning(f"Deployment blocked: {problems}")
            return DeploymentFailure(FailureStage.CONFIG_MISSING, ' '.join(problems))

        # Step 2: merge with persisted defaults and write them back
        try:
            request = self.resolver.resolve_and_persist(params, self.environ)
        except ConfigMissingError as e:
            logger.warning(f"Deployment blocked: {e}")
            return DeploymentFailure(FailureStage.CONFIG_MISSING, str(e))

        # Step 3: compile
        print("🔨 Compiling contracts...")
        compiled = await self.runner.run(self.settings.compile_command)
        if compiled.failed:
            logger.error(f"Compilation error: {compiled.error_detail}")
            return DeploymentFailure(FailureStage.COMPILE, compiled.error_detail)

        # Step 4: deploy with the resolved parameters in the child environment
        print(f"🚀 Deploying {request.name} ({request.symbol}) to {self.settings.network_name}...")
        deploy_env = {
            'TOKEN_NAME': request.name,
            'TOKEN_SYMBOL': request.symbol,
            'INITIAL_SUPPLY': str(request.initial_supply),
            'OWNER_ADDRESS': request.owner_address,
        }
        deployed = await self.runner.run(self.settings.deploy_command, env=deploy_env)
        if deployed.failed:
            logger.error(f"Deployment error: {deployed.error_detail}")
            return DeploymentFailure(FailureStage.DEPLOY, deployed.error_detail)

        # Step 5: recover the address; missing is a degraded success
        address = extract_address(deployed.stdout)
        if address:
            logger.info(f"Token {request.symbol} deployed to {address}")
        else:
            logger.warning("Deploy succeeded but no contract address was found in its output")

        return DeploymentSuccess(
            request=request,
            address=address,
            network=self.settings.network_name,
            explorer_url=self.settings.explorer_link(address),
        )
