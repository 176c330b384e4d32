"""
Tests for the compile-then-deploy pipeline, using a fake command runner
"""
import asyncio

from conftest import TEST_DEPLOYER, FakeRunner, deploy_output
from tokenagent.models import (
    DeploymentFailure,
    DeploymentSuccess,
    FailureStage,
    SubprocessResult,
    TokenParameters,
)
from tokenagent.orchestrator import DeploymentOrchestrator

FIRST = '0x1111111111111111111111111111111111111111'
SECOND = '0x2222222222222222222222222222222222222222'
PARAMS = TokenParameters(name='Acme', symbol='ACM', initial_supply=1000)


def deploy(orchestrator, params=PARAMS):
    return asyncio.run(orchestrator.deploy(params))


def test_successful_deployment(settings, config_path):
    runner = FakeRunner(deploy_results=[deploy_output(FIRST)])
    orchestrator = DeploymentOrchestrator(settings, runner=runner, environ={})

    outcome = deploy(orchestrator)

    assert isinstance(outcome, DeploymentSuccess)
    assert outcome.address == FIRST
    assert outcome.network == 'Polygon Amoy Testnet'
    assert outcome.explorer_url == f'https://www.oklink.com/amoy/address/{FIRST}'
    assert outcome.request.owner_address == TEST_DEPLOYER
    assert runner.commands == [
        'npx hardhat compile',
        'npx hardhat run scripts/deploy.js --network polygonAmoy',
    ]
    assert 'TOKEN_NAME=Acme' in config_path.read_text(encoding='utf-8')

    report = outcome.render()
    assert 'Token deployment successful!' in report
    assert f'- Contract Address: {FIRST}' in report


def test_deploy_step_receives_resolved_parameters(settings):
    runner = FakeRunner(deploy_results=[deploy_output(FIRST)])
    deploy(DeploymentOrchestrator(settings, runner=runner, environ={}))

    _, env = runner.calls[1]
    assert env == {
        'TOKEN_NAME': 'Acme',
        'TOKEN_SYMBOL': 'ACM',
        'INITIAL_SUPPLY': '1000',
        'OWNER_ADDRESS': TEST_DEPLOYER,
    }


def test_compile_failure_never_runs_deploy(settings):
    runner = FakeRunner(compile_result=SubprocessResult('', 'Error HH600: Compilation failed', True, 1))
    outcome = deploy(DeploymentOrchestrator(settings, runner=runner, environ={}))

    assert isinstance(outcome, DeploymentFailure)
    assert outcome.stage is FailureStage.COMPILE
    assert outcome.detail == 'Error HH600: Compilation failed'
    assert runner.commands == ['npx hardhat compile']
    assert outcome.render() == 'Error compiling contracts: Error HH600: Compilation failed'


def test_deploy_failure(settings):
    runner = FakeRunner(deploy_results=[SubprocessResult('', 'insufficient funds for gas', True, 1)])
    outcome = deploy(DeploymentOrchestrator(settings, runner=runner, environ={}))

    assert isinstance(outcome, DeploymentFailure)
    assert outcome.stage is FailureStage.DEPLOY
    assert outcome.render() == 'Error deploying token: insufficient funds for gas'


def test_missing_secrets_short_circuit(settings, config_path):
    settings.private_key = 'your_wallet_private_key_here'
    runner = FakeRunner()
    outcome = deploy(DeploymentOrchestrator(settings, runner=runner, environ={}))

    assert isinstance(outcome, DeploymentFailure)
    assert outcome.stage is FailureStage.CONFIG_MISSING
    assert 'PRIVATE_KEY' in outcome.detail
    assert runner.calls == []
    assert not config_path.exists()


def test_invalid_owner_is_config_missing(settings):
    runner = FakeRunner()
    params = TokenParameters(name='Acme', symbol='ACM', initial_supply=1, owner_address='0xabc')
    outcome = deploy(DeploymentOrchestrator(settings, runner=runner, environ={}), params)

    assert outcome.stage is FailureStage.CONFIG_MISSING
    assert runner.calls == []


def test_missing_address_is_degraded_success(settings):
    runner = FakeRunner(deploy_results=[SubprocessResult('Deployment finished', '', False, 0)])
    outcome = deploy(DeploymentOrchestrator(settings, runner=runner, environ={}))

    assert isinstance(outcome, DeploymentSuccess)
    assert outcome.address is None
    assert outcome.explorer_url is None
    assert 'Address not found in output' in outcome.render()


def test_repeated_deploys_are_independent(settings):
    runner = FakeRunner(deploy_results=[deploy_output(FIRST), deploy_output(SECOND)])
    orchestrator = DeploymentOrchestrator(settings, runner=runner, environ={})

    first = deploy(orchestrator)
    second = deploy(orchestrator)

    assert isinstance(first, DeploymentSuccess) and isinstance(second, DeploymentSuccess)
    assert (first.address, second.address) == (FIRST, SECOND)
    assert len(runner.commands) == 4


def test_environment_tier_is_used(settings):
    runner = FakeRunner(deploy_results=[deploy_output(FIRST)])
    orchestrator = DeploymentOrchestrator(settings, runner=runner, environ={'TOKEN_NAME': 'EnvToken'})

    outcome = deploy(orchestrator, TokenParameters(symbol='ENV'))

    assert outcome.request.name == 'EnvToken'
    assert outcome.request.initial_supply == 1_000_000
