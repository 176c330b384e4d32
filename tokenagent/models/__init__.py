from .deployment import (
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentRequest,
    DeploymentSuccess,
    FailureStage,
    SubprocessResult,
    TokenParameters,
)
from .task import DirectArgs, HumanResponse, HumanTextBlock, NestedRequests, Task

__all__ = [
    'DeploymentFailure',
    'DeploymentOutcome',
    'DeploymentRequest',
    'DeploymentSuccess',
    'FailureStage',
    'SubprocessResult',
    'TokenParameters',
    'DirectArgs',
    'HumanResponse',
    'HumanTextBlock',
    'NestedRequests',
    'Task',
]
