"""
Capability schemas and registry exposed by the agent
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import AliasChoices, BaseModel, Field, ValidationError

from .dispatcher import TaskDispatcher
from .errors import CapabilityValidationError, UnknownCapabilityError
from .models import DirectArgs, HumanResponse, NestedRequests, TokenParameters

logger = logging.getLogger('token_agent')

# No line breaks or other control characters
SINGLE_LINE = r'^[^\x00-\x1f\x7f]+$'


class CreateTokenArgs(BaseModel):
    name: str = Field(
        ..., min_length=1, pattern=SINGLE_LINE, description='The name of the token',
        validation_alias=AliasChoices('name', 'tokenName'),
    )
    symbol: str = Field(
        ..., min_length=1, pattern=SINGLE_LINE, description='The symbol of the token',
        validation_alias=AliasChoices('symbol', 'tokenSymbol'),
    )
    initialSupply: int = Field(
        ..., ge=1, description='The initial supply of the token (will be multiplied by 10^18)',
    )
    ownerAddress: Optional[str] = Field(
        default=None, description='The address that will own the token (defaults to deployer)',
    )


class HandleTaskArgs(BaseModel):
    description: str = Field(..., description='Task description')
    humanResponse: Optional[str] = Field(default=None, description='Human response to a question')
    taskDetails: Any = Field(default=None, description='Any additional task details')


class AssistanceRequest(BaseModel):
    question: Any = None
    humanResponse: Optional[str] = None


class TaskObject(BaseModel):
    description: Optional[str] = None
    humanAssistanceRequests: Optional[List[AssistanceRequest]] = None


class ProcessTaskArgs(BaseModel):
    task: Optional[TaskObject] = None


@dataclass
class Capability:
    name: str
    description: str
    schema: Type[BaseModel]
    run: Callable[[BaseModel], Awaitable[str]]


class Agent:
    """Registry of named capabilities with argument validation

    Capabilities run one at a time so deployments never overlap.
    """

    def __init__(self, system_prompt: str = ''):
        self.system_prompt = system_prompt
        self.capabilities: Dict[str, Capability] = {}
        self._run_lock = asyncio.Lock()

    def add_capability(self, name: str, description: str, schema: Type[BaseModel], run) -> None:
        self.capabilities[name] = Capability(name, description, schema, run)

    def describe(self) -> List[Dict[str, Any]]:
        return [
            {
                'name': c.name,
                'description': c.description,
                'schema': c.schema.model_json_schema(),
            }
            for c in self.capabilities.values()
        ]

    async def invoke(self, name: str, payload: Dict[str, Any]) -> str:
        capability = self.capabilities.get(name)
        if capability is None:
            raise UnknownCapabilityError(f"Unknown capability: {name}")

        try:
            args = capability.schema.model_validate(payload)
        except ValidationError as e:
            raise CapabilityValidationError(name, e.errors(include_url=False))

        async with self._run_lock:
            return await capability.run(args)


def build_agent(dispatcher: TaskDispatcher) -> Agent:
    """Agent wired with the token deployment capabilities"""
    agent = Agent(system_prompt='You are an agent that creates and deploys ERC20 tokens on Polygon Amoy testnet')

    async def create_token(args: CreateTokenArgs) -> str:
        params = TokenParameters(
            name=args.name,
            symbol=args.symbol,
            initial_supply=args.initialSupply,
            owner_address=args.ownerAddress or '',
        )
        return await dispatcher.dispatch(DirectArgs(params))

    async def handle_task(args: HandleTaskArgs) -> str:
        task = HumanResponse(description=args.description, text=args.humanResponse, details=args.taskDetails)
        return await dispatcher.dispatch(task)

    async def process_task(args: ProcessTaskArgs) -> str:
        task = NestedRequests(description='Token creation task')
        if args.task is not None:
            task.description = args.task.description or task.description
            task.requests = [r.model_dump() for r in args.task.humanAssistanceRequests or []]
        return await dispatcher.dispatch(task)

    agent.add_capability(
        'createToken',
        'Creates and deploys an ERC20 token on Polygon Amoy testnet',
        CreateTokenArgs,
        create_token,
    )
    agent.add_capability(
        'handleTask',
        'Handles tasks with human assistance requests',
        HandleTaskArgs,
        handle_task,
    )
    agent.add_capability(
        'processTask',
        'Process a task whose human assistance requests carry the token details',
        ProcessTaskArgs,
        process_task,
    )
    return agent
