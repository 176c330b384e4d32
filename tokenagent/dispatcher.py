"""
Route inbound tasks to the field extractor and the deployment pipeline
"""

import logging
from typing import Optional

from .models import DirectArgs, HumanResponse, HumanTextBlock, NestedRequests, Task, TokenParameters
from .orchestrator import DeploymentOrchestrator
from .services import extract_fields

logger = logging.getLogger('token_agent')

CLARIFICATION_PROMPT = (
    'Please provide the token details: Token Name, Token Symbol, '
    'Total Supply, and Owner Address (optional).'
)


class TaskDispatcher:
    """Turns any accepted task shape into a report string"""

    def __init__(self, orchestrator: DeploymentOrchestrator):
        self.orchestrator = orchestrator

    async def dispatch(self, task: Task) -> str:
        try:
            if isinstance(task, DirectArgs):
                params = task.to_parameters()
                if params.is_empty():
                    return CLARIFICATION_PROMPT
            else:
                params = self._extract(task)
                if params is None:
                    return CLARIFICATION_PROMPT
                if not params.is_complete():
                    logger.info(f"Asking for clarification, missing: {params.missing_fields()}")
                    return CLARIFICATION_PROMPT

            logger.info(f"Creating token with {params}")
            outcome = await self.orchestrator.deploy(params)
            return outcome.render()

        except Exception as e:
            logger.error(f"Error handling task: {e}", exc_info=True)
            return f"Error handling task: {e}"

    def _extract(self, task: Task) -> Optional[TokenParameters]:
        """Parse the human text carried by a task, None when there is none"""
        if not isinstance(task, (HumanResponse, NestedRequests)):
            raise TypeError(f"Unsupported task type: {type(task).__name__}")
        if task.description:
            logger.info(f"Handling task: {task.description}")
        block: Optional[HumanTextBlock] = task.to_text_block()
        if block is None:
            return None
        return extract_fields(block)
