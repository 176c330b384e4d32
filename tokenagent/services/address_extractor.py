"""
Recover the deployed contract address from deploy script output
"""

import re
from typing import Optional

DEPLOYED_ADDRESS_PATTERN = re.compile(r'Token deployed to:\s+(0x[a-fA-F0-9]{40})')


def extract_address(deploy_output: str) -> Optional[str]:
    """Return the first deployed address in the output, or None if there is none"""
    match = DEPLOYED_ADDRESS_PATTERN.search(deploy_output or '')
    return match.group(1) if match else None
