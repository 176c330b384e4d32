"""
Heuristic extraction of token details from free-text human responses
"""

import logging
import re
from typing import Optional, Union

from ..models import HumanTextBlock, TokenParameters

logger = logging.getLogger('token_agent')

# Checked in order; the first label found on a line decides its field
FIELD_LABELS = (
    ('name', ('token name',)),
    ('symbol', ('token symbol',)),
    ('supply', ('total supply', 'initial supply')),
    ('owner', ('owner address',)),
)

# Widest decimal that fits an ERC20 uint256 supply
MAX_SUPPLY_DIGITS = 78

QUANTITY_WORDS = (
    ('billion', 1_000_000_000),
    ('million', 1_000_000),
)


def _label_field(line: str) -> Optional[str]:
    lowered = line.lower()
    for field, labels in FIELD_LABELS:
        if any(label in lowered for label in labels):
            return field
    return None


def _value_after_colon(line: str) -> str:
    _, colon, value = line.partition(':')
    return value.strip() if colon else ''


def parse_supply(text: str) -> Optional[int]:
    """Turn "1 billion", "2 million" or "1,000,000" into an integer

    A quantity word wins over any digits next to it. Returns None when
    nothing numeric is left.
    """
    lowered = text.lower()
    for word, amount in QUANTITY_WORDS:
        if word in lowered:
            return amount
    digits = re.sub(r'[^0-9]', '', text)
    if not digits or len(digits.lstrip('0')) > MAX_SUPPLY_DIGITS:
        return None
    try:
        return int(digits)
    except ValueError:
        return None


def extract_fields(block: Union[HumanTextBlock, str]) -> TokenParameters:
    """Scan each line for a known label and take the text after the colon

    The first line matching a field's label claims that field; later lines
    with the same label are ignored even if the first value was empty.
    """
    if isinstance(block, str):
        block = HumanTextBlock.from_text(block)

    params = TokenParameters()
    claimed = set()

    for line in block.lines:
        field = _label_field(line)
        if field is None or field in claimed:
            continue
        claimed.add(field)

        value = _value_after_colon(line)
        if field == 'name':
            params.name = value
        elif field == 'symbol':
            params.symbol = value
        elif field == 'supply':
            supply = parse_supply(value)
            if supply is not None:
                params.initial_supply = supply
        elif field == 'owner':
            params.owner_address = value

    logger.debug(f"Extracted token fields: {params}")
    return params
