"""
Inbound task shapes accepted by the dispatcher
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .deployment import TokenParameters


@dataclass
class HumanTextBlock:
    """Free-text lines supplied by a person, scanned one line at a time"""
    lines: List[str]

    @classmethod
    def from_text(cls, text: str) -> "HumanTextBlock":
        return cls(lines=text.split("\n"))


@dataclass
class DirectArgs:
    """Structured arguments passed straight to createToken"""
    params: TokenParameters

    def to_parameters(self) -> TokenParameters:
        return self.params


@dataclass
class HumanResponse:
    """Task carrying an optional free-text human response"""
    description: str = ""
    text: Optional[str] = None
    details: Any = None

    def to_text_block(self) -> Optional[HumanTextBlock]:
        if not self.text:
            return None
        return HumanTextBlock.from_text(self.text)


@dataclass
class NestedRequests:
    """Task object with a list of human-assistance request/response pairs"""
    description: str = ""
    requests: List[Dict[str, Any]] = field(default_factory=list)

    def to_text_block(self) -> Optional[HumanTextBlock]:
        # Only the first pair is consulted
        if not self.requests:
            return None
        text = self.requests[0].get("humanResponse") or ""
        if not text:
            return None
        return HumanTextBlock.from_text(text)


Task = Union[DirectArgs, HumanResponse, NestedRequests]
