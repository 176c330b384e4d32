"""
Exceptions raised by the token agent
"""


class TokenAgentError(Exception):
    """Base class for token agent errors"""


class ConfigMissingError(TokenAgentError):
    """A required secret or deployment parameter could not be resolved"""


class CapabilityValidationError(TokenAgentError):
    """Capability arguments failed schema validation"""

    def __init__(self, capability: str, errors):
        self.capability = capability
        self.errors = errors
        super().__init__(f"Invalid arguments for {capability}: {errors}")


class UnknownCapabilityError(TokenAgentError):
    """No capability registered under the requested name"""
