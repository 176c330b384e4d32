from .resolver import ConfigResolver
from .settings import Settings
from .store import EnvFileStore

__all__ = ['ConfigResolver', 'Settings', 'EnvFileStore']
