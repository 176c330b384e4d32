from .address_extractor import extract_address
from .field_extractor import extract_fields, parse_supply
from .process_runner import CommandRunner, StderrPolicy, SubprocessRunner

__all__ = [
    'extract_address',
    'extract_fields',
    'parse_supply',
    'CommandRunner',
    'StderrPolicy',
    'SubprocessRunner',
]
