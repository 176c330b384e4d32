"""
Token Agent - deploys ERC20 tokens from structured or free-text requests
"""

__version__ = '0.1.0'
