"""
API routes for the Zcash RPC backend.
"""

from . import blockchain
from . import wallet
from . import transactions
from . import network

__all__ = ["blockchain", "wallet", "transactions", "network"]
