"""
Zcash node integration for the RPC backend.
Wraps the JSON-RPC 2.0 interface exposed by the node gateway.
"""

import logging
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from .config import get_settings
from .schemas import RPCRequest, RPCResponse

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class ZcashError(Exception):
    """Base Zcash node error."""
    kind = "error"
    status_code = 500


class ZcashNetworkError(ZcashError):
    """The node could not be reached or its reply could not be read."""
    kind = "network"
    status_code = 503

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Network Error: {message}")


class ZcashRPCError(ZcashError):
    """The node answered with a JSON-RPC error."""
    kind = "rpc"
    status_code = 400

    def __init__(self, code: Any, message: str):
        self.code = code
        self.message = message
        if code is None:
            super().__init__(f"RPC Error: {message}")
        else:
            super().__init__(f"RPC Error: {message} (Code: {code})")


# =============================================================================
# Zcash Client
# =============================================================================

class ZcashClient:
    """
    Client for the Zcash node gateway.

    Every public method maps to exactly one node RPC method of the same
    name. Results are returned as the node sent them.
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize Zcash client.

        Args:
            rpc_url: Gateway endpoint URL
            api_key: Gateway credential, sent as the x-api-key header
            timeout: Seconds to wait for the gateway before failing
        """
        settings = get_settings()
        self.rpc_url = rpc_url or settings.rpc_url
        self.api_key = api_key if api_key is not None else settings.rpc_api_key
        self.timeout = timeout or settings.rpc_timeout
        self.headers = {
            "accept": "application/json",
            "content-type": "application/json",
            "x-api-key": self.api_key,
        }
        self._request_id = 0

    def _next_id(self) -> int:
        # Only used to correlate log lines, so no lock.
        self._request_id += 1
        return self._request_id

    def call(self, method: str, params: List = None) -> Any:
        """Make JSON-RPC call and return its result."""
        request = RPCRequest(id=self._next_id(), method=method, params=params or [])
        logger.debug(f"RPC call id={request.id} method={method} params={request.params}")

        try:
            response = requests.post(
                self.rpc_url,
                json=request.model_dump(),
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"RPC call id={request.id} method={method} failed: {e}")
            raise ZcashNetworkError(str(e)) from e

        reply = self._parse_reply(response)

        if reply is not None and reply.error is not None:
            logger.warning(
                f"RPC call id={request.id} method={method} returned error "
                f"{reply.error.code}: {reply.error.message}"
            )
            raise ZcashRPCError(reply.error.code, reply.error.message)

        if not response.ok:
            logger.warning(f"RPC call id={request.id} method={method} got HTTP {response.status_code}")
            raise ZcashNetworkError(f"gateway responded with HTTP {response.status_code}")

        if reply is None:
            raise ZcashNetworkError("gateway returned an unreadable response")

        return reply.result

    @staticmethod
    def _parse_reply(response: requests.Response) -> Optional[RPCResponse]:
        """Decode a JSON-RPC reply, or None if the body is not one."""
        try:
            return RPCResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            return None

    # =======================================================================
    # Blockchain
    # =======================================================================

    def get_blockchain_info(self) -> dict:
        return self.call("getblockchaininfo")

    def get_block_count(self) -> int:
        return self.call("getblockcount")

    def get_block_hash(self, height: int) -> str:
        return self.call("getblockhash", [height])

    def get_block(self, blockhash: str, verbosity: int = 1) -> Any:
        """Get block by hash. Verbosity 0 returns hex, 1 and 2 return objects."""
        return self.call("getblock", [blockhash, verbosity])

    # =======================================================================
    # Wallet
    # =======================================================================

    def get_wallet_info(self) -> dict:
        return self.call("getwalletinfo")

    def get_balance(self, min_confirmations: int = 1) -> float:
        """Get wallet balance across all accounts."""
        return self.call("getbalance", ["*", min_confirmations])

    def get_new_address(self, account: str = "") -> str:
        return self.call("getnewaddress", [account])

    def list_unspent(
        self,
        min_confirmations: int = 1,
        max_confirmations: int = 9999999,
    ) -> List[dict]:
        return self.call("listunspent", [min_confirmations, max_confirmations])

    def validate_address(self, address: str) -> dict:
        return self.call("validateaddress", [address])

    # =======================================================================
    # Transactions
    # =======================================================================

    def get_transaction(self, txid: str) -> dict:
        return self.call("gettransaction", [txid])

    def list_transactions(self, count: int = 10, skip: int = 0) -> List[dict]:
        return self.call("listtransactions", ["*", count, skip])

    def get_raw_transaction(self, txid: str, verbose: bool = False) -> Any:
        """Get raw transaction as hex, or decoded when verbose."""
        return self.call("getrawtransaction", [txid, 1 if verbose else 0])

    def send_to_address(self, address: str, amount: Any, comment: str = "") -> str:
        """
        Send funds from the node wallet.

        The amount is forwarded untouched; the node decides whether it is
        valid. Returns the txid of the broadcast transaction.
        """
        return self.call("sendtoaddress", [address, amount, comment])

    def estimate_fee(self, nblocks: int = 6) -> float:
        return self.call("estimatefee", [nblocks])

    # =======================================================================
    # Network & Mining
    # =======================================================================

    def get_network_info(self) -> dict:
        return self.call("getnetworkinfo")

    def get_connection_count(self) -> int:
        return self.call("getconnectioncount")

    def get_mining_info(self) -> dict:
        return self.call("getmininginfo")


# =============================================================================
# Module-level functions for convenience
# =============================================================================

# Global client instance
_client: Optional[ZcashClient] = None


def get_client() -> ZcashClient:
    """Get global Zcash client instance."""
    global _client
    if _client is None:
        _client = ZcashClient()
    return _client


def reset_client() -> None:
    """Drop the global client so the next lookup rebuilds it from settings."""
    global _client
    _client = None
