"""
Pydantic schemas for request/response validation.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# JSON-RPC Schemas
# =============================================================================

class RPCRequest(BaseModel):
    """JSON-RPC 2.0 request envelope."""
    jsonrpc: str = "2.0"
    id: int
    method: str = Field(..., min_length=1)
    params: List[Any] = []


class RPCErrorDetail(BaseModel):
    """
    Error object of a JSON-RPC response.

    Gateways do not always follow the JSON-RPC shape (null codes, bare
    string errors), so anything non-null is kept as a message.
    """
    code: Any = None
    message: str = ""

    @model_validator(mode="before")
    @classmethod
    def coerce_error(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {"message": str(value)}
        message = value.get("message")
        if message is None:
            message = "" if "code" in value else str(value)
        return {"code": value.get("code"), "message": str(message)}


class RPCResponse(BaseModel):
    """JSON-RPC response envelope."""
    result: Any = None
    error: Optional[RPCErrorDetail] = None
    id: Any = None


# =============================================================================
# Request Body Schemas
# =============================================================================

class NewAddressRequest(BaseModel):
    """Schema for new address request."""
    account: Optional[str] = Field(None, description="Legacy account label")


class SendRequest(BaseModel):
    """
    Schema for send request.

    Fields are optional here; the handler reports missing ones itself.
    """
    address: Optional[str] = Field(None, description="Destination address")
    amount: Any = Field(None, description="Amount in ZEC, forwarded to the node as sent")
    comment: Optional[str] = Field(None, description="Wallet-local comment")


# =============================================================================
# Envelope Schemas
# =============================================================================

class SuccessResponse(BaseModel):
    """Successful API response."""
    success: bool = True
    data: Any = None


class ErrorResponse(BaseModel):
    """Failed API response."""
    success: bool = False
    error: str


# =============================================================================
# Reshaped Payloads
# =============================================================================

class BalanceData(BaseModel):
    balance: Any
    minConfirmations: int


class AddressData(BaseModel):
    address: Any


class TxidData(BaseModel):
    txid: Any


class BlockCountData(BaseModel):
    blockCount: Any


class BlockHashData(BaseModel):
    height: int
    blockhash: Any


class FeeData(BaseModel):
    fee: Any
    nblocks: int


class ConnectionsData(BaseModel):
    connections: Any


class HealthData(BaseModel):
    """Health check payload."""
    status: str
    version: str
    environment: str
    timestamp: str
