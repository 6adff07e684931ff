"""
Wallet API routes for the Zcash RPC backend.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from ..common import envelope, query_int, require
from ..schemas import AddressData, BalanceData, NewAddressRequest, SuccessResponse
from ..zcash import ZcashClient, get_client

router = APIRouter(tags=["wallet"])


@router.get("/wallet/info", response_model=SuccessResponse)
def get_wallet_info(client: ZcashClient = Depends(get_client)):
    """Get node wallet state."""
    return envelope(client.get_wallet_info())


@router.get("/wallet/balance", response_model=SuccessResponse)
def get_balance(
    min_confirmations: Optional[str] = Query(None, alias="minConfirmations"),
    client: ZcashClient = Depends(get_client),
):
    """
    Get wallet balance.

    - **minConfirmations**: only count outputs with at least this many
      confirmations (default 1)
    """
    minconf = query_int("minConfirmations", min_confirmations)
    balance = client.get_balance(minconf)
    return envelope(BalanceData(balance=balance, minConfirmations=minconf))


@router.post("/wallet/newaddress", response_model=SuccessResponse)
def get_new_address(
    payload: Optional[NewAddressRequest] = Body(None),
    client: ZcashClient = Depends(get_client),
):
    """Generate a new transparent address in the node wallet."""
    account = payload.account if payload and payload.account else ""
    return envelope(AddressData(address=client.get_new_address(account)))


@router.get("/wallet/unspent", response_model=SuccessResponse)
def list_unspent(
    min_confirmations: Optional[str] = Query(None, alias="minConfirmations"),
    max_confirmations: Optional[str] = Query(None, alias="maxConfirmations"),
    client: ZcashClient = Depends(get_client),
):
    """
    List unspent transparent outputs.

    - **minConfirmations**: default 1
    - **maxConfirmations**: default 9999999
    """
    return envelope(client.list_unspent(
        query_int("minConfirmations", min_confirmations),
        query_int("maxConfirmations", max_confirmations),
    ))


@router.get("/address/validate/{address}", response_model=SuccessResponse)
def validate_address(address: str, client: ZcashClient = Depends(get_client)):
    """Ask the node whether an address is valid."""
    require("Address is required", address)
    return envelope(client.validate_address(address))
