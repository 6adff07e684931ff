"""
Transaction API routes for the Zcash RPC backend.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from ..common import envelope, query_bool, query_int, require
from ..schemas import FeeData, SendRequest, SuccessResponse, TxidData
from ..zcash import ZcashClient, get_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transactions"])


@router.get("/transaction/{txid}", response_model=SuccessResponse)
def get_transaction(txid: str, client: ZcashClient = Depends(get_client)):
    """Get a wallet transaction by id."""
    require("Transaction ID is required", txid)
    return envelope(client.get_transaction(txid))


@router.get("/transactions", response_model=SuccessResponse)
def list_transactions(
    count: Optional[str] = Query(None),
    skip: Optional[str] = Query(None),
    client: ZcashClient = Depends(get_client),
):
    """
    List recent wallet transactions.

    - **count**: number of transactions to return (default 10)
    - **skip**: number of transactions to skip (default 0)
    """
    return envelope(client.list_transactions(
        query_int("count", count),
        query_int("skip", skip),
    ))


@router.get("/transaction/{txid}/raw", response_model=SuccessResponse)
def get_raw_transaction(
    txid: str,
    verbose: Optional[str] = Query(None),
    client: ZcashClient = Depends(get_client),
):
    """
    Get a raw transaction.

    - **verbose**: "true" for a decoded object, otherwise serialized hex
    """
    require("Transaction ID is required", txid)
    return envelope(client.get_raw_transaction(txid, query_bool(verbose)))


@router.post("/transaction/send", response_model=SuccessResponse)
def send_to_address(
    payload: Optional[SendRequest] = Body(None),
    client: ZcashClient = Depends(get_client),
):
    """
    Send funds from the node wallet.

    - **address**: destination address (required)
    - **amount**: amount in ZEC (required)
    - **comment**: optional wallet-local comment

    The node validates the address and amount.
    """
    payload = payload or SendRequest()
    require("Address and amount are required", payload.address, payload.amount)

    txid = client.send_to_address(payload.address, payload.amount, payload.comment or "")
    logger.info(f"Sent {payload.amount} to {payload.address}: {txid}")
    return envelope(TxidData(txid=txid))


@router.get("/fee/estimate", response_model=SuccessResponse)
def estimate_fee(
    nblocks: Optional[str] = Query(None),
    client: ZcashClient = Depends(get_client),
):
    """
    Estimate the fee per kilobyte for confirmation within nblocks.

    - **nblocks**: target confirmation window (default 6)
    """
    target = query_int("nblocks", nblocks)
    return envelope(FeeData(fee=client.estimate_fee(target), nblocks=target))
