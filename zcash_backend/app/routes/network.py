"""
Network and mining API routes for the Zcash RPC backend.
"""

from fastapi import APIRouter, Depends

from ..common import envelope
from ..schemas import ConnectionsData, SuccessResponse
from ..zcash import ZcashClient, get_client

router = APIRouter(tags=["network"])


@router.get("/network/info", response_model=SuccessResponse)
def get_network_info(client: ZcashClient = Depends(get_client)):
    return envelope(client.get_network_info())


@router.get("/network/connections", response_model=SuccessResponse)
def get_connection_count(client: ZcashClient = Depends(get_client)):
    return envelope(ConnectionsData(connections=client.get_connection_count()))


@router.get("/mining/info", response_model=SuccessResponse)
def get_mining_info(client: ZcashClient = Depends(get_client)):
    return envelope(client.get_mining_info())
