"""
Blockchain API routes for the Zcash RPC backend.
"""

import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..common import envelope, query_int, require
from ..schemas import BlockCountData, BlockHashData, SuccessResponse
from ..zcash import ZcashClient, get_client

router = APIRouter(prefix="/blockchain", tags=["blockchain"])

# Plain decimal, optionally negative (the node counts back from the tip)
HEIGHT_PATTERN = re.compile(r"-?[0-9]+")


@router.get("/info", response_model=SuccessResponse)
def get_blockchain_info(client: ZcashClient = Depends(get_client)):
    """Get chain state: height, best block hash, upgrades, pool values."""
    return envelope(client.get_blockchain_info())


@router.get("/blockcount", response_model=SuccessResponse)
def get_block_count(client: ZcashClient = Depends(get_client)):
    """Get height of the most-work chain."""
    return envelope(BlockCountData(blockCount=client.get_block_count()))


@router.get("/blockhash/{height}", response_model=SuccessResponse)
def get_block_hash(height: str, client: ZcashClient = Depends(get_client)):
    """Get hash of the block at the given height."""
    if not HEIGHT_PATTERN.fullmatch(height):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid block height is required",
        )

    block_height = int(height)
    blockhash = client.get_block_hash(block_height)
    return envelope(BlockHashData(height=block_height, blockhash=blockhash))


@router.get("/block/{blockhash}", response_model=SuccessResponse)
def get_block(
    blockhash: str,
    verbosity: Optional[str] = Query(None),
    client: ZcashClient = Depends(get_client),
):
    """
    Get block by hash.

    - **verbosity**: 0 for hex, 1 for an object, 2 for an object with
      decoded transactions (default 1)
    """
    require("Block hash is required", blockhash)
    return envelope(client.get_block(blockhash, query_int("verbosity", verbosity)))
