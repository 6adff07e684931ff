"""
Pytest configuration and fixtures for the Zcash RPC backend tests.
"""

import json
import itertools

import pytest
import responses
from fastapi.testclient import TestClient

from zcash_backend.app import config, zcash


# =============================================================================
# Configuration
# =============================================================================

RPC_URL = "https://rpc.example.com/"
API_KEY = "test-api-key"
NODE_API_KEY = "test-node-key"
PREFIX = "/api/zcash"

TXID = "5c3f4e1b2a7d9e8f0c1b2a3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f6a7b"
BLOCKHASH = "0000000000a3c1f6c1a1b7e4f8b2d0e9c1a2b3c4d5e6f708192a3b4c5d6e7f80"
T_ADDRESS = "t1Rv4exT7bqhZqi2j7xz8bUHDMxwosrjADU"


# =============================================================================
# Environment Variables
# =============================================================================

@pytest.fixture(autouse=True)
def set_test_env(monkeypatch):
    """Set test environment variables and rebuild cached settings/client."""
    monkeypatch.setenv("ZCASH_RPC_URL", RPC_URL)
    monkeypatch.setenv("ZCASH_API_KEY", NODE_API_KEY)
    monkeypatch.setenv("ZCASH_RPC_TIMEOUT", "5")
    monkeypatch.setenv("API_KEY", API_KEY)
    monkeypatch.setenv("NODE_ENV", "test")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.delenv("DEBUG", raising=False)
    config.reset_settings()
    zcash.reset_client()
    yield
    config.reset_settings()
    zcash.reset_client()


# =============================================================================
# Fake Node
# =============================================================================

def _canned_results():
    counter = itertools.count(1)
    return {
        "getblockchaininfo": {
            "chain": "main",
            "blocks": 2750000,
            "headers": 2750000,
            "bestblockhash": BLOCKHASH,
            "difficulty": 74305945.3,
            "verificationprogress": 0.9999,
            "chainwork": "00000000000000000000000000000000000000000000000000000b1c2d3e4f50",
        },
        "getblockcount": 2750000,
        "getblockhash": BLOCKHASH,
        "getblock": {"hash": BLOCKHASH, "height": 2750000, "tx": [TXID]},
        "getwalletinfo": {
            "walletversion": 60000,
            "balance": 1.25,
            "unconfirmed_balance": 0.0,
            "immature_balance": 0.0,
            "txcount": 3,
            "keypoololdest": 1700000000,
            "keypoolsize": 100,
        },
        "getbalance": 1.25,
        "getnewaddress": lambda params: f"t1NewAddress{next(counter):023d}",
        "listunspent": [{
            "txid": TXID,
            "vout": 0,
            "address": T_ADDRESS,
            "amount": 1.25,
            "confirmations": 12,
        }],
        "gettransaction": {"txid": TXID, "amount": 1.25, "confirmations": 12, "time": 1700000000},
        "listtransactions": [{"txid": TXID, "amount": 1.25, "confirmations": 12}],
        "getrawtransaction": lambda params: {"txid": TXID, "version": 5} if params[1] else "0500008085202f89",
        "sendtoaddress": TXID,
        "validateaddress": {"isvalid": True, "address": T_ADDRESS},
        "getnetworkinfo": {"version": 5080050, "subversion": "/MagicBean:5.8.0/", "connections": 8},
        "getconnectioncount": 8,
        "getmininginfo": {"blocks": 2750000, "difficulty": 74305945.3, "networksolps": 9876543},
        "estimatefee": 0.0001,
    }


class FakeZcashNode:
    """
    Callback for responses that answers JSON-RPC calls by method name.

    Set ``errors[method] = (code, message)`` to make a method fail the way
    zcashd does (HTTP 500 with a JSON-RPC error body).
    """

    def __init__(self):
        self.results = _canned_results()
        self.errors = {}
        self.requests = []
        self.headers = []

    def __call__(self, request):
        payload = json.loads(request.body)
        self.requests.append(payload)
        self.headers.append(dict(request.headers))
        method = payload["method"]

        if method in self.errors:
            code, message = self.errors[method]
            body = {"result": None, "error": {"code": code, "message": message}, "id": payload["id"]}
            return (500, {}, json.dumps(body))

        result = self.results.get(method)
        if callable(result):
            result = result(payload["params"])
        return (200, {}, json.dumps({"result": result, "error": None, "id": payload["id"]}))

    @property
    def methods(self):
        return [r["method"] for r in self.requests]

    @property
    def last(self):
        return self.requests[-1]


# =============================================================================
# Pytest Fixtures
# =============================================================================

@pytest.fixture
def mock_node():
    """Fake Zcash node behind the gateway URL."""
    node = FakeZcashNode()
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add_callback(responses.POST, RPC_URL, callback=node, content_type="application/json")
        yield node


@pytest.fixture
def api_client():
    """Get FastAPI test client."""
    from zcash_backend.app.main import app

    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"x-api-key": API_KEY}


@pytest.fixture
def client(api_client, auth_headers):
    """Test client that sends the API key on every request."""
    api_client.headers.update(auth_headers)
    return api_client


# =============================================================================
# Test Utilities
# =============================================================================

@pytest.fixture
def send_payload():
    """Sample send payload."""
    return {
        "address": T_ADDRESS,
        "amount": 0.001,
        "comment": "Test transaction",
    }
