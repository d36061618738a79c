"""Ethereum JSON-RPC remote source adapter."""

from __future__ import annotations

from .client import EthereumRpcClient, EthereumRPCError
from .source import EthereumRemoteSession, EthereumRemoteSource
from .translator import translate_transaction

__all__ = [
    "EthereumRPCError",
    "EthereumRemoteSession",
    "EthereumRemoteSource",
    "EthereumRpcClient",
    "translate_transaction",
]
