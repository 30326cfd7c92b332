"""
Pneuma - On-chain interaction layer for Fontis.

Provides the async JSON-RPC client, the faucet/ERC-20 ABIs, and transaction
utilities.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
