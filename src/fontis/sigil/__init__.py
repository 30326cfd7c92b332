"""
Sigil - Wallet identity for Fontis.

Loads the local EOA key and exposes it through the WalletProvider
interface the faucet gateway talks to.
"""
