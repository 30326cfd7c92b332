"""
Theurgy - Command implementations for Fontis.

Each module groups related top-level CLI commands:
- request:  Claim tokens from the faucet
- query:    allowance, balance, status (read-only queries)
- automint: automint, force-mint, next-mint
- owner:    withdraw, set-max (owner only)
- genesis:  Create a local wallet
"""
