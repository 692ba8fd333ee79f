"""
Read-side modules built on the ledger kernel.

- reporting: per-account reports over a transaction window
- dashboard: counts and recent activity
"""
