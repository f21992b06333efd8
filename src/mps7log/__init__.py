"""MPS7Log: decoder and ledger report for MPS7 transaction logs."""

__version__ = "0.1.0"
