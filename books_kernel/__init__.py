"""
Books Kernel

The computational core of a multi-company bookkeeping workspace:
- Immutable ledger, voucher and item value objects
- Ledger balance engine (opening balance + postings)
- Calendar period filtering
- Hash-chained audit trail for company workflows
"""

__version__ = "0.1.0"
