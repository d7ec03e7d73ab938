"""
Books Modules.

Report generators layered over the books kernel:
- Reporting: trial balance, balance sheet, P&L, cash flow, day book,
  bank reconciliation, integrity scan, export, report selector service
- Tax: GST-style liability/ITC summary, HSN summary, GSTR registers
- Inventory: stock valuation at sale price

Every generator is a pure function over an immutable snapshot.
"""
