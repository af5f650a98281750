"""
Inventory Engine

A transactional inventory core over a relational store:
- Product catalog with validated creation and partial updates
- Stock ledger where each purchase/sale and its stock change commit together
- Row-level locking so concurrent sales never oversell
- On-demand valuation and low-stock reporting
"""

__version__ = "0.1.0"
