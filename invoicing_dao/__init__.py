"""
Invoicing DAO.

Data access for customers, invoices and their line items.
"""

__version__ = "0.1.0"
