"""
Storage layer for the invoicing schema.

Connection handling, domain records and the data-access object.
"""

from .db import DataSource, SQLiteDataSource, Transaction, get_connection
from .errors import InvoiceCreationError, UnknownProductError
from .models import Customer, Invoice, Item, Product
from .repository import InvoiceDAO, get_dao, initialize_schema

__all__ = [
    "Customer",
    "DataSource",
    "Invoice",
    "InvoiceCreationError",
    "InvoiceDAO",
    "Item",
    "Product",
    "SQLiteDataSource",
    "Transaction",
    "UnknownProductError",
    "get_connection",
    "get_dao",
    "initialize_schema",
]
