"""
Data models for storage layer.

Defines the records read from and written to the invoicing schema.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Customer:
    """A row of the Customer table.

    Customers are reference data: this package reads them but never
    writes them outside of schema seeding.
    """
    customer_id: int
    first_name: Optional[str]
    last_name: Optional[str]
    street: Optional[str] = None
    city: Optional[str] = None


@dataclass(frozen=True)
class Product:
    """A row of the Product table."""
    product_id: int
    price: float
    name: Optional[str] = None


@dataclass(frozen=True)
class Invoice:
    """A billing record owned by one customer.

    The total is maintained by the database from the invoice's item lines.
    """
    invoice_id: int
    customer_id: int
    total: float = 0.0


@dataclass(frozen=True)
class Item:
    """One product line of an invoice.

    `item` is the 0-based position of the line within its invoice and
    `cost` is the product price captured when the invoice was created.
    """
    invoice_id: int
    item: int
    product_id: int
    quantity: int
    cost: float
