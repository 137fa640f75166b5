"""
Exceptions raised by the storage layer.

Driver errors (`sqlite3.Error`) are never wrapped; these cover the
integrity checks the data-access object performs itself.
"""

from typing import Optional


class InvoiceCreationError(Exception):
    """Raised when the invoice transaction cannot complete its writes."""

    def __init__(self, message: str, customer_id: Optional[int] = None):
        super().__init__(message)
        self.customer_id = customer_id


class UnknownProductError(InvoiceCreationError):
    """Raised when an invoice line references a product with no price."""

    def __init__(self, product_id: int, customer_id: Optional[int] = None):
        super().__init__(f"No product with ID {product_id}", customer_id)
        self.product_id = product_id
