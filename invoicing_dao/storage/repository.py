"""
Data-access object for the invoicing schema.

Each public operation maps to one SQL statement, except invoice creation
which runs a short fixed transaction.
"""

import logging
from typing import List, Optional, Sequence

from .db import DataSource, SQLiteDataSource, Transaction, get_connection
from .errors import InvoiceCreationError, UnknownProductError
from .models import Customer, Invoice, Item

logger = logging.getLogger(__name__)

_CUSTOMER_COLUMNS = "ID, FirstName, LastName, Street, City"


def _row_to_customer(row) -> Customer:
    return Customer(
        customer_id=row[0],
        first_name=row[1],
        last_name=row[2],
        street=row[3],
        city=row[4]
    )


class InvoiceDAO:
    """Data-access object for customers, invoices and invoice items.

    Holds only a reference to a connection provider. Every operation
    acquires its own connection and closes it before returning, whether
    the call succeeds or fails.
    """

    def __init__(self, data_source: DataSource):
        """Initialize the DAO with a connection provider.

        Args:
            data_source: Source of independent database connections
        """
        self.data_source = data_source

    def total_for_customer(self, customer_id: int) -> float:
        """Get the revenue of a customer (sum of their invoice totals).

        Args:
            customer_id: Key of the customer

        Returns:
            Sum of the customer's invoice totals, 0.0 if they have none
        """
        conn = self.data_source.get_connection()
        try:
            cursor = conn.execute(
                "SELECT SUM(Total) AS Amount FROM Invoice WHERE CustomerID = ?",
                (customer_id,)
            )
            row = cursor.fetchone()
            return float(row[0] or 0) if row else 0.0
        finally:
            conn.close()

    def name_of_customer(self, customer_id: int) -> Optional[str]:
        """Get the last name of a customer.

        Args:
            customer_id: Key of the customer

        Returns:
            The customer's LastName, or None if no such customer exists
        """
        conn = self.data_source.get_connection()
        try:
            cursor = conn.execute(
                "SELECT LastName FROM Customer WHERE ID = ?",
                (customer_id,)
            )
            row = cursor.fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def create_invoice(
        self,
        customer: Customer,
        product_ids: Sequence[int],
        quantities: Sequence[int]
    ) -> int:
        """Create an invoice and its item lines in a single transaction.

        Line `i` bills `quantities[i]` units of `product_ids[i]` at the
        product's current price. Either the invoice and all of its lines
        are committed, or nothing is.

        Args:
            customer: Customer the invoice is issued to
            product_ids: Products to bill, one per line
            quantities: Quantity for each product, same length as product_ids

        Returns:
            The generated invoice ID

        Raises:
            ValueError: If the sequences differ in length or are empty
            InvoiceCreationError: If an insert writes no row or no key is generated
            UnknownProductError: If a product has no row in Product
            sqlite3.Error: On any driver failure (after rollback)
        """
        if len(product_ids) != len(quantities):
            raise ValueError(
                f"product_ids and quantities must have the same length "
                f"({len(product_ids)} != {len(quantities)})"
            )
        if not product_ids:
            raise ValueError("An invoice needs at least one product")

        conn = self.data_source.get_connection()
        try:
            with Transaction(conn):
                cursor = conn.execute(
                    "INSERT INTO Invoice(CustomerID) VALUES (?)",
                    (customer.customer_id,)
                )
                if cursor.rowcount == 0:
                    raise InvoiceCreationError(
                        "Invoice insert wrote no row", customer.customer_id
                    )

                invoice_id = cursor.lastrowid
                if invoice_id is None:
                    raise InvoiceCreationError(
                        "No key generated for new invoice", customer.customer_id
                    )
                logger.debug("Generated invoice key %s", invoice_id)

                for position, (product_id, quantity) in enumerate(zip(product_ids, quantities)):
                    price_row = conn.execute(
                        "SELECT Price FROM Product WHERE ID = ?",
                        (product_id,)
                    ).fetchone()
                    if price_row is None:
                        raise UnknownProductError(product_id, customer.customer_id)

                    cursor = conn.execute(
                        """
                        INSERT INTO Item(InvoiceID, Item, ProductID, Quantity, Cost)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        (invoice_id, position, product_id, quantity, price_row[0])
                    )
                    if cursor.rowcount == 0:
                        raise InvoiceCreationError(
                            f"Item {position} insert wrote no row", customer.customer_id
                        )
                    logger.debug(
                        "Invoice %s item %s: product %s x%s at %s",
                        invoice_id, position, product_id, quantity, price_row[0]
                    )

            logger.info(
                "Created invoice %s for customer %s with %d item(s)",
                invoice_id, customer.customer_id, len(product_ids)
            )
            return invoice_id
        finally:
            conn.close()

    def number_of_customers(self) -> int:
        """Get the number of rows in the Customer table."""
        conn = self.data_source.get_connection()
        try:
            row = conn.execute("SELECT COUNT(*) AS Number FROM Customer").fetchone()
            return row[0]
        finally:
            conn.close()

    def number_of_invoices_for_customer(self, customer_id: int) -> int:
        """Get the number of invoices issued to a customer.

        Args:
            customer_id: Key of the customer

        Returns:
            Count of the customer's invoices, 0 for unknown customers
        """
        conn = self.data_source.get_connection()
        try:
            row = conn.execute(
                "SELECT COUNT(*) AS Number FROM Invoice WHERE CustomerID = ?",
                (customer_id,)
            ).fetchone()
            return row[0]
        finally:
            conn.close()

    def find_customer(self, customer_id: int) -> Optional[Customer]:
        """Find a customer by key.

        Args:
            customer_id: Key of the customer

        Returns:
            The matching Customer, or None if not found
        """
        conn = self.data_source.get_connection()
        try:
            row = conn.execute(
                f"SELECT {_CUSTOMER_COLUMNS} FROM Customer WHERE ID = ?",
                (customer_id,)
            ).fetchone()
            return _row_to_customer(row) if row else None
        finally:
            conn.close()

    def customers_in_city(self, city: str) -> List[Customer]:
        """List the customers located in a city.

        Matching is exact and case-sensitive.

        Args:
            city: City name to look for

        Returns:
            Matching customers ordered by ID, empty if none match
        """
        conn = self.data_source.get_connection()
        try:
            cursor = conn.execute(
                f"SELECT {_CUSTOMER_COLUMNS} FROM Customer WHERE City = ? ORDER BY ID",
                (city,)
            )
            return [_row_to_customer(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def find_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Find an invoice by key, or None if not found."""
        conn = self.data_source.get_connection()
        try:
            row = conn.execute(
                "SELECT ID, CustomerID, Total FROM Invoice WHERE ID = ?",
                (invoice_id,)
            ).fetchone()
            if row is None:
                return None
            return Invoice(invoice_id=row[0], customer_id=row[1], total=float(row[2] or 0))
        finally:
            conn.close()

    def items_for_invoice(self, invoice_id: int) -> List[Item]:
        """List the item lines of an invoice in line order."""
        conn = self.data_source.get_connection()
        try:
            cursor = conn.execute(
                """
                SELECT InvoiceID, Item, ProductID, Quantity, Cost
                FROM Item
                WHERE InvoiceID = ?
                ORDER BY Item
                """,
                (invoice_id,)
            )
            return [
                Item(
                    invoice_id=row[0],
                    item=row[1],
                    product_id=row[2],
                    quantity=row[3],
                    cost=row[4]
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()


# Global DAO instance
_default_dao: Optional[InvoiceDAO] = None


def get_dao(db_path: str = "invoicing.db") -> InvoiceDAO:
    """Get a DAO bound to a SQLite database file.

    The instance is shared until a different database path is requested.

    Args:
        db_path: Path to SQLite database file

    Returns:
        An InvoiceDAO backed by a SQLiteDataSource
    """
    global _default_dao
    source = getattr(_default_dao, "data_source", None)
    if _default_dao is None or getattr(source, "db_path", None) != db_path:
        _default_dao = InvoiceDAO(SQLiteDataSource(db_path))
    return _default_dao


def initialize_schema(db_path: str = "invoicing.db") -> None:
    """Create the Customer, Product, Invoice and Item tables if missing.

    Invoice.Total is kept equal to the sum of Quantity * Cost over the
    invoice's items by an AFTER INSERT trigger on Item.

    Args:
        db_path: Path to SQLite database file
    """
    conn = get_connection(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS Customer (
                ID INTEGER PRIMARY KEY,
                FirstName TEXT,
                LastName TEXT,
                Street TEXT,
                City TEXT
            );

            CREATE TABLE IF NOT EXISTS Product (
                ID INTEGER PRIMARY KEY,
                Name TEXT,
                Price REAL NOT NULL
            );

            CREATE TABLE IF NOT EXISTS Invoice (
                ID INTEGER PRIMARY KEY AUTOINCREMENT,
                CustomerID INTEGER NOT NULL REFERENCES Customer(ID),
                Total REAL NOT NULL DEFAULT 0
            );

            CREATE TABLE IF NOT EXISTS Item (
                InvoiceID INTEGER NOT NULL REFERENCES Invoice(ID),
                Item INTEGER NOT NULL,
                ProductID INTEGER NOT NULL REFERENCES Product(ID),
                Quantity INTEGER NOT NULL,
                Cost REAL NOT NULL,
                PRIMARY KEY (InvoiceID, Item)
            );

            CREATE TRIGGER IF NOT EXISTS item_adds_to_invoice_total
            AFTER INSERT ON Item
            BEGIN
                UPDATE Invoice
                SET Total = Total + NEW.Quantity * NEW.Cost
                WHERE ID = NEW.InvoiceID;
            END;
        """)
        conn.commit()
    finally:
        conn.close()
