# invoicing_dao/demo/seed_demo_data.py

from invoicing_dao.storage.db import Transaction, get_connection
from invoicing_dao.storage.models import Customer, Product
from invoicing_dao.storage.repository import initialize_schema

DEMO_CUSTOMERS = [
    Customer(0, "Laura", "Steel", "429 Seventh Av.", "Dallas"),
    Customer(1, "Susanne", "King", "366 - 20th Ave.", "Olten"),
    Customer(2, "Anne", "Miller", "20 Upland Pl.", "Lyon"),
    Customer(3, "Michael", "Clancy", "542 Upland Pl.", "San Francisco"),
    Customer(4, "Sylvia", "Ringer", "365 College Av.", "Dallas"),
    Customer(5, "Laura", "Miller", "294 Seventh Av.", "Paris"),
    Customer(6, "Laura", "White", "361 College Av.", "Olten"),
    Customer(7, "James", "Peterson", "231 Upland Pl.", "Lyon"),
    Customer(8, "Andrew", "Miller", "288 Seventh Av.", "Lyon"),
    Customer(9, "James", "Schneider", "277 Seventh Av.", "Berne"),
]

DEMO_PRODUCTS = [
    Product(0, 5.4, "Iron Iron"),
    Product(1, 24.8, "Chair Shoe"),
    Product(2, 24.8, "Telephone Clock"),
    Product(3, 10.0, "Chair Chair"),
    Product(4, 17.1, "Ice Tea Shoe"),
    Product(5, 4.0, "Clock Telephone"),
    Product(6, 19.2, "Ice Tea Chair"),
    Product(7, 7.3, "Telephone Shoe"),
]


def seed_demo_data(db_path: str = "invoicing.db") -> None:
    """Create the schema and load the demo customers and products.

    Rows that already exist are left untouched, so seeding twice is harmless.
    """
    initialize_schema(db_path)

    conn = get_connection(db_path)
    try:
        with Transaction(conn):
            conn.executemany(
                "INSERT OR IGNORE INTO Customer(ID, FirstName, LastName, Street, City) "
                "VALUES (?, ?, ?, ?, ?)",
                [(c.customer_id, c.first_name, c.last_name, c.street, c.city) for c in DEMO_CUSTOMERS]
            )
            conn.executemany(
                "INSERT OR IGNORE INTO Product(ID, Name, Price) VALUES (?, ?, ?)",
                [(p.product_id, p.name, p.price) for p in DEMO_PRODUCTS]
            )
    finally:
        conn.close()


if __name__ == "__main__":
    seed_demo_data()
    print("Demo customers and products inserted")
