"""
Example 02: Model Mapping

This example maps rows onto dataclasses, Pydantic models and plain classes.
Columns match fields case-insensitively; fields without a column keep their
default value.
"""

from dataclasses import dataclass

from pydantic import BaseModel

from middle import ConnectionStrings, Middle, build_command
import tempfile
from pathlib import Path


@dataclass
class User:
    id: int = 0
    name: str = ""
    email: str | None = None
    role: str = "member"


class Product(BaseModel):
    id: int = 0
    title: str = ""
    price: float = 0.0


class Tag:
    def __init__(self):
        self.id = 0
        self.label = ""


def main():
    db_path = Path(tempfile.mkdtemp()) / "shop.db"
    connection_strings = ConnectionStrings.from_mapping(
        {"shop": {"connection_string": str(db_path), "provider": "sqlite"}}
    )
    db = Middle("shop", connection_strings)

    db.transaction(
        build_command("CREATE TABLE users (ID INTEGER PRIMARY KEY, Name TEXT, Email TEXT)"),
        build_command("CREATE TABLE products (id INTEGER PRIMARY KEY, title TEXT, price REAL)"),
        build_command("CREATE TABLE tags (id INTEGER PRIMARY KEY, label TEXT)"),
    )
    db.transaction(
        build_command("INSERT INTO users VALUES (@0, @1, @2)", 1, "Alice", "alice@example.com"),
        build_command("INSERT INTO users VALUES (@0, @1, @2)", 2, "Bob", None),
        build_command("INSERT INTO products VALUES (@0, @1, @2)", 1, "Laptop", 999.99),
        build_command("INSERT INTO tags VALUES (@0, @1)", 1, "sale"),
    )

    print("=== Model Mapping ===\n")

    # Dataclass: ID/Name/Email columns map onto id/name/email; role keeps its default
    for user in db.query(User, "SELECT * FROM users ORDER BY id"):
        print(f"Dataclass: {user}")

    # Pydantic model
    product = db.query_single(Product, "SELECT * FROM products WHERE id = @0", 1)
    print(f"Pydantic:  {product}")

    # Plain class with a no-argument constructor
    tag = db.query_single(Tag, "SELECT * FROM tags WHERE label = @0", "sale")
    print(f"Plain:     Tag(id={tag.id}, label={tag.label!r})")

    # No rows: query_single returns None
    print(f"Missing:   {db.query_single(User, 'SELECT * FROM users WHERE id = @0', 99)}")

    # Clean up
    db_path.unlink()
    db_path.parent.rmdir()


if __name__ == "__main__":
    main()
