"""
Example 03: Transactions

This example runs several commands as one transaction. Either every command
is committed, or the whole batch is rolled back and the driver error is
raised unchanged.
"""

from middle import ConnectionStrings, Middle, build_command
import tempfile
import sqlite3
from pathlib import Path


def main():
    db_path = Path(tempfile.mkdtemp()) / "bank.db"
    connection_strings = ConnectionStrings.from_mapping(
        {"bank": {"connection_string": str(db_path), "provider": "sqlite"}}
    )
    db = Middle("bank", connection_strings)

    db.execute("CREATE TABLE accounts (id INTEGER PRIMARY KEY, owner TEXT NOT NULL, balance REAL NOT NULL CHECK (balance >= 0))")
    db.transaction(
        build_command("INSERT INTO accounts VALUES (@0, @1, @2)", 1, "Alice", 100.0),
        build_command("INSERT INTO accounts VALUES (@0, @1, @2)", 2, "Bob", 50.0),
    )

    print("=== Transaction Management ===\n")

    def transfer(source, target, amount):
        return db.transaction(
            build_command("UPDATE accounts SET balance = balance + @0 WHERE id = @1", amount, target),
            build_command("UPDATE accounts SET balance = balance - @0 WHERE id = @1", amount, source),
        )

    # Example 1: Successful transaction
    print("1. Successful transfer:")
    counts = transfer(1, 2, 30.0)
    print(f"   Affected rows per command: {counts}")
    for row in db.query_dynamic("SELECT owner, balance FROM accounts ORDER BY id"):
        print(f"   {row.owner}: {row.balance}")
    print()

    # Example 2: Failing transaction - the credit to Alice is rolled back
    print("2. Failed transfer (overdraft):")
    try:
        transfer(2, 1, 500.0)
    except sqlite3.IntegrityError as e:
        print(f"   Rolled back: {e}")
    for row in db.query_dynamic("SELECT owner, balance FROM accounts ORDER BY id"):
        print(f"   {row.owner}: {row.balance}")

    # Clean up
    db_path.unlink()
    db_path.parent.rmdir()


if __name__ == "__main__":
    main()
