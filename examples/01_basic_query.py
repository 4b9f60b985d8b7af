"""
Example 01: Basic Query Execution

This example demonstrates dynamic queries with Middle against a SQLite file.
"""

from middle import ConnectionStrings, Middle
import tempfile
import sqlite3
from pathlib import Path


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    # Set up the database with some test data
    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT,
            active INTEGER DEFAULT 1
        )
    """)
    conn.execute("INSERT INTO users (name, email) VALUES ('Alice', 'alice@example.com')")
    conn.execute("INSERT INTO users (name, email) VALUES ('Bob', NULL)")
    conn.execute("INSERT INTO users (name, email, active) VALUES ('Charlie', 'charlie@example.com', 0)")
    conn.commit()
    conn.close()

    # Register the connection string under a name
    connection_strings = ConnectionStrings.from_mapping(
        {"main": {"connection_string": db_path, "provider": "sqlite"}}
    )
    db = Middle("main", connection_strings)

    print("=== Basic Query Execution ===\n")

    # query_single_dynamic: one row as a Record
    user = db.query_single_dynamic("SELECT * FROM users WHERE id = @0", 1)
    print(f"query_single_dynamic result: {user}")
    print(f"User name: {user.name}\n")

    # query_dynamic: lazy sequence of Records, placeholders are positional
    print("Active users:")
    for row in db.query_dynamic("SELECT name, email FROM users WHERE active = @0", 1):
        print(f"  - {row['name']} ({row['email'] or 'no email'})")
    print()

    # The same argument can be referenced more than once
    rows = db.query_dynamic("SELECT name FROM users WHERE name = @0 OR email LIKE @1", "Bob", "c%")
    print(f"Matched: {[r.name for r in rows]}\n")

    # Clean up
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
