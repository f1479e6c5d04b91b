"""
SQL Copilot sample database generation.

Generates a small SQLite shop database (users, products, orders) to try
the API and CLI against.

Usage:
    python scripts/create_sample_db.py [--output PATH] [--seed N]
"""

import argparse
import datetime
import random
import sqlite3
import sys
from pathlib import Path

# The schema module lives in packages/core/src, which is not a sibling of
# this script; put it on sys.path when the project is not installed.
_CORE_SRC = Path(__file__).resolve().parent.parent / "packages" / "core" / "src"
if str(_CORE_SRC) not in sys.path:
    sys.path.insert(0, str(_CORE_SRC))

from database.schema import SCHEMA_SQL  # type: ignore


NUM_USERS = 25
NUM_ORDERS = 200

FIRST_NAMES = ["Ada", "Alan", "Grace", "Linus", "Margaret", "Dennis", "Barbara", "Ken"]
LAST_NAMES = ["Lovelace", "Turing", "Hopper", "Torvalds", "Hamilton", "Ritchie", "Liskov", "Thompson"]
COUNTRIES = ["DE", "FR", "GB", "US", "CA", "NL"]

PRODUCT_DEFINITIONS = [
    {"name": "Mechanical Keyboard", "category": "Peripherals", "price": 89.99},
    {"name": "Wireless Mouse", "category": "Peripherals", "price": 24.50},
    {"name": "27in Monitor", "category": "Displays", "price": 229.00},
    {"name": "USB-C Hub", "category": "Accessories", "price": 39.90},
    {"name": "Laptop Stand", "category": "Accessories", "price": 45.00},
    {"name": "Noise Cancelling Headphones", "category": "Audio", "price": 199.00},
    {"name": "Webcam", "category": "Peripherals", "price": 59.99},
    {"name": "Desk Lamp", "category": "Office", "price": 32.00},
]

ORDER_STATUSES = ["pending", "shipped", "delivered", "cancelled"]


def parse_args():
    """Parse command-line arguments for the sample database generator.

    Returns:
        argparse.Namespace with 'output' (Path) and 'seed' (int or None).
    """
    parser = argparse.ArgumentParser(
        description="Generate the SQL Copilot sample shop database (SQLite).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("data/shop.db"),
        help="Output path for the SQLite database file (default: data/shop.db)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible data generation (default: random)",
    )
    return parser.parse_args()


def generate_users(cursor):
    user_ids = []
    for i in range(1, NUM_USERS + 1):
        first = random.choice(FIRST_NAMES)
        last = random.choice(LAST_NAMES)
        cursor.execute(
            "INSERT INTO users (name, email, country) VALUES (?, ?, ?)",
            (f"{first} {last}", f"{first.lower()}.{last.lower()}{i}@example.com", random.choice(COUNTRIES)),
        )
        user_ids.append(cursor.lastrowid)
    return user_ids


def generate_products(cursor):
    product_ids = []
    for product in PRODUCT_DEFINITIONS:
        cursor.execute(
            "INSERT INTO products (name, category, price, stock) VALUES (?, ?, ?, ?)",
            (product["name"], product["category"], product["price"], random.randint(0, 150)),
        )
        product_ids.append(cursor.lastrowid)
    return product_ids


def generate_orders(cursor, user_ids, product_ids, base_time):
    """Insert NUM_ORDERS orders spread over the 90 days before base_time."""
    for _ in range(NUM_ORDERS):
        ordered_at = base_time - datetime.timedelta(minutes=random.randint(0, 90 * 24 * 60))
        cursor.execute(
            "INSERT INTO orders (user_id, product_id, quantity, status, ordered_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (
                random.choice(user_ids),
                random.choice(product_ids),
                random.randint(1, 4),
                random.choice(ORDER_STATUSES),
                ordered_at.strftime("%Y-%m-%d %H:%M:%S"),
            ),
        )
    return NUM_ORDERS


def print_summary(output_path, seed, counts):
    print("Sample database generated successfully.")
    print(f"  Output:   {output_path}")
    print(f"  Seed:     {seed}")
    print(f"  Users:    {counts['users']}")
    print(f"  Products: {counts['products']}")
    print(f"  Orders:   {counts['orders']}")


def main():
    """Create the DB from the schema, then users → products → orders; print summary."""
    args = parse_args()
    output_path = args.output

    # Print the seed even when it was generated so the run can be reproduced.
    seed = args.seed if args.seed is not None else random.randint(0, 2**31 - 1)
    random.seed(seed)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.exists():
            output_path.unlink()
    except OSError as e:
        print(f"Error: Cannot prepare output path {output_path}: {e}", file=sys.stderr)
        sys.exit(1)

    conn = None
    try:
        conn = sqlite3.connect(str(output_path))
        cursor = conn.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.executescript(SCHEMA_SQL)

        cursor.execute("BEGIN TRANSACTION")
        user_ids = generate_users(cursor)
        product_ids = generate_products(cursor)
        base_time = datetime.datetime.now().replace(microsecond=0)
        order_count = generate_orders(cursor, user_ids, product_ids, base_time)
        conn.commit()

        print_summary(
            output_path,
            seed,
            {"users": len(user_ids), "products": len(product_ids), "orders": order_count},
        )

    except sqlite3.Error as e:
        print(f"Error: Database operation failed: {e}", file=sys.stderr)
        # Remove the incomplete database file
        if conn:
            conn.close()
            conn = None
        if output_path.exists():
            output_path.unlink()
        sys.exit(1)

    finally:
        if conn:
            conn.close()


if __name__ == "__main__":
    main()
