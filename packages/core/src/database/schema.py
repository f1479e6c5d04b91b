"""
Schema DDL for the SQL Copilot sample shop database.

Defines all table structures, constraints, and indexes as a single SQL
string constant. Imported by scripts/create_sample_db.py to build the
demo database, and by the test suite to build throwaway databases.

Tables:
    users     Customers who place orders
    products  Catalog items with price and stock
    orders    One row per purchase (user x product x quantity)
"""

# Complete schema DDL as a single SQL script.
SCHEMA_SQL = """
-- ============================================================================
-- USERS: Customers
-- ============================================================================

CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    country TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX idx_users_country ON users(country);

-- ============================================================================
-- PRODUCTS: Catalog items
-- ============================================================================

CREATE TABLE products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    category TEXT,
    price REAL NOT NULL CHECK(price >= 0),
    stock INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX idx_products_category ON products(category);

-- ============================================================================
-- ORDERS: Purchases
-- ============================================================================

CREATE TABLE orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    product_id INTEGER NOT NULL,
    quantity INTEGER NOT NULL CHECK(quantity > 0),
    status TEXT CHECK(status IN ('pending', 'shipped', 'delivered', 'cancelled')),
    ordered_at TIMESTAMP NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    FOREIGN KEY (product_id) REFERENCES products(id)
);

CREATE INDEX idx_orders_user ON orders(user_id);
CREATE INDEX idx_orders_ordered_at ON orders(ordered_at);
"""
