import asyncio
import os
import asyncpg

# Configuration (Import from app config in real usage, hardcoded for script simplicity/independence)
POSTGRES_URL = os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL")
DB_SSL = os.getenv("DB_SSL", "require")

async def init_db():
    print("Connecting to Postgres...")
    conn = await asyncpg.connect(POSTGRES_URL, ssl=DB_SSL)

    await conn.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # 1. Users
    print("Creating table 'users'...")
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id UUID DEFAULT uuid_generate_v4() PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL
        )
    """)

    # 2. Customers
    print("Creating table 'customers'...")
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS customers (
            id UUID DEFAULT uuid_generate_v4() PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            email VARCHAR(255) NOT NULL,
            image_url VARCHAR(255)
        )
    """)

    # 3. Invoices (amount in cents)
    print("Creating table 'invoices'...")
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS invoices (
            id UUID DEFAULT uuid_generate_v4() PRIMARY KEY,
            customer_id UUID NOT NULL,
            amount INT NOT NULL,
            status VARCHAR(255) NOT NULL,
            date DATE NOT NULL
        )
    """)
    await conn.execute("CREATE INDEX IF NOT EXISTS invoices_customer_id_idx ON invoices (customer_id)")
    await conn.execute("CREATE INDEX IF NOT EXISTS invoices_date_idx ON invoices (date DESC)")

    print("Database initialization complete.")
    await conn.close()

if __name__ == "__main__":
    asyncio.run(init_db())
