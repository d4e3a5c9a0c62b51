import asyncio
import os
from datetime import date
import asyncpg

from invoicedash.identity import hash_password

# Configuration
POSTGRES_URL = os.getenv("POSTGRES_URL") or os.getenv("DATABASE_URL")
DB_SSL = os.getenv("DB_SSL", "require")

USERS = [
    {"name": "User", "email": "user@nextmail.com", "password": "123456"},
]

CUSTOMERS = [
    {"name": "Evil Rabbit", "email": "evil@rabbit.com", "image_url": "/customers/evil-rabbit.png"},
    {"name": "Delba de Oliveira", "email": "delba@oliveira.com", "image_url": "/customers/delba-de-oliveira.png"},
    {"name": "Lee Robinson", "email": "lee@robinson.com", "image_url": "/customers/lee-robinson.png"},
]

async def seed_db():
    print("Connecting to Postgres...")
    conn = await asyncpg.connect(POSTGRES_URL, ssl=DB_SSL)

    # 1. Users
    print("Seeding Users...")
    for user in USERS:
        await conn.execute(
            """
            INSERT INTO users (name, email, password)
            VALUES ($1, $2, $3)
            ON CONFLICT (email) DO NOTHING
            """,
            user["name"], user["email"], hash_password(user["password"])
        )

    # 2. Customers, each with one pending and one paid invoice
    print("Seeding Customers and Invoices...")
    for i, customer in enumerate(CUSTOMERS):
        customer_id = await conn.fetchval(
            "INSERT INTO customers (name, email, image_url) VALUES ($1, $2, $3) RETURNING id",
            customer["name"], customer["email"], customer["image_url"]
        )
        await conn.execute(
            "INSERT INTO invoices (customer_id, amount, status, date) VALUES ($1, $2, $3, $4)",
            customer_id, 15795 + i * 100, "pending", date(2022, 12, 6)
        )
        await conn.execute(
            "INSERT INTO invoices (customer_id, amount, status, date) VALUES ($1, $2, $3, $4)",
            customer_id, 666, "paid", date(2023, 6, 27)
        )

    print("Seeding complete.")
    await conn.close()

if __name__ == "__main__":
    asyncio.run(seed_db())
