#!/usr/bin/env python3
"""
Seed script: creates verified demo users, categories and listings directly in the database.
Accounts are marked verified so they can log in straight away (password: password123).
  python scripts/seed_data.py
  python scripts/seed_data.py --users 20 --listings-per-user 10
"""

import argparse
import asyncio
import random
import sys
from decimal import Decimal
from pathlib import Path

# Project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select

from aubazaar.config import get_settings
from aubazaar.core.security import hash_password
from aubazaar.db.base import Base
from aubazaar.db.models import Category, Listing, ListingCondition, User
from aubazaar.db.session import build_engine, build_session_maker

CATEGORIES = ["Textbooks", "Electronics", "Furniture", "Clothing", "Kitchen", "Sports", "Services", "Other"]

TITLES = {
    "Textbooks": ["Calculus: Early Transcendentals", "Intro to Psychology", "Organic Chemistry notes", "Shona dictionary"],
    "Electronics": ["HP laptop", "Scientific calculator", "Bluetooth speaker", "Phone charger", "USB flash 64GB"],
    "Furniture": ["Study desk", "Office chair", "Bookshelf", "Bedside lamp"],
    "Clothing": ["Graduation gown", "Lab coat", "Winter jacket", "Sneakers size 42"],
    "Kitchen": ["Electric kettle", "Two-plate stove", "Rice cooker", "Mini fridge"],
    "Sports": ["Football", "Yoga mat", "Tennis racket", "Dumbbells 5kg"],
    "Services": ["Maths tutoring", "Laptop repair", "Hair braiding", "Essay proofreading"],
    "Other": ["Umbrella", "Backpack", "Bicycle", "Guitar"],
}

DEPARTMENTS = ["Engineering", "Agriculture", "Health Sciences", "Business", "Education", "Theology"]
LOCATIONS = ["Main campus", "Girls' hostel", "Boys' hostel", "Library", "Old Mutare"]


def random_price() -> Decimal:
    return Decimal(random.choice([2, 5, 10, 15, 20, 35, 50, 75, 120, 250]))


async def seed(users: int, listings_per_user: int) -> None:
    settings = get_settings()
    engine = build_engine(settings)
    session_maker = build_session_maker(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_maker() as session:
        existing = set((await session.execute(select(Category.name))).scalars().all())
        session.add_all(Category(name=name) for name in CATEGORIES if name not in existing)

        hashed = hash_password("password123")
        created_users = 0
        created_listings = 0
        for i in range(users):
            email = f"student{i + 1}@students.africa.edu"
            if (await session.execute(select(User.id).where(User.email == email))).first():
                continue
            user = User(
                email=email,
                hashed_password=hashed,
                full_name=f"Student {i + 1}",
                role="student",
                department=random.choice(DEPARTMENTS),
                email_verified=True,
            )
            session.add(user)
            await session.flush()
            created_users += 1

            for _ in range(listings_per_user):
                category = random.choice(CATEGORIES)
                session.add(
                    Listing(
                        user_id=user.id,
                        title=random.choice(TITLES[category]),
                        description="Good value, pick up on campus.",
                        price=random_price(),
                        category=category,
                        condition=random.choice(list(ListingCondition)).value,
                        location=random.choice(LOCATIONS),
                        images=[],
                    )
                )
                created_listings += 1
        await session.commit()

    await engine.dispose()
    print(f"Done. Users: {created_users}, Listings created: {created_listings}")


def main():
    ap = argparse.ArgumentParser(description="Seed users, categories and listings")
    ap.add_argument("--users", type=int, default=10, help="Number of users to create")
    ap.add_argument("--listings-per-user", type=int, default=5, help="Listings per user")
    args = ap.parse_args()
    asyncio.run(seed(args.users, args.listings_per_user))


if __name__ == "__main__":
    main()
