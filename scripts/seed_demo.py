#!/usr/bin/env python3
"""
Seed script to create demo tables and reservations
"""

import asyncio
from datetime import timedelta, time


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from app.config import settings
    from app.database import SessionLocal, engine, Base
    from app.models.reservation import Reservation, ReservationStatus
    from app.models.table import Table
    from app.services.validation import normalize_phone, restaurant_today

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if the floor plan already exists
        result = await db.execute(select(Table).limit(1))
        existing = result.scalar_one_or_none()

        if existing:
            print("Demo data already exists. Skipping...")
            return

        print("Creating tables...")

        tables = [
            {"table_name": "Bar #1", "capacity": 1},
            {"table_name": "Bar #2", "capacity": 1},
            {"table_name": "#1", "capacity": 6},
            {"table_name": "#2", "capacity": 6},
        ]

        for table_data in tables:
            db.add(Table(**table_data))

        print("Creating reservations...")

        # Next few open days, starting tomorrow
        open_days = []
        day = restaurant_today(settings)
        while len(open_days) < 3:
            day += timedelta(days=1)
            if day.weekday() != settings.closed_weekday:
                open_days.append(day)

        reservations = [
            {"first_name": "Rick", "last_name": "Sanchez", "mobile_number": "202-555-0164",
             "reservation_date": open_days[0], "reservation_time": time(20, 0), "people": 6},
            {"first_name": "Frank", "last_name": "Palicky", "mobile_number": "202-555-0153",
             "reservation_date": open_days[0], "reservation_time": time(11, 30), "people": 1},
            {"first_name": "Bird", "last_name": "Person", "mobile_number": "808-555-0141",
             "reservation_date": open_days[1], "reservation_time": time(14, 0), "people": 1},
            {"first_name": "Tiger", "last_name": "Lion", "mobile_number": "808-555-0140",
             "reservation_date": open_days[1], "reservation_time": time(18, 15), "people": 3},
            {"first_name": "Anthony", "last_name": "Charboneau", "mobile_number": "620-646-8897",
             "reservation_date": open_days[2], "reservation_time": time(19, 30), "people": 2},
        ]

        for reservation_data in reservations:
            db.add(
                Reservation(
                    **reservation_data,
                    mobile_digits=normalize_phone(reservation_data["mobile_number"]),
                    status=ReservationStatus.BOOKED.value,
                )
            )

        await db.commit()

        print(f"""
Demo data created successfully!

Restaurant: {settings.restaurant_name}
  Open {settings.opening_time}-{settings.closing_time}, closed weekday {settings.closed_weekday}

Tables: {len(tables)} created
Reservations: {len(reservations)} created, first on {open_days[0].isoformat()}
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
