#!/usr/bin/env python3
"""
Seed script: creates the demo staff directory and the default settings document.
Run after migrations: python scripts/seed.py
Existing users and an existing settings document are left untouched.
"""

import asyncio
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from intradesk.database import get_engine_url_and_connect_args
from intradesk.models.app_setting import DEFAULT_SETTINGS_KEY
from intradesk.schemas.settings import AppSettings

USERS = [
    (1, "Hiroshi Tanaka", "president", False),
    (2, "Yuki Sato", "sales", False),
    (3, "Kenji Suzuki", "sales", False),
    (4, "Aiko Watanabe", "clerical", False),
    (5, "Daichi Ito", "sales", True),
    (6, "Mei Yamamoto", "clerical", True),
]


def default_settings_document() -> dict:
    """Fully populated settings document with sensible role gates."""
    doc = AppSettings().model_dump()
    doc.update(
        {
            "customer_allowed_roles": ["president", "sales"],
            "reservation_allowed_roles": [],
            "evaluation_allowed_roles": ["president", "sales", "clerical"],
            "proposal_allowed_roles": [],
            "proposal_include_trainees": True,
            "evaluation_targets": [name for _, name, _, _ in USERS],
        }
    )
    return doc


async def seed():
    url, connect_args = get_engine_url_and_connect_args()
    engine = create_async_engine(url, connect_args=connect_args)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        created = 0
        for user_id, name, role, is_trainee in USERS:
            result = await session.execute(
                text("SELECT id FROM users WHERE id = :id"), {"id": user_id}
            )
            if result.fetchone():
                continue
            await session.execute(
                text("""
                    INSERT INTO users (id, name, role, is_trainee, is_active)
                    VALUES (:id, :name, :role, :trainee, :active)
                """),
                {"id": user_id, "name": name, "role": role, "trainee": is_trainee, "active": True},
            )
            created += 1
        await session.commit()
        print(f"Users: {created} created, {len(USERS) - created} already present.")

        result = await session.execute(
            text("SELECT key FROM app_settings WHERE key = :key"),
            {"key": DEFAULT_SETTINGS_KEY},
        )
        if result.fetchone():
            print("Settings document already exists, leaving it as is.")
        else:
            await session.execute(
                text("INSERT INTO app_settings (key, value) VALUES (:key, :value)"),
                {"key": DEFAULT_SETTINGS_KEY, "value": json.dumps(default_settings_document())},
            )
            await session.commit()
            print("Default settings document created.")

    await engine.dispose()

    print("Seed complete!")
    print("Example: curl http://localhost:8000/v1/users/2/menu")


if __name__ == "__main__":
    asyncio.run(seed())
