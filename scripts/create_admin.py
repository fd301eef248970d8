import asyncio
import os

from sqlalchemy import select

from loyalty.models.users.user_models import User
from loyalty.core.db import AsyncSessionLocal
from loyalty.core.security import hash_password
from loyalty.constants.roles import UserRole


async def create_admin():
    username = os.getenv("ADMIN_EMAIL", "admin@example.com")

    async with AsyncSessionLocal() as session:
        exists = await session.scalar(select(User.id).where(User.username == username))
        if exists:
            print(f"Admin {username} already exists")
            return

        admin = User(
            username=username,
            password_hash=hash_password(os.getenv("ADMIN_PASSWORD", "admin123")),
            role=UserRole.ADMIN.value,
            is_active=True,
        )
        session.add(admin)
        await session.commit()
        print(f"Admin {username} created!")


if __name__ == "__main__":
    asyncio.run(create_admin())
