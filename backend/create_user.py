"""
Register a user and print an access token for it.
Useful for local development, where no credential service issues tokens.
Run with: python create_user.py <email> <name> [role]
"""
import asyncio
import sys

from app.core.logging import setup_logging
from app.db.init_db import create_tables, seed_initial_data
from app.db.session import close_db, create_sessionmaker, init_db
from app.models.user import UserRole
from app.services.auth_service import AuthService


async def create_user(email: str, name: str, role: UserRole) -> None:
    """Create the user unless it exists, then print a token."""
    await init_db()
    await create_tables()
    await seed_initial_data()
    async_session_maker = create_sessionmaker()

    try:
        async with async_session_maker() as session:
            auth_service = AuthService(session)
            user = await auth_service.get_user_by_email(email)
            if user:
                print(f"User {email} already exists ({user.role.value})")
            else:
                user = await auth_service.create_user(email=email, name=name, role=role)
                print(f"Created user {email} ({role.value})")
            print(f"User ID: {user.id}")
            print(f"Access token: {auth_service.issue_token(user)}")
    finally:
        await close_db()


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python create_user.py <email> <name> [admin|manager|user|viewer]")
        sys.exit(1)
    role = UserRole(sys.argv[3]) if len(sys.argv) > 3 else UserRole.USER
    setup_logging()
    asyncio.run(create_user(sys.argv[1], sys.argv[2], role))
