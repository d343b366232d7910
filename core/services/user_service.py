# =============================================================================
# core/services/user_service.py - Account Business Logic
# =============================================================================
# Registration, credential checks, and admin account management.
# =============================================================================

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import AuthenticationError, ConflictError
from core.models.user import UserCreate
from core.services.crud_service import CrudService
from core.tables import User, UserRole
from lib.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService(CrudService[User]):
    """Service for user accounts."""

    def __init__(self):
        super().__init__(User, "User")

    async def register(
        self,
        session: AsyncSession,
        data: UserCreate,
        role: UserRole = UserRole.MEMBER,
    ) -> User:
        """
        Create an account.

        Raises:
            ConflictError: If the email is already registered
        """
        email = data.email.lower()
        if await self.get_by(session, email=email) is not None:
            raise ConflictError("Email is already registered", details={"email": email})

        return await self.create(
            session,
            {
                "email": email,
                "full_name": data.full_name,
                "password_hash": hash_password(data.password),
                "role": role,
            },
        )

    async def authenticate(self, session: AsyncSession, email: str, password: str) -> User:
        """
        Check credentials.

        Raises:
            AuthenticationError: If the email is unknown, the password is
                wrong, or the account is deactivated
        """
        user = await self.get_by(session, email=email.lower())

        # Unknown email and wrong password get the same message
        if user is None or not verify_password(user.password_hash, password):
            logger.info(f"Failed login attempt for {email}")
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        return user


user_service = UserService()
