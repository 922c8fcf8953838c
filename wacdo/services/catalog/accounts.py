"""
Role and User Services

Registration hashes the password after checking it against the policy;
login answers every failure (unknown email, wrong password, disabled
account) with the same message so callers cannot tell which emails exist.
"""

import logging

from sqlalchemy.orm import selectinload

from wacdo.core.exceptions import AuthError, ConflictError
from wacdo.models import Role, User
from wacdo.schemas import RoleCreate, RoleUpdate, UserCreate, UserUpdate
from wacdo.services.catalog.base import CrudService, changes_from
from wacdo.services.passwords import hash_password, pwd_context, validate_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Email or Password Invalid"


class RoleService(CrudService[Role]):
    model = Role
    entity_name = "Role"

    async def create(self, data: RoleCreate) -> Role:
        if await self.exists(Role.role_name == data.role_name):
            raise ConflictError("Role already exists")

        role = Role(**data.model_dump())
        role = await self.save(role, "Role already exists")
        logger.info(f"Role #{role.id} '{role.role_name}' created")
        return role

    async def ensure_default(self, role_name: str) -> None:
        """Create ``role_name`` when no role exists at all."""
        if await self.count(Role) > 0:
            return
        await self.save(Role(role_name=role_name, description="Seeded at startup"), "Role already exists")
        logger.info(f"Seeded default role '{role_name}'")

    async def update(self, role_id: int, data: RoleUpdate) -> Role:
        role = await self.get_or_404(role_id)
        changes = changes_from(data)

        if "role_name" in changes and await self.exists(
            Role.role_name == changes["role_name"], Role.id != role_id
        ):
            raise ConflictError("Role name already exists")

        return await self.save(self.apply(role, changes), "Role name already exists")

    async def delete(self, role_id: int) -> None:
        role = await self.get_or_404(role_id)

        # Not atomic with the delete below; the FK on users.roles_id backs it up
        if await self.count(User, User.roles_id == role_id) > 0:
            raise ConflictError("Cannot delete role: still in use by users")

        await self.remove(role, "Cannot delete role: still in use by users")


class UserService(CrudService[User]):
    model = User
    entity_name = "User"
    load_options = (selectinload(User.role),)

    async def register(self, data: UserCreate) -> User:
        if await self.exists(User.email == data.email):
            raise ConflictError("Email Already in Use")

        validate_password(data.password)
        hashed = hash_password(data.password)

        await self.require_reference(Role, data.roles_id, "Role")

        user = User(
            username=data.username,
            email=data.email,
            password=hashed,
            roles_id=data.roles_id,
        )
        user = await self.save(user, "Email Already in Use")
        logger.info(f"User #{user.id} registered")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Return the active user matching ``email``/``password``.

        Raises:
            AuthError: Same message for every kind of failure
        """
        result = await self.session.execute(self._select().where(User.email == email))
        user = result.scalar_one_or_none()

        if user is None:
            # Spend the same hashing time as a real check
            pwd_context.dummy_verify()
            raise AuthError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password) or not user.is_active:
            logger.info(f"Rejected login for user #{user.id}")
            raise AuthError(INVALID_CREDENTIALS)

        return user

    async def update(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get_or_404(user_id)
        changes = changes_from(data)

        if "email" in changes and await self.exists(
            User.email == changes["email"], User.id != user_id
        ):
            raise ConflictError("Email Already in Use")

        if "password" in changes:
            validate_password(changes["password"])
            changes["password"] = hash_password(changes["password"])

        if "roles_id" in changes and changes["roles_id"] != user.roles_id:
            await self.require_reference(Role, changes["roles_id"], "Role")

        return await self.save(self.apply(user, changes), "Email Already in Use")

    async def delete(self, user_id: int) -> None:
        user = await self.get_or_404(user_id)
        await self.remove(user, "User could not be deleted")
