# consulta_prod/auth/service.py
"""Login and account management."""

import logging
from typing import Any, Dict, Optional

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.auth.dao import UserDAO
from consulta_prod.auth.models import User
from consulta_prod.auth.schemas import LoginRequest, LoginResponse, UserBase, UserCreate, UserPublic, UserRead, UserUpdate
from consulta_prod.auth.security import create_access_token, hash_password, verify_password
from consulta_prod.core.base_service import BaseService
from consulta_prod.core.exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)


class AuthService:
    """Credential check and token issuance."""

    def __init__(self, user_dao: UserDAO):
        self.user_dao = user_dao

    def login(self, credentials: LoginRequest) -> LoginResponse:
        user = self.user_dao.get_by_username(credentials.username)
        if user is None or not user.active or not verify_password(credentials.password, user.password_hash):
            logger.warning("Failed login attempt for username %r", credentials.username)
            raise AuthenticationError("Invalid credentials")

        token = create_access_token(user.id, user.username, user.role)
        return LoginResponse(token=token, user=UserPublic.model_validate(user))

    def get_profile(self, user: User) -> UserPublic:
        return UserPublic.model_validate(user)


class UserService(BaseService[User, UserCreate, UserUpdate, UserRead]):
    """Administrator-only account CRUD."""

    response_model = UserRead
    validation_model = UserBase
    table_name = "users"
    entity_label = "User"
    unique_fields = ("username", "email")

    def __init__(self, user_dao: UserDAO, audit_dao: AuditDAO):
        super().__init__(user_dao, audit_dao)

    def delete(self, id: str, actor_id: Optional[str] = None) -> bool:
        if actor_id is not None and id == actor_id:
            raise ValidationError("You cannot delete your own account")
        return super().delete(id, actor_id)

    def _prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        data["password_hash"] = hash_password(data.pop("password"))
        return data

    def _prepare_update(self, record: User, changes: Dict[str, Any]) -> Dict[str, Any]:
        password = changes.pop("password", None)
        if password:
            changes["password_hash"] = hash_password(password)
        return changes
