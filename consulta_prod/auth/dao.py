from typing import Optional

from sqlalchemy.orm import Session

from consulta_prod.auth.models import User
from consulta_prod.core.base_dao import BaseDAO


class UserDAO(BaseDAO[User]):
    """DB functionality for interaction with `User` objects."""

    search_fields = ("username", "email", "first_name", "last_name")

    def __init__(self, db_session: Session):
        super().__init__(User, db_session)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.get_by_field("username", username)
