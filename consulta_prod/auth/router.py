"""API routers for authentication and administrator account management."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from consulta_prod.audit.dao import AuditDAO
from consulta_prod.auth.dao import UserDAO
from consulta_prod.auth.schemas import LoginRequest, LoginResponse, UserCreate, UserPublic, UserRead, UserUpdate
from consulta_prod.auth.service import AuthService, UserService
from consulta_prod.core.dependencies import AdminDep, CurrentUserDep, SessionDep
from consulta_prod.core.exceptions import NotFoundError
from consulta_prod.core.schemas import Page

router = APIRouter(prefix="/auth", tags=["auth"])
users_router = APIRouter(prefix="/users", tags=["users"])


# ===== DEPENDENCY INJECTION =====

def get_auth_service(session: SessionDep) -> AuthService:
    return AuthService(UserDAO(session))


def get_user_service(session: SessionDep) -> UserService:
    return UserService(UserDAO(session), AuditDAO(session))


# ===== AUTH ENDPOINTS =====

@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, service: AuthService = Depends(get_auth_service)) -> LoginResponse:
    """Exchange username/password for a bearer token."""
    return service.login(credentials)


@router.get("/me", response_model=UserPublic)
def me(user: CurrentUserDep, service: AuthService = Depends(get_auth_service)) -> UserPublic:
    """Current principal's public profile."""
    return service.get_profile(user)


# ===== USER MANAGEMENT (ADMIN ONLY) =====

@users_router.get("", response_model=Page[UserRead])
def list_users(
    admin: AdminDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, gt=0),
    search: Optional[str] = Query(None),
    service: UserService = Depends(get_user_service),
) -> Page[UserRead]:
    return service.get_page(page=page, limit=limit, search=search)


@users_router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, admin: AdminDep, service: UserService = Depends(get_user_service)) -> UserRead:
    return service.get_by_id(user_id)


@users_router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, admin: AdminDep, service: UserService = Depends(get_user_service)) -> UserRead:
    return service.create(user_data, actor_id=admin.id)


@users_router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: str, user_data: UserUpdate, admin: AdminDep, service: UserService = Depends(get_user_service)
) -> UserRead:
    return service.update(user_id, user_data, actor_id=admin.id)


@users_router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, admin: AdminDep, service: UserService = Depends(get_user_service)) -> Response:
    if not service.delete(user_id, actor_id=admin.id):
        raise NotFoundError("User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
