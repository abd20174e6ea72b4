"""User administration and self-service profile routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from protean.utils.globals import current_domain

from storefront.api.pagination import Page, page_params
from storefront.api.schemas import (
    ChangeRoleRequest,
    MessageResponse,
    PaginatedUsers,
    RegisterRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
    UserResponse,
)
from storefront.auth.guards import admin_only, current_user, super_admin_only
from storefront.user.management import ChangeRole, DeleteUser, UpdateProfile, UpdateUser
from storefront.user.registration import RegisterUser
from storefront.user.user import Role, User

user_router = APIRouter(prefix="/users", tags=["users"])


def _load(user_id: str) -> User:
    return current_domain.repository_for(User).get(user_id)


@user_router.get("", response_model=PaginatedUsers)
async def list_users(paging: Page = Depends(page_params), _: User = Depends(admin_only)) -> PaginatedUsers:
    results = current_domain.repository_for(User).list_page(paging.page, paging.limit)
    return PaginatedUsers(
        users=[UserResponse.from_user(user) for user in results.items],
        total=results.total,
        page=paging.page,
        limit=paging.limit,
    )


@user_router.get("/profile", response_model=UserResponse)
async def get_profile(user: User = Depends(current_user)) -> UserResponse:
    return UserResponse.from_user(user)


@user_router.put("/profile", response_model=UserResponse)
async def update_profile(body: UpdateProfileRequest, user: User = Depends(current_user)) -> UserResponse:
    command = UpdateProfile(user_id=str(user.id), **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(_load(str(user.id)))


@user_router.post("/admin", status_code=201, response_model=UserResponse)
async def create_admin(body: RegisterRequest, _: User = Depends(super_admin_only)) -> UserResponse:
    """Create a staff account with the `admin` role."""
    command = RegisterUser(**body.model_dump(exclude_none=True), role=Role.ADMIN.value)
    user_id = current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(_load(user_id))


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, _: User = Depends(admin_only)) -> UserResponse:
    return UserResponse.from_user(_load(user_id))


@user_router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, body: UpdateUserRequest, actor: User = Depends(admin_only)) -> UserResponse:
    target = _load(user_id)
    if target.is_staff and actor.role != Role.SUPER_ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only a super admin can modify admin accounts",
        )

    command = UpdateUser(user_id=user_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(_load(user_id))


@user_router.put("/{user_id}/role", response_model=UserResponse)
async def change_role(user_id: str, body: ChangeRoleRequest, _: User = Depends(super_admin_only)) -> UserResponse:
    current_domain.process(ChangeRole(user_id=user_id, role=body.role.value), asynchronous=False)
    return UserResponse.from_user(_load(user_id))


@user_router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, _: User = Depends(super_admin_only)) -> MessageResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return MessageResponse(message="User deleted")
