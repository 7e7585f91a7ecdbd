# app/api/routes/admin.py
from fastapi import APIRouter, Depends

from app.api.deps import get_auth_store, require_admin
from app.schemas.auth import CreateUserRequest, UserListMetadata, UserListResponse, UserResponse
from app.services.auth_service import AuthStore

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=UserListResponse)
async def list_users(store: AuthStore = Depends(get_auth_store)):
    users = store.get_all_users()
    return UserListResponse(data=users, metadata=UserListMetadata(total=len(users)))


@router.post("/users", response_model=UserResponse)
async def create_user(body: CreateUserRequest, store: AuthStore = Depends(get_auth_store)):
    user = await store.create_user(body.email, body.password, body.name, body.role)
    return UserResponse(data=user)
