from fastapi import APIRouter

from app.api.v1.endpoints import auth, challenges, groups, pet, shop, tasks, users, version

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(pet.router, prefix="/pet", tags=["pet"])
api_router.include_router(shop.router, prefix="/shop", tags=["shop"])
api_router.include_router(tasks.router, tags=["tasks"])
api_router.include_router(groups.router, prefix="/groups", tags=["groups"])
api_router.include_router(challenges.router, prefix="/challenges", tags=["challenges"])
api_router.include_router(version.router, tags=["version"])
