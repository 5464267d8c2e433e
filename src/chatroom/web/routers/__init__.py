from chatroom.web.routers.auth import router as auth_router
from chatroom.web.routers.messages import router as messages_router
from chatroom.web.routers.profile import router as profile_router
from chatroom.web.routers.verify import router as verify_router

__all__ = [
    "auth_router",
    "messages_router",
    "profile_router",
    "verify_router",
]
