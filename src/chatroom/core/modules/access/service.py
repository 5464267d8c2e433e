from chatroom.core.core import Service
from chatroom.core.modules.session.models import SessionId
from chatroom.core.modules.user.models import User
from chatroom.errors import AuthenticationError


class AccessService(Service):
    async def ensure_authenticated(self, session_id: SessionId | None) -> User:
        """Ensure the caller holds a valid session and return its user."""
        if not session_id:
            raise AuthenticationError("Not authenticated")
        return await self.core.services.session.get_authenticated_user(session_id)
