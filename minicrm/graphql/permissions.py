from typing import Any
from strawberry.permission import BasePermission
from strawberry.types import Info


class IsAuthenticated(BasePermission):
    message = "Authentication credentials were not provided."

    def has_permission(self, source: Any, info: Info, **kwargs) -> bool:
        user = getattr(info.context.request, 'user', None)
        return bool(user and user.is_authenticated)
