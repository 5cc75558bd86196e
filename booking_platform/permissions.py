from rest_framework import permissions


class IsRealtor(permissions.BasePermission):
    """Realtor-only endpoints resolve the caller's Realtor profile, so admins are not let in."""
    message = "Realtor access required."

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and getattr(request.user, "role", None) == "realtor"
        )
