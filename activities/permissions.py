from rest_framework.permissions import BasePermission


class IsReviewer(BasePermission):
    """
    HOD and IQAC accounts. Role comes from the local user record, never
    from the auth token.
    """
    message = "Only HOD or IQAC reviewers can access this."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, "is_reviewer", False))


class IsOwnerOrReviewer(BasePermission):
    """
    Object-level: the submitter, or any reviewer, may read an activity.
    """

    def has_object_permission(self, request, view, obj):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return obj.user_id == user.pk or getattr(user, "is_reviewer", False)
