from rest_framework import permissions


class IsTournamentManager(permissions.BasePermission):
    """Staff, or a user listed in ``Tournament.admins``.

    Objects may be a tournament or anything with a ``tournament`` attribute
    (a bracket, a registration).
    """

    message = "Only staff or tournament admins can manage this tournament."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        tournament = getattr(obj, "tournament", obj)
        return tournament.is_managed_by(request.user)
