"""
User API Views
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.services import UserService
from apps.api.serializers import UserSerializer


class CurrentUserView(APIView):
    """Profile of the authenticated user."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        user = UserService().get_user_by_email(request.user.email)
        return Response(UserSerializer(user).data)
