from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from slims.core.exceptions import NotFoundError
from slims.users.models.session import SessionToken
from slims.users.serializers.session import SessionTokenSerializer


class SessionTokenViewSet(viewsets.ViewSet):
    """Active sign-in sessions of the current user"""

    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return SessionToken.objects.active().filter(user=self.request.user)

    def list(self, request):
        serializer = SessionTokenSerializer(
            self.get_queryset(), many=True, context={"request": request}
        )
        return Response(serializer.data)

    def destroy(self, request, pk=None):
        """Terminate a session on another device"""
        try:
            session = self.get_queryset().get(pk=pk)
        except (SessionToken.DoesNotExist, ValueError):
            raise NotFoundError("Session not found")
        session.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
