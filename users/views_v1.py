from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .serializers import WhoAmISerializer


class MeV1View(APIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = WhoAmISerializer

    @extend_schema(request=None, responses=WhoAmISerializer)
    def get(self, request):
        return Response(WhoAmISerializer(request.user).data)
