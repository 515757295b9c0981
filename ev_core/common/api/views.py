# ev_core/common/api/views.py
from __future__ import annotations

import time

from django.utils import timezone
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

_STARTED_AT = time.monotonic()


class HealthView(APIView):
    """
    Liveness check for load balancers. No auth, no database access.
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        tags=["Health"],
        responses={
            200: inline_serializer(
                name="HealthResponse",
                fields={
                    "status": serializers.CharField(),
                    "timestamp": serializers.DateTimeField(),
                    "uptime": serializers.FloatField(),
                },
            )
        },
    )
    def get(self, request):
        return Response(
            {
                "status": "ok",
                "timestamp": timezone.now().isoformat(),
                "uptime": time.monotonic() - _STARTED_AT,
            },
            status=status.HTTP_200_OK,
        )
