# ev_core/events/api/views.py
from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from ev_core.common.api.exceptions import EventNotFoundError
from ev_core.events.api.serializers import (
    EventCreateSerializer,
    EventDetailSerializer,
    EventSerializer,
    EventUpdateSerializer,
)
from ev_core.events.models import Event
from ev_core.events.selectors import EventSelector
from ev_core.events.services import EventService


class EventViewSet(viewsets.ViewSet):
    """
    Thin API layer: validation via serializers, reads via EventSelector,
    writes via EventService.
    """

    serializer_class = EventSerializer
    queryset = Event.objects.none()

    def _detail(self, pk) -> Event:
        try:
            return EventSelector.get_event_detail(event_id=pk)
        except EventSelector.NotFound:
            raise EventNotFoundError(f'Event with id "{pk}" not found.')

    @extend_schema(
        tags=["Events"],
        request=EventCreateSerializer,
        responses={201: EventSerializer},
    )
    def create(self, request):
        ser = EventCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        event = EventService.create_event(**ser.validated_data)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Events"],
        responses={200: EventDetailSerializer, 404: OpenApiResponse(description="Event not found")},
    )
    def retrieve(self, request, pk=None):
        return Response(EventDetailSerializer(self._detail(pk)).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Events"],
        request=EventUpdateSerializer,
        responses={200: EventDetailSerializer, 404: OpenApiResponse(description="Event not found")},
    )
    def partial_update(self, request, pk=None):
        ser = EventUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            EventService.update_event(event_id=pk, data=ser.validated_data)
        except EventSelector.NotFound:
            raise EventNotFoundError(f'Event with id "{pk}" not found.')

        return Response(EventDetailSerializer(self._detail(pk)).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Events"],
        responses={204: None, 404: OpenApiResponse(description="Event not found")},
    )
    def destroy(self, request, pk=None):
        try:
            EventService.delete_event(event_id=pk)
        except EventSelector.NotFound:
            raise EventNotFoundError(f'Event with id "{pk}" not found.')

        return Response(status=status.HTTP_204_NO_CONTENT)
