# ev_core/checkin_rules/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from ev_core.checkin_rules.api.serializers import (
    CheckinRuleSetInputSerializer,
    CheckinRuleSetSerializer,
)
from ev_core.checkin_rules.services import (
    CheckinRuleService,
    CheckinRulesInvalid,
    EventNotFound,
    RuleIdTaken,
    RuleStorageFailure,
)
from ev_core.common.api.exceptions import (
    EventNotFoundError,
    RuleIdTakenError,
    RuleSetRejectedError,
    StorageUnavailableError,
)


def _event_not_found(event_id) -> EventNotFoundError:
    return EventNotFoundError(f'Event with id "{event_id}" not found.')


class CheckinRuleSetView(APIView):
    """
    /events/<event_id>/checkin-rules/
    - GET  current rule set, in submission order
    - PUT  replace the whole rule set (validated first, all-or-nothing)
    """

    @extend_schema(
        tags=["Check-in rules"],
        responses={
            200: CheckinRuleSetSerializer,
            404: OpenApiResponse(description="Event not found"),
        },
    )
    def get(self, request, event_id: UUID):
        try:
            rules = CheckinRuleService.list_rules(event_id=event_id)
        except EventNotFound:
            raise _event_not_found(event_id)

        return Response(CheckinRuleSetSerializer({"rules": rules}).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Check-in rules"],
        request=CheckinRuleSetInputSerializer,
        responses={
            200: CheckinRuleSetSerializer,
            400: OpenApiResponse(description="Invalid payload or rule set (duplicate names, no active rule, window conflict)"),
            404: OpenApiResponse(description="Event not found"),
            409: OpenApiResponse(description="A supplied rule id belongs to another event"),
            503: OpenApiResponse(description="Rule set could not be stored; safe to retry"),
        },
    )
    def put(self, request, event_id: UUID):
        ser = CheckinRuleSetInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            rules = CheckinRuleService.replace_rules(event_id=event_id, rules=ser.drafts())
        except EventNotFound:
            raise _event_not_found(event_id)
        except CheckinRulesInvalid as e:
            raise RuleSetRejectedError(
                errors=e.errors,
                conflicts=[c.as_dict() for c in e.conflicts],
            )
        except RuleIdTaken as e:
            raise RuleIdTakenError(rule_ids=e.rule_ids)
        except RuleStorageFailure:
            raise StorageUnavailableError()

        return Response(CheckinRuleSetSerializer({"rules": rules}).data, status=status.HTTP_200_OK)
