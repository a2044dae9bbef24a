"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from functools import wraps

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from floor.domain.errors import (
    DomainError,
    FloorError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from floor.handlers.serializers import (
    AddMemberSerializer,
    AddSnacksSerializer,
    BattleSerializer,
    BookingSerializer,
    CreateBookingSerializer,
    CreateSalarySerializer,
    CreateSessionSerializer,
    CreateSubscriptionSerializer,
    DeviceAvailabilitySerializer,
    ExtendTimeSerializer,
    ManagementSummarySerializer,
    SalarySerializer,
    ScoreSerializer,
    SessionSerializer,
    SettleSerializer,
    StartBattleSerializer,
    SubscriptionSerializer,
)
from floor.services.factory import (
    build_battle_service,
    build_booking_service,
    build_management_service,
    build_session_service,
)
from floor.signals import ACTIVE_SESSIONS_CACHE_KEY, AVAILABILITY_CACHE_KEY

ERROR_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (DomainError, status.HTTP_422_UNPROCESSABLE_ENTITY),
)


def error_response(exc: FloorError) -> Response:
    for error_type, http_status in ERROR_STATUS:
        if isinstance(exc, error_type):
            break
    else:
        http_status = status.HTTP_400_BAD_REQUEST
    return Response({"code": exc.code.value, "message": exc.message}, status=http_status)


def maps_domain_errors(handler):
    @wraps(handler)
    def wrapper(*args, **kwargs):
        try:
            return handler(*args, **kwargs)
        except FloorError as exc:
            return error_response(exc)

    return wrapper


def _validated(serializer_class, request: Request):
    serializer = serializer_class(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.to_input()


def _query_datetime(request: Request, name: str):
    raw = request.query_params.get(name)
    if not raw:
        return None
    value = parse_datetime(raw)
    if value is None:
        raise ValidationError(f"Invalid {name} timestamp")
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value


class SessionListView(APIView):
    """Handler for POST /api/sessions"""

    @maps_domain_errors
    def post(self, request: Request) -> Response:
        session = build_session_service().create_session(_validated(CreateSessionSerializer, request))
        return Response(SessionSerializer(session).data, status=status.HTTP_201_CREATED)


class ActiveSessionListView(APIView):
    """Handler for GET /api/sessions/active"""

    def get(self, request: Request) -> Response:
        data = cache.get(ACTIVE_SESSIONS_CACHE_KEY)
        if data is None:
            sessions = build_session_service().list_active_sessions()
            data = SessionSerializer(sessions, many=True).data
            cache.set(ACTIVE_SESSIONS_CACHE_KEY, data, settings.FLOOR_CACHE_SECONDS)
        return Response(data)


class CompletedSessionListView(APIView):
    """Handler for GET /api/sessions/completed?since=&until="""

    @maps_domain_errors
    def get(self, request: Request) -> Response:
        sessions = build_session_service().list_completed_sessions(
            since=_query_datetime(request, "since"),
            until=_query_datetime(request, "until"),
        )
        return Response(SessionSerializer(sessions, many=True).data)


class DeviceAvailabilityView(APIView):
    """Handler for GET /api/sessions/availability"""

    def get(self, request: Request) -> Response:
        data = cache.get(AVAILABILITY_CACHE_KEY)
        if data is None:
            availability = build_session_service().device_availability()
            data = DeviceAvailabilitySerializer(availability).data
            cache.set(AVAILABILITY_CACHE_KEY, data, settings.FLOOR_CACHE_SECONDS)
        return Response(data)


class SessionDetailView(APIView):
    """Handler for GET/DELETE /api/sessions/{session_id}"""

    @maps_domain_errors
    def get(self, request: Request, session_id: str) -> Response:
        return Response(SessionSerializer(build_session_service().get_session(session_id)).data)

    @maps_domain_errors
    def delete(self, request: Request, session_id: str) -> Response:
        build_session_service().delete_session(session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SessionExtendView(APIView):
    """Handler for POST /api/sessions/{session_id}/extend"""

    @maps_domain_errors
    def post(self, request: Request, session_id: str) -> Response:
        session = build_session_service().extend_time(session_id, _validated(ExtendTimeSerializer, request))
        return Response(SessionSerializer(session).data)


class SessionMemberView(APIView):
    """Handler for POST /api/sessions/{session_id}/members"""

    @maps_domain_errors
    def post(self, request: Request, session_id: str) -> Response:
        session = build_session_service().add_member(session_id, _validated(AddMemberSerializer, request))
        return Response(SessionSerializer(session).data)


class SessionSnackView(APIView):
    """Handler for POST /api/sessions/{session_id}/snacks"""

    @maps_domain_errors
    def post(self, request: Request, session_id: str) -> Response:
        session = build_session_service().add_snacks(session_id, _validated(AddSnacksSerializer, request))
        return Response(SessionSerializer(session).data)


class SessionSettleView(APIView):
    """Handler for POST /api/sessions/{session_id}/settle"""

    @maps_domain_errors
    def post(self, request: Request, session_id: str) -> Response:
        settlement = build_session_service().settle_partial(session_id, _validated(SettleSerializer, request))
        return Response(
            {
                "amount_paid": f"{settlement.amount_paid:.2f}",
                "session": SessionSerializer(settlement.session).data,
            }
        )


class SessionCompleteView(APIView):
    """Handler for POST /api/sessions/{session_id}/complete"""

    @maps_domain_errors
    def post(self, request: Request, session_id: str) -> Response:
        return Response(SessionSerializer(build_session_service().complete_session(session_id)).data)


class BookingListView(APIView):
    """Handler for GET/POST /api/bookings"""

    def get(self, request: Request) -> Response:
        return Response(BookingSerializer(build_booking_service().list_upcoming(), many=True).data)

    @maps_domain_errors
    def post(self, request: Request) -> Response:
        booking = build_booking_service().create_booking(_validated(CreateBookingSerializer, request))
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class BattleListView(APIView):
    """Handler for GET/POST /api/battles"""

    def get(self, request: Request) -> Response:
        return Response(BattleSerializer(build_battle_service().list_active(), many=True).data)

    @maps_domain_errors
    def post(self, request: Request) -> Response:
        battle = build_battle_service().start_battle(_validated(StartBattleSerializer, request))
        return Response(BattleSerializer(battle).data, status=status.HTTP_201_CREATED)


class CompletedBattleListView(APIView):
    """Handler for GET /api/battles/completed"""

    def get(self, request: Request) -> Response:
        return Response(BattleSerializer(build_battle_service().list_completed(), many=True).data)


class BattleScoreView(APIView):
    """Handler for POST /api/battles/{battle_id}/score"""

    @maps_domain_errors
    def post(self, request: Request, battle_id: str) -> Response:
        serializer = ScoreSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        battle = build_battle_service().record_point(battle_id, serializer.validated_data["player"])
        return Response(BattleSerializer(battle).data)


class BattleFinishView(APIView):
    """Handler for POST /api/battles/{battle_id}/finish"""

    @maps_domain_errors
    def post(self, request: Request, battle_id: str) -> Response:
        return Response(BattleSerializer(build_battle_service().finish_battle(battle_id)).data)


class SubscriptionListView(APIView):
    """Handler for GET/POST /api/management/subscriptions"""

    def get(self, request: Request) -> Response:
        service = build_management_service()
        serializer = SubscriptionSerializer(
            service.list_subscriptions(), many=True, context={"today": service.today()}
        )
        return Response(serializer.data)

    @maps_domain_errors
    def post(self, request: Request) -> Response:
        service = build_management_service()
        subscription = service.create_subscription(_validated(CreateSubscriptionSerializer, request))
        serializer = SubscriptionSerializer(subscription, context={"today": service.today()})
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class SubscriptionDetailView(APIView):
    """Handler for DELETE /api/management/subscriptions/{subscription_id}"""

    @maps_domain_errors
    def delete(self, request: Request, subscription_id: str) -> Response:
        build_management_service().delete_subscription(subscription_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SalaryListView(APIView):
    """Handler for GET/POST /api/management/salaries"""

    def get(self, request: Request) -> Response:
        return Response(SalarySerializer(build_management_service().list_salaries(), many=True).data)

    @maps_domain_errors
    def post(self, request: Request) -> Response:
        salary = build_management_service().create_salary(_validated(CreateSalarySerializer, request))
        return Response(SalarySerializer(salary).data, status=status.HTTP_201_CREATED)


class SalaryDetailView(APIView):
    """Handler for DELETE /api/management/salaries/{salary_id}"""

    @maps_domain_errors
    def delete(self, request: Request, salary_id: str) -> Response:
        build_management_service().delete_salary(salary_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ManagementSummaryView(APIView):
    """Handler for GET /api/management/summary"""

    def get(self, request: Request) -> Response:
        return Response(ManagementSummarySerializer(build_management_service().summary()).data)
