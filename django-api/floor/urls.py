from django.urls import path

from floor.handlers import (
    ActiveSessionListView,
    BattleFinishView,
    BattleListView,
    BattleScoreView,
    BookingListView,
    CompletedBattleListView,
    CompletedSessionListView,
    DeviceAvailabilityView,
    ManagementSummaryView,
    SalaryDetailView,
    SalaryListView,
    SessionCompleteView,
    SessionDetailView,
    SessionExtendView,
    SessionListView,
    SessionMemberView,
    SessionSettleView,
    SessionSnackView,
    SubscriptionDetailView,
    SubscriptionListView,
)

urlpatterns = [
    path("sessions", SessionListView.as_view(), name="session-list"),
    path("sessions/active", ActiveSessionListView.as_view(), name="session-active"),
    path("sessions/completed", CompletedSessionListView.as_view(), name="session-completed"),
    path("sessions/availability", DeviceAvailabilityView.as_view(), name="device-availability"),
    path("sessions/<str:session_id>", SessionDetailView.as_view(), name="session-detail"),
    path("sessions/<str:session_id>/extend", SessionExtendView.as_view(), name="session-extend"),
    path("sessions/<str:session_id>/members", SessionMemberView.as_view(), name="session-members"),
    path("sessions/<str:session_id>/snacks", SessionSnackView.as_view(), name="session-snacks"),
    path("sessions/<str:session_id>/settle", SessionSettleView.as_view(), name="session-settle"),
    path("sessions/<str:session_id>/complete", SessionCompleteView.as_view(), name="session-complete"),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("battles", BattleListView.as_view(), name="battle-list"),
    path("battles/completed", CompletedBattleListView.as_view(), name="battle-completed"),
    path("battles/<str:battle_id>/score", BattleScoreView.as_view(), name="battle-score"),
    path("battles/<str:battle_id>/finish", BattleFinishView.as_view(), name="battle-finish"),
    path("management/subscriptions", SubscriptionListView.as_view(), name="subscription-list"),
    path(
        "management/subscriptions/<str:subscription_id>",
        SubscriptionDetailView.as_view(),
        name="subscription-detail",
    ),
    path("management/salaries", SalaryListView.as_view(), name="salary-list"),
    path("management/salaries/<str:salary_id>", SalaryDetailView.as_view(), name="salary-detail"),
    path("management/summary", ManagementSummaryView.as_view(), name="management-summary"),
]
