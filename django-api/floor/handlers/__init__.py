from floor.handlers.views import (
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

__all__ = [
    "ActiveSessionListView",
    "BattleFinishView",
    "BattleListView",
    "BattleScoreView",
    "BookingListView",
    "CompletedBattleListView",
    "CompletedSessionListView",
    "DeviceAvailabilityView",
    "ManagementSummaryView",
    "SalaryDetailView",
    "SalaryListView",
    "SessionCompleteView",
    "SessionDetailView",
    "SessionExtendView",
    "SessionListView",
    "SessionMemberView",
    "SessionSettleView",
    "SessionSnackView",
    "SubscriptionDetailView",
    "SubscriptionListView",
]
