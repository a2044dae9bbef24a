"""Management service: owner bookkeeping of subscriptions and salaries.

The summary mirrors the owner overview: what active subscriptions cost per
cycle, which expire soon, and what was paid out in salaries this month.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime
from uuid import UUID, uuid4

from django.utils import timezone

from floor.domain import (
    ManagementSummary,
    Money,
    Salary,
    SalaryId,
    Subscription,
    SubscriptionId,
    SubscriptionStatus,
)
from floor.domain.errors import SalaryNotFoundError, SubscriptionNotFoundError, ValidationError
from floor.domain.value_objects import quantize
from floor.services.inputs import CreateSalaryInput, CreateSubscriptionInput
from floor.stores.interfaces import SalaryStore, SubscriptionStore
from floor.utils import to_local

logger = logging.getLogger(__name__)


class ManagementService:
    """Service for subscription and salary records."""

    def __init__(
        self,
        subscriptions: SubscriptionStore,
        salaries: SalaryStore,
        clock: Callable[[], datetime] = timezone.now,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._subscriptions = subscriptions
        self._salaries = salaries
        self._clock = clock
        self._id_factory = id_factory

    def _now(self) -> datetime:
        return to_local(self._clock())

    def today(self) -> date:
        return self._now().date()

    def list_subscriptions(self) -> list[Subscription]:
        return self._subscriptions.list_all()

    def create_subscription(self, data: CreateSubscriptionInput) -> Subscription:
        subscription = Subscription(
            id=SubscriptionId(self._id_factory()),
            type=data.type.strip(),
            provider=data.provider.strip(),
            cost=Money(quantize(data.cost)),
            start_date=data.start_date,
            expiry_date=data.expiry_date,
            created_at=self._now(),
        )
        self._subscriptions.add(subscription)
        logger.info("Subscription %s added: %s, %s", subscription.id, subscription.type, subscription.cost)
        return subscription

    def delete_subscription(self, subscription_id: str) -> None:
        """Raises SubscriptionNotFoundError when nothing was deleted."""
        try:
            sid = SubscriptionId.from_string(subscription_id)
        except ValueError:
            raise ValidationError("Invalid subscription ID format") from None
        if not self._subscriptions.delete(sid):
            raise SubscriptionNotFoundError(subscription_id)
        logger.info("Subscription %s deleted", sid)

    def list_salaries(self) -> list[Salary]:
        return self._salaries.list_all()

    def create_salary(self, data: CreateSalaryInput) -> Salary:
        salary = Salary(
            id=SalaryId(self._id_factory()),
            employee_name=data.employee_name.strip(),
            amount=Money(quantize(data.amount)),
            payment_date=data.payment_date,
            notes=data.notes.strip(),
            created_at=self._now(),
        )
        self._salaries.add(salary)
        logger.info("Salary %s recorded for %s on %s", salary.id, salary.employee_name, salary.payment_date)
        return salary

    def delete_salary(self, salary_id: str) -> None:
        try:
            sid = SalaryId.from_string(salary_id)
        except ValueError:
            raise ValidationError("Invalid salary ID format") from None
        if not self._salaries.delete(sid):
            raise SalaryNotFoundError(salary_id)
        logger.info("Salary %s deleted", sid)

    def summary(self) -> ManagementSummary:
        """Totals for the owner overview as of today in the café time zone.

        Monthly burn sums the cost of every subscription that has not expired.
        Costs are taken per cycle as entered.
        """
        today = self.today()
        live = [s for s in self._subscriptions.list_all() if s.status_on(today) is not SubscriptionStatus.EXPIRED]
        salaries = self._salaries.list_all()
        this_month = [
            s for s in salaries
            if (s.payment_date.year, s.payment_date.month) == (today.year, today.month)
        ]
        return ManagementSummary(
            today=today,
            monthly_burn=sum((s.cost for s in live), Money.zero()),
            expiring_count=sum(1 for s in live if s.status_on(today) is SubscriptionStatus.EXPIRING),
            salaries_this_month=sum((s.amount for s in this_month), Money.zero()),
            last_salary_date=max((s.payment_date for s in salaries), default=None),
        )
