"""Financial goal service."""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from balancebook.domain.entities import (
    FinancialGoal,
    GoalProgress,
    GoalStatus,
    NotificationType,
)
from balancebook.domain.errors import ValidationError
from balancebook.domain.notification import NotificationService
from balancebook.domain.ownership import OwnedService
from balancebook.domain.validation import coerce_date, validate_amount

logger = logging.getLogger(__name__)

GOAL_REACHED_TITLE = "Goal reached!"


def _validate_goal_status(value: GoalStatus | str) -> GoalStatus:
    try:
        return GoalStatus(value)
    except ValueError:
        raise ValidationError(
            f"Invalid goal status '{value}' (expected active, completed or paused)"
        )


def progress_percentage(current_amount: int, target_amount: int) -> int:
    """Return progress as a whole percentage, rounded half up."""
    if target_amount <= 0:
        return 0
    ratio = Decimal(current_amount) * 100 / Decimal(target_amount)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class GoalService(OwnedService):
    """Service for managing savings goals."""

    kind = "Goal"

    def __init__(self, db, owner_id, today=None):
        super().__init__(db, owner_id, today=today)
        self.notifications = NotificationService(db, owner_id, today=today)

    def create_goal(
        self,
        title: str,
        target_amount: int,
        target_date: date | str,
        category: str,
        description: Optional[str] = None,
    ) -> int:
        """Create an active goal with no progress.

        Args:
            title: Goal title
            target_amount: Amount to reach in cents, greater than zero
            target_date: Date the goal should be reached by
            category: Free-form category
            description: Optional description

        Returns:
            Goal ID

        Raises:
            ValidationError: If the title, amount or date is invalid
        """
        if not title or not title.strip():
            raise ValidationError("Goal title cannot be empty")
        validate_amount(target_amount, "Target amount")
        target = coerce_date(target_date, "target_date")
        if target is None:
            raise ValidationError("target_date is required")

        goal_id = self.db.create_goal(
            owner_id=self.owner_id,
            title=title.strip(),
            target_amount=target_amount,
            target_date=target,
            category=category,
            status=GoalStatus.ACTIVE,
            description=description,
        )
        logger.info("Created goal %s", goal_id)
        return goal_id

    def get_goal(self, goal_id: int) -> FinancialGoal:
        """Get one of the owner's goals."""
        return self._owned(self.kind, goal_id, self.db.get_goal(goal_id))

    def list_goals(self, status: Optional[GoalStatus | str] = None) -> list[FinancialGoal]:
        if status is not None:
            status = _validate_goal_status(status)
        return self.db.list_goals(self.owner_id, status=status)

    def update_goal(
        self,
        goal_id: int,
        title: Optional[str] = None,
        target_amount: Optional[int] = None,
        target_date: date | str | None = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Update goal details.

        Lowering the target below the saved amount clamps the saved amount to
        the new target and completes the goal, notifying on that transition.
        """
        if title is not None and not title.strip():
            raise ValidationError("Goal title cannot be empty")
        if target_amount is not None:
            validate_amount(target_amount, "Target amount")
        target = coerce_date(target_date, "target_date")

        fields = {}
        if title is not None:
            fields["title"] = title.strip()
        if target_amount is not None:
            fields["target_amount"] = target_amount
        if target is not None:
            fields["target_date"] = target
        if category is not None:
            fields["category"] = category
        if description is not None:
            fields["description"] = description

        with self.db.transaction():
            goal = self.get_goal(goal_id)
            if target_amount is not None and goal.current_amount >= target_amount:
                fields["current_amount"] = target_amount
                fields["status"] = GoalStatus.COMPLETED
            if fields:
                self.db.update_goal(goal_id, **fields)
            if fields.get("status") == GoalStatus.COMPLETED:
                self._notify_completed(goal, title=fields.get("title", goal.title))
        return goal_id

    def update_progress(self, goal_id: int, amount: int) -> int:
        """Set the saved amount of a goal.

        The amount is clamped to ``[0, target_amount]``. Reaching the target
        completes the goal, and a ``goal`` notification is created only on
        the transition into completed.

        Args:
            goal_id: Goal ID
            amount: New saved amount in cents

        Returns:
            Goal ID

        Raises:
            NotFoundError: If the goal is missing or belongs to another owner
            ValidationError: If the amount is not an integer
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError(f"Amount must be an integer number of cents (got {amount!r})")

        with self.db.transaction():
            goal = self.get_goal(goal_id)
            current = max(0, min(amount, goal.target_amount))
            status = goal.status
            if current >= goal.target_amount:
                status = GoalStatus.COMPLETED
            self.db.update_goal(goal_id, current_amount=current, status=status)
            if status == GoalStatus.COMPLETED:
                self._notify_completed(goal)

        return goal_id

    def _notify_completed(self, goal: FinancialGoal, title: Optional[str] = None) -> None:
        """Notify once, when ``goal`` (its state before the write) was not yet completed."""
        if goal.status == GoalStatus.COMPLETED:
            return
        self.notifications.create_notification(
            title=GOAL_REACHED_TITLE,
            message=f'Congratulations! You reached your goal "{title or goal.title}"',
            type=NotificationType.GOAL,
            related_id=str(goal.id),
            related_type="goal",
        )
        logger.info("Goal %s completed", goal.id)

    def change_status(self, goal_id: int, status: GoalStatus | str) -> int:
        """Set the status of a goal directly, e.g. to pause or resume it."""
        new_status = _validate_goal_status(status)
        with self.db.transaction():
            self.get_goal(goal_id)
            self.db.update_goal(goal_id, status=new_status)
        return goal_id

    def delete_goal(self, goal_id: int) -> int:
        with self.db.transaction():
            self.get_goal(goal_id)
            self.db.delete_goal(goal_id)
        return goal_id

    def get_progress(self, goal_id: int) -> GoalProgress:
        """Get a goal with its progress percentage and what is left.

        ``remaining_days`` is negative once the target date has passed.
        """
        goal = self.get_goal(goal_id)
        return GoalProgress(
            goal=goal,
            progress_percentage=progress_percentage(goal.current_amount, goal.target_amount),
            remaining_amount=goal.target_amount - goal.current_amount,
            remaining_days=(goal.target_date - self.today()).days,
        )
