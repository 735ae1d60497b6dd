"""Notification service."""

import logging
from typing import Optional

from balancebook.domain.entities import Notification, NotificationType
from balancebook.domain.errors import ValidationError
from balancebook.domain.ownership import OwnedService

logger = logging.getLogger(__name__)


class NotificationService(OwnedService):
    """Service for reading and acknowledging notifications."""

    kind = "Notification"

    def create_notification(
        self,
        title: str,
        message: str,
        type: NotificationType | str,
        related_id: Optional[str] = None,
        related_type: Optional[str] = None,
    ) -> int:
        """Create an unread notification for the owner.

        Used by other services; users never create notifications directly.

        Returns:
            Notification ID
        """
        try:
            notification_type = NotificationType(type)
        except ValueError:
            raise ValidationError(f"Invalid notification type '{type}'")

        notification_id = self.db.create_notification(
            owner_id=self.owner_id,
            title=title,
            message=message,
            type=notification_type,
            related_id=related_id,
            related_type=related_type,
        )
        logger.info("Created %s notification %s", notification_type.value, notification_id)
        return notification_id

    def get_notification(self, notification_id: int) -> Notification:
        return self._owned(self.kind, notification_id, self.db.get_notification(notification_id))

    def list_notifications(
        self, is_read: Optional[bool] = None, limit: Optional[int] = None
    ) -> list[Notification]:
        """List notifications newest first.

        Args:
            is_read: If given, only read (True) or unread (False) notifications
            limit: Optional maximum number of notifications to return
        """
        if limit is not None and limit < 0:
            raise ValidationError(f"Limit must not be negative (got {limit})")
        return self.db.list_notifications(self.owner_id, is_read=is_read, limit=limit)

    def mark_as_read(self, notification_id: int) -> int:
        with self.db.transaction():
            self.get_notification(notification_id)
            self.db.update_notification(notification_id, is_read=True)
        return notification_id

    def mark_all_as_read(self) -> int:
        """Mark every unread notification as read.

        Returns:
            Number of notifications that were unread
        """
        with self.db.transaction():
            unread = self.db.list_notifications(self.owner_id, is_read=False)
            for notification in unread:
                self.db.update_notification(notification.id, is_read=True)

        logger.info("Marked %d notifications as read", len(unread))
        return len(unread)

    def get_unread_count(self) -> int:
        return len(self.db.list_notifications(self.owner_id, is_read=False))

    def delete_notification(self, notification_id: int) -> int:
        with self.db.transaction():
            self.get_notification(notification_id)
            self.db.delete_notification(notification_id)
        return notification_id
