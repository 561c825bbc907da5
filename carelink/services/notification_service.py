"""
Emergency-contact notification dispatch
"""
from abc import ABC, abstractmethod
from typing import List
import logging

from carelink.models.emergency_contact import EmergencyContact
from carelink.models.user import User

logger = logging.getLogger(__name__)


class NotificationDispatcher(ABC):
    """Delivers an alert to a user's emergency contacts"""

    @abstractmethod
    def dispatch(self, user: User, alert: dict, contacts: List[EmergencyContact]) -> int:
        """Send ``alert`` to ``contacts`` and return how many were notified"""


class LoggingDispatcher(NotificationDispatcher):
    """Records the notification in the application log instead of sending it"""

    def dispatch(self, user: User, alert: dict, contacts: List[EmergencyContact]) -> int:
        for contact in contacts:
            logger.warning(
                f"🚨 {alert['severity'].upper()} {alert['type']} alert for {user.name} "
                f"-> {contact.name} ({contact.relationship_type}, {contact.phone}): {alert['message']}"
            )
        return len(contacts)


def get_dispatcher() -> NotificationDispatcher:
    return LoggingDispatcher()
