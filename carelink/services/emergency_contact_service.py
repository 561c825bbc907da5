"""
Emergency contact service
"""
from sqlalchemy.orm import Session
from typing import List
import logging

from carelink.core.exceptions import ForbiddenError, NotFoundError
from carelink.models.emergency_contact import EmergencyContact
from carelink.schemas.emergency_contact import EmergencyContactCreate
from carelink.validation.common import parse_payload

logger = logging.getLogger(__name__)


class EmergencyContactService:
    def __init__(self, db: Session):
        self.db = db

    def get_contacts(self, user_id: int) -> List[EmergencyContact]:
        """Contacts of a user, primary contact first"""
        return self.db.query(EmergencyContact).filter(
            EmergencyContact.user_id == user_id
        ).order_by(EmergencyContact.is_primary.desc(), EmergencyContact.name).all()

    def get_contact(self, contact_id: int, user_id: int) -> EmergencyContact:
        contact = self.db.query(EmergencyContact).filter(EmergencyContact.id == contact_id).first()
        if not contact:
            raise NotFoundError("Emergency contact not found")
        if contact.user_id != user_id:
            raise ForbiddenError("You are not authorized to access this contact")
        return contact

    def _clear_primary(self, user_id: int):
        self.db.query(EmergencyContact).filter(
            EmergencyContact.user_id == user_id,
            EmergencyContact.is_primary.is_(True)
        ).update({EmergencyContact.is_primary: False}, synchronize_session=False)

    def create_contact(self, user_id: int, payload: dict) -> EmergencyContact:
        data = parse_payload(EmergencyContactCreate, payload)

        if data.is_primary:
            self._clear_primary(user_id)

        contact = EmergencyContact(
            user_id=user_id,
            name=data.name,
            relationship_type=data.relationship,
            phone=data.phone,
            email=data.email,
            is_primary=data.is_primary,
            alert_on_missed_meds=data.alert_on_missed_meds,
        )
        self.db.add(contact)
        self.db.commit()
        self.db.refresh(contact)

        logger.info(f"Emergency contact added: {contact.name} (ID: {contact.id}, user: {user_id})")
        return contact

    def delete_contact(self, contact_id: int, user_id: int):
        contact = self.get_contact(contact_id, user_id)
        self.db.delete(contact)
        self.db.commit()

        logger.info(f"Emergency contact removed: ID {contact_id}")
