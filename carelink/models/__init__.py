# carelink/models/__init__.py

from .user import User
from .medication import Medication, MedicationLog
from .health_metric import HealthMetric
from .emergency_contact import EmergencyContact
from .alert import AlertHistory
from .group import Group, GroupMember, Announcement, Comment
from .facility import Facility, Review, ReviewReport
from .goal import Goal, GoalLog
from .exercise import ExerciseCategory, Exercise, ExerciseStep, ExercisePreference, ExerciseLog
from .chat import Conversation, Message
from .caregiver import CaregiverRelationship, CaregiverNote
from .appointment import Doctor, Appointment

__all__ = [
    "User",
    "Medication",
    "MedicationLog",
    "HealthMetric",
    "EmergencyContact",
    "AlertHistory",
    "Group",
    "GroupMember",
    "Announcement",
    "Comment",
    "Facility",
    "Review",
    "ReviewReport",
    "Goal",
    "GoalLog",
    "ExerciseCategory",
    "Exercise",
    "ExerciseStep",
    "ExercisePreference",
    "ExerciseLog",
    "Conversation",
    "Message",
    "CaregiverRelationship",
    "CaregiverNote",
    "Doctor",
    "Appointment"
]
