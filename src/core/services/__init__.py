"""
Business services for Plann.er.

- notification_composer.py: confirmation email subject/body rendering
- trip_lifecycle.py: trip creation and confirmation workflow
- migration.py: Alembic upgrade entry point
"""

from core.services.notification_composer import compose_trip_notification
from core.services.trip_lifecycle import TripLifecycle

__all__ = ["TripLifecycle", "compose_trip_notification"]
