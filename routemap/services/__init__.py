"""
Business logic services
"""

from routemap.services.routing_service import RoutingService
from routemap.services.timetable_service import TimetableService

__all__ = [
    "RoutingService",
    "TimetableService",
]
