"""
Timeline data model and the JSON document loader.
"""

from .models import Lane, TimePeriod, TimelineDocument
from .timeline_loader import TimelineLoader

__all__ = [
    'Lane',
    'TimePeriod',
    'TimelineDocument',
    'TimelineLoader'
]
