"""Pages module - per-page state machines."""

from .controller import (
    PageController, PageRegistry, PageStatus, PageView, PageBusyError, create_page_registry,
    IMAGE_ANALYSIS, CHAT_ASSISTANT, TREATMENT_PLANNER, MEDICATION_ANALYZER, VIDEO_RESOURCES, HEALTH_REPORTS,
)

__all__ = [
    'PageController', 'PageRegistry', 'PageStatus', 'PageView', 'PageBusyError', 'create_page_registry',
    'IMAGE_ANALYSIS', 'CHAT_ASSISTANT', 'TREATMENT_PLANNER', 'MEDICATION_ANALYZER', 'VIDEO_RESOURCES',
    'HEALTH_REPORTS',
]
