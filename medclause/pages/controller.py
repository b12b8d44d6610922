"""
Page Controllers - per-page request state machines.

A page is idle until an action starts, loading while the adapter call is
in flight, and shows a result once it succeeds. A failed action records a
notification and returns the page to idle. Leaving a page discards its
result.
"""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from pydantic import BaseModel

from ..core.logging_config import ContextAdapter
from ..models import Notification

T = TypeVar("T")


class PageStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"


class PageBusyError(RuntimeError):
    """An action was triggered while the page was already loading."""


class PageView(BaseModel):
    page: str
    title: str
    status: PageStatus
    result: Any = None
    notification: Optional[Notification] = None


class PageController:
    """State of one feature page."""

    def __init__(self, name: str, title: str, export_filename: str, error_title: str = "Error"):
        self.name = name
        self.title = title
        self.export_filename = export_filename
        self.error_title = error_title
        self.status = PageStatus.IDLE
        self.result: Any = None
        self.notification: Optional[Notification] = None
        self.logger = ContextAdapter(logging.getLogger(__name__), {"page": name})

    async def run(self, action: Callable[[], Awaitable[T]]) -> T:
        """
        Run an adapter call under the loading state.

        Raises:
            PageBusyError: If another action is still loading
        """
        if self.status is PageStatus.LOADING:
            raise PageBusyError(f"{self.title} is already processing a request")

        self.status = PageStatus.LOADING
        self.notification = None
        self.logger.info(f"{self.title}: request started")
        try:
            result = await action()
        except Exception as e:
            self.status = PageStatus.IDLE
            self.notification = Notification(
                title=self.error_title, description=str(e), variant="destructive"
            )
            self.logger.warning(f"{self.title}: request failed: {e}")
            raise
        except BaseException:
            # cancelled; a page stuck in loading would refuse every later action
            self.status = PageStatus.IDLE
            self.logger.info(f"{self.title}: request cancelled")
            raise

        self.status = PageStatus.RESULT
        self.result = result
        self.logger.info(f"{self.title}: result ready")
        return result

    def notify(self, title: str, description: str, variant: str = "default") -> Notification:
        self.notification = Notification(title=title, description=description, variant=variant)
        return self.notification

    def reset(self) -> None:
        self.status = PageStatus.IDLE
        self.result = None
        self.notification = None

    def export_text(self) -> Optional[str]:
        """Plain-text export of the current result, or None when there is nothing to export."""
        if self.status is not PageStatus.RESULT or self.result is None:
            return None
        if isinstance(self.result, str):
            return self.result
        if isinstance(self.result, BaseModel):
            return self.result.model_dump_json(indent=2)
        if isinstance(self.result, list):
            return "\n\n".join(
                f"{item.role.title()}: {item.content}" if hasattr(item, "role") else str(item)
                for item in self.result
            )
        return str(self.result)

    def view(self) -> PageView:
        return PageView(
            page=self.name,
            title=self.title,
            status=self.status,
            result=self.result,
            notification=self.notification,
        )


class PageRegistry:
    """All feature pages; only the page being viewed keeps its result."""

    def __init__(self):
        self._pages: Dict[str, PageController] = {}

    def register(self, page: PageController) -> PageController:
        self._pages[page.name] = page
        return page

    def get(self, name: str) -> PageController:
        return self._pages[name]

    def __contains__(self, name: str) -> bool:
        return name in self._pages

    def names(self) -> List[str]:
        return list(self._pages)

    def navigate(self, name: str) -> Optional[PageController]:
        """Enter a route; every other page drops its result unless it is loading."""
        for page_name, page in self._pages.items():
            if page_name != name and page.status is not PageStatus.LOADING:
                page.reset()
        return self._pages.get(name)


IMAGE_ANALYSIS = "image-analysis"
CHAT_ASSISTANT = "chat-assistant"
TREATMENT_PLANNER = "treatment-planner"
MEDICATION_ANALYZER = "medication-analyzer"
VIDEO_RESOURCES = "video-resources"
HEALTH_REPORTS = "health-reports"


def create_page_registry() -> PageRegistry:
    registry = PageRegistry()
    registry.register(PageController(IMAGE_ANALYSIS, "Image Analysis", "medical-image-analysis.txt",
                                     error_title="Analysis failed"))
    registry.register(PageController(CHAT_ASSISTANT, "Medical Assistant", "chat-transcript.txt",
                                     error_title="Failed to get response"))
    registry.register(PageController(TREATMENT_PLANNER, "Treatment Planner", "treatment-plan.txt"))
    registry.register(PageController(MEDICATION_ANALYZER, "Medication Safety", "medication-analysis.txt"))
    registry.register(PageController(VIDEO_RESOURCES, "Video Resources", "video-summary.txt",
                                     error_title="Video request failed"))
    registry.register(PageController(HEALTH_REPORTS, "Health Reports", "health-report-analysis.txt"))
    return registry
