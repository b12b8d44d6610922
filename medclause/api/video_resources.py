"""
Video Resources page - search, recommendations and AI video summaries.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from ..models import VideoPageResult, VideoSearchRequest, VideoSummaryRequest
from ..pages import VIDEO_RESOURCES, PageController, PageRegistry, PageView
from ..services import AnalysisService
from ..state import AppStateStore
from .deps import get_analysis_service, get_pages, get_state_store, require, run_page_action

router = APIRouter(prefix="/video-resources", tags=["video-resources"])


def _current(page: PageController) -> VideoPageResult:
    if isinstance(page.result, VideoPageResult):
        return page.result
    return VideoPageResult()


@router.get("", response_model=PageView)
async def view_video_resources(pages: PageRegistry = Depends(get_pages)):
    return pages.navigate(VIDEO_RESOURCES).view()


@router.post("/search", response_model=PageView)
async def search_videos(
    body: VideoSearchRequest,
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Search for educational videos by keyword."""
    page = pages.get(VIDEO_RESOURCES)
    query = require(body.query, "Please enter a search term.")

    async def action():
        videos = await service.search_videos(query)
        await store.add_activity(f"Searched for medical videos: {query}")
        return VideoPageResult(videos=videos)

    await run_page_action(page, action)
    return page.view()


@router.post("/recommend", response_model=PageView)
async def recommend_videos(
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    """Recommend videos from a keyword in the recent activity log."""
    page = pages.get(VIDEO_RESOURCES)
    activities = store.activities
    if not activities:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No recent activities found. Try searching for specific topics instead."
        )

    async def action():
        videos = await service.recommend_videos(activities)
        return VideoPageResult(videos=videos)

    await run_page_action(page, action)
    return page.view()


@router.post("/summarize", response_model=PageView)
async def summarize_video(
    body: VideoSummaryRequest,
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Summarize a video from the current results.

    The result list is kept so the user can pick another video.
    """
    page = pages.get(VIDEO_RESOURCES)
    current = _current(page)
    selected = next((video for video in current.videos if video.id == body.video_id), None)

    async def action():
        summary = await service.summarize_video(body.video_id, body.title, body.concise)
        await store.add_activity(f"Watched medical video: {body.title}")
        return current.model_copy(update={"selected": selected, "summary": summary})

    await run_page_action(page, action)
    return page.view()


@router.get("/export")
async def export_video_summary(pages: PageRegistry = Depends(get_pages)):
    page = pages.get(VIDEO_RESOURCES)
    result = _current(page)
    if not result.summary:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nothing to export yet.")

    heading = result.selected.title if result.selected else "Video summary"
    return PlainTextResponse(
        f"{heading}\n\n{result.summary}",
        headers={"Content-Disposition": f'attachment; filename="{page.export_filename}"'},
    )
