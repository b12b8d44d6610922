"""
Health Reports page - lab results, scan reports and discharge summaries.
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..pages import HEALTH_REPORTS, PageRegistry, PageView
from ..services import AnalysisService
from ..state import AppStateStore
from .deps import (
    REPORT_TYPES, export_page, get_analysis_service, get_pages, get_state_store, read_upload, run_page_action,
)

router = APIRouter(prefix="/health-reports", tags=["health-reports"])


@router.get("", response_model=PageView)
async def view_health_reports(pages: PageRegistry = Depends(get_pages)):
    return pages.navigate(HEALTH_REPORTS).view()


@router.post("/analyze", response_model=PageView)
async def analyze_report(
    report: Optional[UploadFile] = File(None),
    concise: bool = Form(default=False),
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Summarize an uploaded health report.

    Args:
        report: Report as an image, PDF or plain text file
        concise: Shorten the summary to the concise word budget
    """
    page = pages.get(HEALTH_REPORTS)
    data = await read_upload(report, REPORT_TYPES, "Please upload a health report before analyzing.")

    async def action():
        result = await service.analyze_health_report(data, concise)
        await store.add_activity(f"Analyzed health report: {report.filename}")
        return result

    await run_page_action(page, action)
    return page.view()


@router.get("/export")
async def export_health_report(pages: PageRegistry = Depends(get_pages)):
    return export_page(pages.get(HEALTH_REPORTS))
