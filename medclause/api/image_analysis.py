"""
Image Analysis page - medical images (X-ray, MRI, CT, pathology slides).
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..pages import IMAGE_ANALYSIS, PageRegistry, PageView
from ..services import AnalysisService
from ..state import AppStateStore
from .deps import (
    IMAGE_TYPES, export_page, get_analysis_service, get_pages, get_state_store, read_upload, run_page_action,
)

router = APIRouter(prefix="/image-analysis", tags=["image-analysis"])


@router.get("", response_model=PageView)
async def view_image_analysis(pages: PageRegistry = Depends(get_pages)):
    return pages.navigate(IMAGE_ANALYSIS).view()


@router.post("/analyze", response_model=PageView)
async def analyze_image(
    image: Optional[UploadFile] = File(None),
    prompt: str = Form(default=""),
    concise: bool = Form(default=False),
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Analyze an uploaded medical image.

    Args:
        image: Image file (JPEG, PNG, WebP or GIF)
        prompt: Optional custom instruction for the analysis
        concise: Shorten the analysis to the concise word budget
    """
    page = pages.get(IMAGE_ANALYSIS)
    data = await read_upload(image, IMAGE_TYPES, "Please upload an image before analyzing.")

    async def action():
        result = await service.analyze_medical_image(data, prompt, concise)
        await store.add_activity(f"Analyzed medical image: {image.filename}")
        return result

    await run_page_action(page, action)
    return page.view()


@router.get("/export")
async def export_image_analysis(pages: PageRegistry = Depends(get_pages)):
    return export_page(pages.get(IMAGE_ANALYSIS))
