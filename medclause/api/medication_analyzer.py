"""
Medication Analyzer page - medication safety by name or from a prescription image.
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..models import MedicationRequest
from ..pages import MEDICATION_ANALYZER, PageRegistry, PageView
from ..services import AnalysisService
from ..state import AppStateStore
from .deps import (
    IMAGE_TYPES, export_page, get_analysis_service, get_pages, get_state_store, read_upload, require,
    run_page_action,
)

router = APIRouter(prefix="/medication-analyzer", tags=["medication-analyzer"])


@router.get("", response_model=PageView)
async def view_medication_analyzer(pages: PageRegistry = Depends(get_pages)):
    return pages.navigate(MEDICATION_ANALYZER).view()


@router.post("/analyze", response_model=PageView)
async def analyze_medication(
    body: MedicationRequest,
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Analyze a medication by name.

    Args:
        body: Medication name, optional patient context and the concise flag
    """
    page = pages.get(MEDICATION_ANALYZER)
    name = require(body.medication_name, "Please enter a medication name.")

    async def action():
        result = await service.analyze_medication(name, body.patient_info, body.concise)
        await store.add_activity(f"Analyzed medication: {name}")
        return result

    await run_page_action(page, action)
    return page.view()


@router.post("/prescription", response_model=PageView)
async def analyze_prescription(
    image: Optional[UploadFile] = File(None),
    concise: bool = Form(default=False),
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    page = pages.get(MEDICATION_ANALYZER)
    data = await read_upload(image, IMAGE_TYPES, "Please upload a prescription image.")

    async def action():
        result = await service.analyze_prescription_image(data, concise)
        await store.add_activity(f"Analyzed prescription image: {image.filename}")
        return result

    await run_page_action(page, action)
    return page.view()


@router.get("/export")
async def export_medication_analysis(pages: PageRegistry = Depends(get_pages)):
    return export_page(pages.get(MEDICATION_ANALYZER))
