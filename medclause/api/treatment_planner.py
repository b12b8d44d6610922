"""
Treatment Planner page - structured plans from patient details and symptoms.
"""

from fastapi import APIRouter, Depends

from ..models import TreatmentPlanRequest
from ..pages import TREATMENT_PLANNER, PageRegistry, PageView
from ..services import AnalysisService
from ..state import AppStateStore
from .deps import export_page, get_analysis_service, get_pages, get_state_store, require, run_page_action

router = APIRouter(prefix="/treatment-planner", tags=["treatment-planner"])


@router.get("", response_model=PageView)
async def view_treatment_planner(pages: PageRegistry = Depends(get_pages)):
    return pages.navigate(TREATMENT_PLANNER).view()


@router.post("/generate", response_model=PageView)
async def generate_plan(
    body: TreatmentPlanRequest,
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Generate a treatment plan.

    Patient information and symptoms are required; medical history is optional.
    """
    page = pages.get(TREATMENT_PLANNER)
    patient_info = require(body.patient_info, "Please provide patient information.")
    symptoms = require(body.symptoms, "Please describe the symptoms.")

    async def action():
        plan = await service.generate_treatment_plan(patient_info, symptoms, body.medical_history, body.concise)
        await store.add_activity(f"Generated treatment plan for symptoms: {symptoms[:30]}...")
        return plan

    await run_page_action(page, action)
    return page.view()


@router.get("/export")
async def export_treatment_plan(pages: PageRegistry = Depends(get_pages)):
    return export_page(pages.get(TREATMENT_PLANNER))
