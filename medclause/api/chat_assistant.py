"""
Chat Assistant page - conversational health questions.
The transcript is page-local and is dropped when the user leaves the page.
"""

from fastapi import APIRouter, Depends

from ..models import ChatMessage, ChatRequest
from ..pages import CHAT_ASSISTANT, PageRegistry, PageView
from ..services import AnalysisService
from ..services.text_utils import shorten
from ..state import AppStateStore
from .deps import export_page, get_analysis_service, get_pages, get_state_store, require, run_page_action

router = APIRouter(prefix="/chat-assistant", tags=["chat-assistant"])

GREETING = (
    "Hello! I'm your AI medical assistant. How can I help you today? You can ask me about "
    "symptoms, medical conditions, preventive healthcare, or general health information."
)

EXAMPLE_QUESTIONS = [
    "What are the symptoms of Type 2 diabetes?",
    "How can I reduce high blood pressure naturally?",
    "What causes migraines?",
]


def _greeting() -> ChatMessage:
    return ChatMessage(role="assistant", content=GREETING)


@router.get("")
async def view_chat(pages: PageRegistry = Depends(get_pages)):
    page = pages.navigate(CHAT_ASSISTANT)
    if page.result is None:
        page.result = [_greeting()]
    return {"page": page.view(), "examples": EXAMPLE_QUESTIONS}


@router.post("/message", response_model=PageView)
async def send_message(
    body: ChatRequest,
    store: AppStateStore = Depends(get_state_store),
    pages: PageRegistry = Depends(get_pages),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Ask the assistant a question.

    The question joins the transcript immediately; the answer is appended
    when the adapter returns.
    """
    page = pages.get(CHAT_ASSISTANT)
    question = require(body.message, "Please type your health question.")
    if body.history is not None:
        history = list(body.history)
    else:
        history = list(page.result or [_greeting()])

    async def action():
        page.result = [*history, ChatMessage(role="user", content=question)]
        reply = await service.ask_health_question(question, history, body.concise)
        await store.add_activity(f"Asked medical assistant: {shorten(question, 50)}")
        return [*page.result, ChatMessage(role="assistant", content=reply)]

    await run_page_action(page, action)
    return page.view()


@router.get("/export")
async def export_chat(pages: PageRegistry = Depends(get_pages)):
    return export_page(pages.get(CHAT_ASSISTANT))
