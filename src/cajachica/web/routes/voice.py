"""Voice/text assistant endpoint."""

from fastapi import APIRouter, Depends

from cajachica.domain.assistant import AssistantService
from cajachica.web.dependencies import get_assistant_service, get_current_user_id
from cajachica.web.schemas import VoiceRequest
from cajachica.web.serializers import draft_json

router = APIRouter(prefix="/voice", tags=["Voz"])


@router.post("/process")
def process_text(
    body: VoiceRequest,
    user_id: str = Depends(get_current_user_id),
    service: AssistantService = Depends(get_assistant_service),
):
    """Interpret dictated text as a draft transaction. Nothing is saved."""
    return draft_json(service.interpret(user_id, body.text or ""))
