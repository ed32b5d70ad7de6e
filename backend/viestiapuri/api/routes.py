"""
routes.py
----------
Backendin API-päätepisteet:
- POST   /api/chat            (tekoälychat)
- POST   /api/feedback        (palautteen lähetys)
- GET    /api/feedback        (kaikki palautteet)
- DELETE /api/feedback/{id}   (palautteen poisto)

Virheet käsitellään main.py:n exception handlereissa, joten reitit
palauttavat vain onnistuneet vastaukset.
"""

import logging

from fastapi import APIRouter, Depends, Request

from viestiapuri.models.schemas import ChatRequest, FeedbackCreate
from viestiapuri.services.chat_service import ChatService
from viestiapuri.services.feedback_service import FeedbackService, client_ip_from

logger = logging.getLogger(__name__)

# Alustetaan päärouter
router = APIRouter(prefix="/api")


def get_feedback_service(request: Request) -> FeedbackService:
    return request.app.state.feedback_service


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


# --- TEKOÄLYCHAT ---
@router.post("/chat")
async def chat(data: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """Välittää viestin tekoälylle ja palauttaa sen vastauksen."""
    logger.info("Vastaanotettu chat-pyyntö: %s", data.message)
    reply = await service.converse(data.message)
    logger.info("Lähetetään tekoälyn vastaus (%s merkkiä)", len(reply["message"]))
    return {"success": True, "data": reply}


# --- PALAUTEREITIT ---
@router.post("/feedback")
def create_feedback(
    data: FeedbackCreate,
    request: Request,
    service: FeedbackService = Depends(get_feedback_service),
):
    """Tallentaa palautteen tietokantaan."""
    logger.info("Vastaanotettu palaute: %s", data.model_dump())
    client_ip = client_ip_from(
        request.headers.get("x-forwarded-for"),
        request.client.host if request.client else None,
    )
    service.submit(data.name, data.email, data.message, client_ip)
    return {"success": True, "message": "Palaute lähetetty"}


@router.get("/feedback")
def list_feedback(service: FeedbackService = Depends(get_feedback_service)):
    """Palauttaa kaikki tallennetut palautteet, uusin ensin."""
    logger.info("Vastaanotettu palautteiden hakupyyntö")
    records = service.list()
    return {"success": True, "data": [record.to_json() for record in records]}


@router.delete("/feedback/{feedback_id}")
def delete_feedback(
    feedback_id: str, service: FeedbackService = Depends(get_feedback_service)
):
    """Poistaa palautteen. Puuttuvan id:n poisto onnistuu myös."""
    service.remove(feedback_id)
    return {"success": True, "message": "Palaute poistettu"}
