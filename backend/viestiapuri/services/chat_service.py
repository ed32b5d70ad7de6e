"""
chat_service.py
----------------
Välittää käyttäjän viestin ulkoiselle tekstigenerointi-API:lle (DashScope)
ja palauttaa vastauksen tekstin.

Toteutus:
- yksi synkroninen pyyntö per viesti, ei striimausta
- ei uudelleenyrityksiä eikä aikakatkaisua
- vastausteksti ensisijaisesti choices[0].message.content, toissijaisesti choices[0].text
"""

import json
import logging
from datetime import datetime, timezone

import httpx

from viestiapuri.config import Settings
from viestiapuri.errors import UpstreamError, UpstreamFormatError

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "Olet ystävällinen tekoälyavustaja, jonka nimi on Apuri. "
    "Vastaat kysymyksiin lyhyesti ja ystävällisesti."
)

# Kiinteät generointiparametrit
GENERATION_PARAMETERS = {
    "result_format": "message",
    "temperature": 0.7,
    "top_p": 0.8,
    "top_k": 50,
    "seed": 1234,
    "max_tokens": 1500,
    "stop": [],
    "repetition_penalty": 1.1,
}


def build_payload(model: str, user_message: str | None) -> dict:
    return {
        "model": model,
        "input": {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_message},
            ]
        },
        "parameters": GENERATION_PARAMETERS,
    }


def extract_reply_text(data: dict) -> str:
    """Poimii vastaustekstin ensimmäisestä choicesta."""
    output = data.get("output") if isinstance(data, dict) else None
    choices = output.get("choices") if isinstance(output, dict) else None
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        raise UpstreamFormatError(
            "Tekoälypalvelu palautti tuntemattoman vastauksen",
            detail="Invalid API response format",
        )

    choice = choices[0]
    message = choice.get("message")
    if isinstance(message, dict) and message.get("content"):
        return message["content"]
    if choice.get("text"):
        return choice["text"]

    raise UpstreamFormatError(
        "Tekoälypalvelu palautti tuntemattoman vastauksen",
        detail="AI response contained no message content or text",
    )


class ChatService:
    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.settings = settings
        self.http_client = http_client

    async def converse(self, user_message: str | None) -> dict:
        """Lähettää viestin ja palauttaa {"message", "timestamp"}."""
        headers = {
            "Authorization": f"Bearer {self.settings.dashscope_api_key}",
            "Content-Type": "application/json",
        }
        payload = build_payload(self.settings.dashscope_model, user_message)

        try:
            response = await self.http_client.post(
                self.settings.dashscope_url, headers=headers, json=payload
            )
        except httpx.HTTPError as e:
            logger.error("Yhteys tekoälypalveluun epäonnistui: %s", e)
            raise UpstreamError(
                "Tekoälypalvelu ei ole tällä hetkellä käytettävissä, yritä myöhemmin uudelleen",
                detail=str(e) or type(e).__name__,
            ) from e

        if not response.is_success:
            logger.error(
                "Tekoälypalvelu vastasi statuksella %s: %s",
                response.status_code, response.text[:500],
            )
            raise UpstreamError(
                "Tekoälypalvelu ei ole tällä hetkellä käytettävissä, yritä myöhemmin uudelleen",
                detail=f"API responded with status {response.status_code}: {response.reason_phrase}",
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFormatError(
                "Tekoälypalvelu palautti tuntemattoman vastauksen",
                detail="Invalid API response format",
            ) from e

        logger.debug("Tekoälyn vastaus: %s", json.dumps(data, ensure_ascii=False))

        content = extract_reply_text(data)
        return {
            "message": content,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
