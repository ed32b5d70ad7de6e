"""
schemas.py
-----------
Pydantic-mallit pyynnöille ja vastauksille.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FeedbackRecord(BaseModel):
    """Yksi palaute API-vastauksessa (clientIP, createdAt)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    message: str
    client_ip: str = Field(serialization_alias="clientIP")
    created_at: datetime = Field(serialization_alias="createdAt")

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class FeedbackCreate(BaseModel):
    # Kentät otetaan vastaan sellaisenaan; ainoa tarkistus on FeedbackService.submitin
    # olemassaolotarkistus (puuttuva kenttä on 400 eikä FastAPI:n 422)
    name: Any = None
    email: Any = None
    message: Any = None


class ChatRequest(BaseModel):
    # Välitetään tekoälylle sellaisenaan
    message: Any = None
