"""
feedback_service.py
--------------------
Palauteseinän logiikka: kenttien tarkistus ja asiakkaan IP-osoite.
"""

import logging
from typing import Any

from viestiapuri.database.connection import FeedbackStore
from viestiapuri.errors import ValidationError
from viestiapuri.models.schemas import FeedbackRecord

logger = logging.getLogger(__name__)

IPV4_MAPPED_PREFIX = "::ffff:"


def client_ip_from(forwarded_for: str | None, peer: str | None) -> str:
    """
    Päättelee pyynnön lähettäjän IP-osoitteen.

    1) X-Forwarded-For -otsakkeen ensimmäinen osoite, jos otsake on annettu
    2) muuten yhteyden vastapään osoite ilman ::ffff:-etuliitettä

    Osoitteen muotoa ei tarkisteta.
    """
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if not peer:
        return "unknown"
    return peer.replace(IPV4_MAPPED_PREFIX, "")


class FeedbackService:
    def __init__(self, store: FeedbackStore):
        self.store = store

    def submit(self, name: Any, email: Any, message: Any, client_ip: str) -> None:
        """Tallentaa palautteen. Kenttien ainoa tarkistus on, että ne on annettu."""
        if not name or not email or not message:
            raise ValidationError("Täytä kaikki pakolliset kentät")

        feedback_id = self.store.insert(str(name), str(email), str(message), client_ip)
        logger.info("Palaute %s tallennettu (ip=%s)", feedback_id, client_ip)

    def list(self) -> list[FeedbackRecord]:
        return self.store.list_all()

    def remove(self, feedback_id: str) -> None:
        # Ei-numeerinen id ei voi osua yhteenkään riviin: onnistunut no-op
        try:
            numeric_id = int(feedback_id)
        except ValueError:
            logger.info("Palautetta %r ei ole, ei poistettavaa", feedback_id)
            return
        self.store.delete_by_id(numeric_id)
        logger.info("Palaute %s poistettu", numeric_id)
