"""
connection.py
--------------
Palautetaulun tallennuskerros.

FeedbackStore omistaa SQLModel-moottorin. Sovellus luo yhden instanssin
käynnistyksessä ja sulkee sen sammutuksessa (ks. main.lifespan).
"""

import logging

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine, select

from viestiapuri.errors import StorageError
from viestiapuri.models.feedback import Feedback
from viestiapuri.models.schemas import FeedbackRecord

logger = logging.getLogger(__name__)


class FeedbackStore:
    def __init__(self, database_url: str, echo: bool = False):
        connect_args = {}
        if database_url.startswith("sqlite"):
            # FastAPI ajaa synkroniset reitit säiepoolissa
            connect_args["check_same_thread"] = False
        self.engine = create_engine(database_url, echo=echo, connect_args=connect_args)

    def init_db(self) -> None:
        """Luo taulut, jos niitä ei vielä ole."""
        try:
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.exception("Tietokannan alustus epäonnistui")
            raise StorageError("Tietokannan alustus epäonnistui", detail=str(e)) from e
        logger.info("Tietokanta alustettu: %s", self.engine.url)

    def insert(self, name: str, email: str, message: str, client_ip: str) -> int:
        try:
            with Session(self.engine) as session:
                feedback = Feedback(
                    name=name, email=email, message=message, client_ip=client_ip
                )
                session.add(feedback)
                session.commit()
                session.refresh(feedback)
                return feedback.id
        except SQLAlchemyError as e:
            logger.exception("Tietokannan insert-virhe")
            raise StorageError("Palautteen lähettäminen epäonnistui", detail=str(e)) from e

    def list_all(self) -> list[FeedbackRecord]:
        """Kaikki palautteet uusimmasta vanhimpaan."""
        statement = select(Feedback).order_by(
            Feedback.created_at.desc(), Feedback.id.desc()
        )
        try:
            with Session(self.engine) as session:
                rows = session.exec(statement).all()
                return [FeedbackRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            logger.exception("Tietokantakysely epäonnistui")
            raise StorageError("Palautteiden hakeminen epäonnistui", detail=str(e)) from e

    def delete_by_id(self, feedback_id: int) -> None:
        # Ei olemassaolotarkistusta: puuttuvan id:n poisto on onnistunut no-op
        try:
            with Session(self.engine) as session:
                session.exec(delete(Feedback).where(Feedback.id == feedback_id))
                session.commit()
        except SQLAlchemyError as e:
            logger.exception("Palautteen %s poisto epäonnistui", feedback_id)
            raise StorageError("Palautteen poistaminen epäonnistui", detail=str(e)) from e

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Tietokantayhteys suljettu")
