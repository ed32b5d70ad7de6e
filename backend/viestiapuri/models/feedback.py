from datetime import datetime

from sqlalchemy import Column, DateTime, text
from sqlmodel import SQLModel, Field

# SQLite asettaa ajan INSERTin hetkellä (UTC, naiivi). %f antaa millisekunnit,
# perään lisätyt nollat täydentävät SQLAlchemyn mikrosekuntimuodon.
CREATED_AT_DEFAULT = text("(strftime('%Y-%m-%d %H:%M:%f000', 'now'))")


class Feedback(SQLModel, table=True):
    __tablename__ = "feedback"
    # AUTOINCREMENT: poistettujen rivien id:itä ei käytetä uudelleen
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str
    message: str
    client_ip: str
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=False),
            nullable=False,
            index=True,
            server_default=CREATED_AT_DEFAULT,
        ),
    )
