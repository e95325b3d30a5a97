# showlog/models/concert.py
from sqlalchemy import JSON, Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from showlog.db.base_class import Base

CONCERT_TYPES = ("concert", "festival")


class Concert(Base):
    __tablename__ = "concerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Calendar day of the show, UTC
    date = Column(Date, nullable=False, index=True)
    artist = Column(String, nullable=False)
    artist_slug = Column(String, nullable=False, index=True)
    venue_id = Column(
        Integer,
        ForeignKey("venues.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    type = Column(String, nullable=False, default="concert", server_default="concert")
    event_name = Column(String, nullable=True)
    setlist = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    # Media: one primary image plus an ordered gallery of URLs
    image_url = Column(String, nullable=True)
    gallery = Column(JSON, nullable=False, default=list)

    venue = relationship("Venue", back_populates="concerts")
