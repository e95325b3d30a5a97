# showlog/models/venue.py
from sqlalchemy import Column, Float, Integer, String, text
from sqlalchemy.orm import relationship

from showlog.db.base_class import Base


class Venue(Base):
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    # Derived from name on every write; the upsert key for imports
    slug = Column(String, nullable=False, unique=True, index=True)
    city = Column(String, nullable=False)
    address = Column(String, nullable=True)
    latitude = Column(Float, nullable=False, server_default=text("0"), default=0.0)
    longitude = Column(Float, nullable=False, server_default=text("0"), default=0.0)

    # Concerts own the foreign key; deleting a referenced venue is refused.
    concerts = relationship(
        "Concert",
        back_populates="venue",
        passive_deletes="all",
        order_by="[Concert.date.desc(), Concert.id.desc()]",
    )
