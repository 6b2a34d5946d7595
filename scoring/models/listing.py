from sqlalchemy import Column, String, Float, Text, DateTime

from .base import Base


class StoredListing(Base):
    __tablename__ = "exchange_listings"

    id = Column(String, primary_key=True)
    type = Column(String)
    mode = Column(String)
    category = Column(String)
    title = Column(String)
    quantity = Column(Float)
    unit = Column(String)
    location_label = Column(String)
    distance_band = Column(String)
    urgency = Column(String)
    trust = Column(String)
    status = Column(String)
    hub_name = Column(String)
    notes = Column(Text)
    created_at = Column(DateTime)
