from sqlalchemy import Column, String, Float, Text, DateTime

from .base import Base


class StoredDrop(Base):
    __tablename__ = "harvest_drops"

    id = Column(String, primary_key=True)
    crop_type = Column(String)
    crop_common_name = Column(String)
    window_start = Column(DateTime)
    window_end = Column(DateTime)
    quantity_min = Column(Float)
    quantity_max = Column(Float)
    unit = Column(String)
    location_label = Column(String)
    pickup_preference = Column(String)
    spoilage_risk = Column(String)
    status = Column(String)
    notes = Column(Text)
