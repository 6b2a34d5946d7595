from sqlalchemy import Column, String, Float

from .base import Base


class StoredBuyer(Base):
    __tablename__ = "buyers"

    id = Column(String, primary_key=True)
    name = Column(String)
    type = Column(String)
    distance_band = Column(String)
    capacity_fit = Column(String)
    trust_score = Column(Float)
    contact_method = Column(String)
