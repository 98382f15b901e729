from sqlalchemy import Column, Integer, Text
from talentflow.database import Base


class TimelineEntry(Base):
    __tablename__ = "candidate_timeline"

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(Integer, nullable=False)
    stage = Column(Text, nullable=False)
    timestamp = Column(Text, nullable=False)
    notes = Column(Text)
