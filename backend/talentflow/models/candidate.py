from sqlalchemy import Column, Integer, Text
from talentflow.database import Base


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    stage = Column(Text, nullable=False)
    job_id = Column(Integer, nullable=False)
    created_at = Column(Text, nullable=False)
