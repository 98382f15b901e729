from sqlalchemy import JSON, Column, Integer, Text
from talentflow.database import Base


class Assessment(Base):
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, nullable=False)
    title = Column(Text, nullable=False)
    sections = Column(JSON, nullable=False, default=list)
    created_at = Column(Text, nullable=False)


class Submission(Base):
    __tablename__ = "assessment_responses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    assessment_id = Column(Integer, nullable=False)
    candidate_id = Column(Integer, nullable=False)
    responses = Column(JSON, nullable=False, default=dict)
    candidate_info = Column(JSON)
    submitted_at = Column(Text, nullable=False)
