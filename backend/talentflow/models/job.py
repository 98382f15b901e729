from sqlalchemy import JSON, Column, Integer, Text
from talentflow.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    status = Column(Text, nullable=False, default="active")
    tags = Column(JSON, nullable=False, default=list)
    order = Column("order", Integer, nullable=False)
    created_at = Column(Text, nullable=False)
