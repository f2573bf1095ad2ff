from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Topic(Base):
    __tablename__ = "topics"  # temas inside a period

    id = Column(Integer, primary_key=True, index=True)
    period_id = Column(Integer, ForeignKey("periods.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)


class Subtopic(Base):
    __tablename__ = "subtopics"  # subtemas inside a topic; quizzes hang off these

    id = Column(Integer, primary_key=True, index=True)
    topic_id = Column(Integer, ForeignKey("topics.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
