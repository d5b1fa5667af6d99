# models.py
"""
Database models for MerchLab.

Two record kinds live in the store: TeeLab design submissions and
marketing email signups.
"""

from sqlalchemy import Column, Integer, Text, text

from merchlab.db import Base


class Design(Base):
    __tablename__ = "designs"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text)
    description = Column(Text)
    image_url = Column(Text)
    user_id = Column(Integer, nullable=True)
    votes = Column(Integer, nullable=False, default=0, server_default=text("0"))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image_url": self.image_url,
            "user_id": self.user_id,
            "votes": self.votes,
        }


class Signup(Base):
    __tablename__ = "signups"
    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(Text, unique=True)
