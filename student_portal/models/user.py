"""User model definitions."""

from sqlalchemy import Column, Integer, String
from student_portal.database import Base


class User(Base):
    """A registered account. ``password`` only ever holds a hash."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, index=True, nullable=False)
    password = Column(String, nullable=False)
