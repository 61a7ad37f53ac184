"""Student model definitions."""

from sqlalchemy import Column, Integer, String
from student_portal.database import Base


class Student(Base):
    """Represents a student record managed through the portal."""
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    email = Column(String, nullable=False)
