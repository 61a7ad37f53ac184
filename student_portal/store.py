import logging

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from student_portal.database import get_db
from student_portal.models.student import Student
from student_portal.models.user import User

logger = logging.getLogger(__name__)


class StoreWriteFailed(Exception):
    """A create, update or delete did not reach the database."""


class RecordNotFound(LookupError):
    pass


class RecordStore:
    """Single-record reads and writes for users and students.

    Every write commits on its own; a failed write is rolled back and
    re-raised as ``StoreWriteFailed`` with the driver error as its cause.
    """

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreWriteFailed(f"Could not {action}") from exc

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email, password=password_hash)
        self.db.add(user)
        self._commit("create user")
        self.db.refresh(user)
        logger.info("Registered user id=%s", user.id)
        return user

    def find_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).order_by(User.id.asc()).first()

    def create_student(self, name: str, age: int, email: str) -> Student:
        student = Student(name=name, age=age, email=email)
        self.db.add(student)
        self._commit("create student")
        self.db.refresh(student)
        return student

    def list_students(self) -> list[Student]:
        return self.db.query(Student).order_by(Student.id.asc()).all()

    def count_students(self) -> int:
        return self.db.query(func.count(Student.id)).scalar() or 0

    def get_student(self, student_id: int) -> Student | None:
        return self.db.get(Student, student_id)

    def update_student(self, student_id: int, name: str, age: int, email: str) -> Student:
        student = self.get_student(student_id)
        if student is None:
            raise RecordNotFound(student_id)

        student.name = name
        student.age = age
        student.email = email
        self._commit("update student")
        self.db.refresh(student)
        return student

    def delete_student(self, student_id: int) -> None:
        student = self.get_student(student_id)
        if student is None:
            raise RecordNotFound(student_id)

        self.db.delete(student)
        self._commit("delete student")


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)
