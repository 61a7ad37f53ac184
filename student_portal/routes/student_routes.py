from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, EmailStr, field_validator

from student_portal.auth.dependencies import get_current_identity
from student_portal.core.errors import NotFound, StoreFailure
from student_portal.core.validation import lowercase_email, parse_integer, parse_model, sanitize_text, strip_input
from student_portal.core.views import templates
from student_portal.routes.forms import read_payload
from student_portal.store import RecordNotFound, RecordStore, StoreWriteFailed, get_store

router = APIRouter(tags=['students'], dependencies=[Depends(get_current_identity)])

STUDENT_LIST_PATH = '/students'


class StudentForm(BaseModel):
    name: str
    age: int
    email: EmailStr

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return sanitize_text(value, 'Name')

    @field_validator('age', mode='before')
    @classmethod
    def validate_age(cls, value) -> int:
        return parse_integer(value, 'Age')

    @field_validator('email', mode='before')
    @classmethod
    def strip_email(cls, value):
        return strip_input(value)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return lowercase_email(value)


def redirect_to_list() -> RedirectResponse:
    # 303 so the browser follows a form POST with a GET.
    return RedirectResponse(url=STUDENT_LIST_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get('', response_class=HTMLResponse)
def list_students(request: Request, store: RecordStore = Depends(get_store)):
    students = store.list_students()
    return templates.TemplateResponse(
        request,
        'students.html',
        {'students': students, 'identity': request.state.user},
    )


@router.get('/add', response_class=HTMLResponse)
def add_student_form(request: Request):
    return templates.TemplateResponse(request, 'add-student.html', {'identity': request.state.user})


@router.post('/add')
def add_student(payload: dict = Depends(read_payload), store: RecordStore = Depends(get_store)):
    data = parse_model(StudentForm, payload)

    try:
        store.create_student(name=data.name, age=data.age, email=data.email)
    except StoreWriteFailed as exc:
        raise StoreFailure('Error adding student.') from exc

    return redirect_to_list()


@router.get('/edit/{student_id}', response_class=HTMLResponse)
def edit_student_form(student_id: int, request: Request, store: RecordStore = Depends(get_store)):
    student = store.get_student(student_id)
    return templates.TemplateResponse(
        request,
        'edit-student.html',
        {'student': student, 'student_id': student_id, 'identity': request.state.user},
    )


@router.post('/edit/{student_id}')
def edit_student(
    student_id: int,
    payload: dict = Depends(read_payload),
    store: RecordStore = Depends(get_store),
):
    data = parse_model(StudentForm, payload)

    try:
        store.update_student(student_id, name=data.name, age=data.age, email=data.email)
    except RecordNotFound as exc:
        raise NotFound('Student not found') from exc
    except StoreWriteFailed as exc:
        raise StoreFailure('Error updating student.') from exc

    return redirect_to_list()


@router.api_route('/delete/{student_id}', methods=['GET', 'POST'])
def delete_student(student_id: int, store: RecordStore = Depends(get_store)):
    try:
        store.delete_student(student_id)
    except RecordNotFound as exc:
        raise NotFound('Student not found') from exc
    except StoreWriteFailed as exc:
        raise StoreFailure('Error deleting student.') from exc

    return redirect_to_list()
