# ui/student_management.py
"""State machine behind the student management screen.

List state moves through ``IDLE -> LOADING -> LOADED | ERROR``; the edit modal
is ``CLOSED``, ``CREATE`` or ``EDIT``. Every successful mutation is followed by
a full re-fetch of the list instead of patching local state, so the table
always shows what the service holds.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from errors import GatewayError, NotFoundError, ValidationError
from models.student import Student
from .api import StudentRecordsApi
from .forms import StudentForm, form_to_payload, record_to_form, validate_form
from .notifications import Notifier
from .table import display_name, page_count, paginate, sort_rows

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class ListStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ModalState(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


class StudentManagementView(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ListStatus
    students: List[Student]
    error: Optional[str] = None
    modal: ModalState
    editing: Optional[Student] = None
    form: StudentForm
    field_errors: Dict[str, str]
    submitting: bool
    pending_delete: Optional[Student] = None


class StudentManagementController:

    def __init__(self, api: StudentRecordsApi, notifier: Optional[Notifier] = None):
        self.api = api
        self.notifier = notifier or Notifier()
        self.status = ListStatus.IDLE
        self.students: List[Student] = []
        self.error: Optional[str] = None
        self.modal = ModalState.CLOSED
        self.editing: Optional[Student] = None
        self.form = StudentForm()
        self.field_errors: Dict[str, str] = {}
        self._invalid_fields: Dict[str, str] = {}
        self.submitting = False
        self.pending_delete: Optional[Student] = None
        self._deleting = set()
        self._listeners: List[Callable[[StudentManagementView], Any]] = []
        self._mounted = False
        self._fetch_generation = 0
        self._modal_generation = 0

    # -- observation --

    def snapshot(self) -> StudentManagementView:
        return StudentManagementView(
            status=self.status,
            students=list(self.students),
            error=self.error,
            modal=self.modal,
            editing=self.editing,
            form=self.form,
            field_errors=dict(self.field_errors),
            submitting=self.submitting,
            pending_delete=self.pending_delete,
        )

    def subscribe(self, listener: Callable[[StudentManagementView], Any]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _changed(self):
        if not self._listeners:
            return
        view = self.snapshot()
        for listener in list(self._listeners):
            listener(view)

    # -- list --

    async def mount(self):
        self._mounted = True
        await self.fetch_students()

    def unmount(self):
        self._mounted = False
        self._listeners.clear()

    async def fetch_students(self):
        self._fetch_generation += 1
        generation = self._fetch_generation
        self.status = ListStatus.LOADING
        self._changed()
        try:
            students = await self.api.get_all_students()
        except GatewayError as e:
            if not self._is_current(generation):
                return
            # Keep whatever was loaded before
            self.status = ListStatus.ERROR
            self.error = e.detail
            self.notifier.error("Failed to fetch students")
            self._changed()
            return
        if not self._is_current(generation):
            logger.info("Discarding stale student list")
            return
        self.students = students
        self.error = None
        self.status = ListStatus.LOADED
        self._changed()

    def _is_current(self, generation: int) -> bool:
        return self._mounted and generation == self._fetch_generation

    def rows(self, descending: bool = False) -> List[Student]:
        return sort_rows(self.students, key=lambda s: s.lastName.casefold(), descending=descending)

    def page(self, number: int = 1, descending: bool = False) -> List[Student]:
        return paginate(self.rows(descending), number, PAGE_SIZE)

    def page_count(self) -> int:
        return page_count(len(self.students), PAGE_SIZE)

    @staticmethod
    def display_name(student: Student) -> str:
        return display_name(student)

    # -- modal --

    def open_create(self):
        self._modal_generation += 1
        self.modal = ModalState.CREATE
        self.editing = None
        self.form = StudentForm()
        self.field_errors = {}
        self._invalid_fields = {}
        self._changed()

    def open_edit(self, student: Student):
        self._modal_generation += 1
        self.modal = ModalState.EDIT
        self.editing = student
        self.form = record_to_form(student)
        self.field_errors = {}
        self._invalid_fields = {}
        self._changed()

    def set_field(self, name: str, value):
        if name not in StudentForm.model_fields:
            raise KeyError(name)
        try:
            self.form = StudentForm.model_validate({**self.form.model_dump(), name: value})
        except PydanticValidationError as e:
            # Previous value is kept; submit stays blocked until the field is fixed
            self._invalid_fields[name] = e.errors()[0]["msg"]
            self.field_errors[name] = self._invalid_fields[name]
            self._changed()
            return
        self._invalid_fields.pop(name, None)
        self.field_errors.pop(name, None)
        self._changed()

    def cancel_modal(self):
        self._modal_generation += 1
        self.modal = ModalState.CLOSED
        self.editing = None
        self.field_errors = {}
        self._invalid_fields = {}
        self._changed()

    def _close_modal(self):
        self.modal = ModalState.CLOSED
        self.editing = None
        self.field_errors = {}
        self._invalid_fields = {}

    async def submit_modal(self) -> bool:
        """Submit the open form. Returns True when the record was saved."""
        if self.modal == ModalState.CLOSED:
            return False
        if self.submitting:
            logger.warning("Submit ignored: a submission is already in flight")
            return False

        errors = {**validate_form(self.form), **self._invalid_fields}
        if errors:
            self.field_errors = errors
            self._changed()
            return False

        editing = self.editing if self.modal == ModalState.EDIT else None
        modal_generation = self._modal_generation
        payload = form_to_payload(self.form)
        self.submitting = True
        self._changed()
        try:
            if editing is not None:
                await self.api.update_student(editing.id, payload)
            else:
                await self.api.create_student(payload)
        except ValidationError as e:
            self.submitting = False
            if self._mounted and modal_generation == self._modal_generation:
                self.field_errors = e.field_errors()
            self.notifier.error(f"Please correct the highlighted fields: {e.detail}")
            self._changed()
            return False
        except NotFoundError:
            self.submitting = False
            self.notifier.error("This student no longer exists")
            if self._mounted and modal_generation == self._modal_generation:
                self._close_modal()
            await self._refresh()
            return False
        except GatewayError as e:
            self.submitting = False
            self.notifier.error(f"Failed to save student: {e.detail}")
            self._changed()
            return False

        self.submitting = False
        self.notifier.success("Student updated successfully" if editing is not None else "Student created successfully")
        if modal_generation == self._modal_generation:
            self._close_modal()
        await self._refresh()
        return True

    # -- delete --

    def request_delete(self, student: Student):
        self.pending_delete = student
        self._changed()

    def cancel_delete(self):
        self.pending_delete = None
        self._changed()

    async def confirm_delete(self) -> bool:
        student = self.pending_delete
        self.pending_delete = None
        if student is None or student.id in self._deleting:
            self._changed()
            return False

        self._deleting.add(student.id)
        self._changed()
        try:
            await self.api.delete_student(student.id)
        except NotFoundError:
            self.notifier.error("This student no longer exists")
            await self._refresh()
            return False
        except GatewayError as e:
            self.notifier.error(f"Failed to delete student: {e.detail}")
            self._changed()
            return False
        finally:
            self._deleting.discard(student.id)

        self.notifier.success("Student deleted successfully")
        await self._refresh()
        return True

    async def _refresh(self):
        if self._mounted:
            await self.fetch_students()
        else:
            self._changed()
