from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .enrollments.service import EnrollmentService
from .students.service import StudentService
from .subjects.service import SubjectService
from .users.service import AuthService, UserService
from .validation.factory import EntityValidatorFactory
from .validation.policy import DEFAULT_POLICY, ValidationPolicy
from .validation.registry import DEFAULT_REGISTRY, ValidationRegistry


@dataclass(frozen=True)
class Container:
    policy: ValidationPolicy
    registry: ValidationRegistry

    student_service: StudentService
    subject_service: SubjectService
    enrollment_service: EnrollmentService
    attendance_service: AttendanceService
    user_service: UserService
    auth_service: AuthService


def build_container(
    *,
    settings=None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    policy = ValidationPolicy.from_settings(settings) if settings is not None else DEFAULT_POLICY
    factory = EntityValidatorFactory()

    shared = dict(policy=policy, registry=registry, clock=clock, factory=factory)
    return Container(
        policy=policy,
        registry=registry,
        student_service=StudentService(**shared),
        subject_service=SubjectService(**shared),
        enrollment_service=EnrollmentService(factory=factory),
        attendance_service=AttendanceService(**shared),
        user_service=UserService(),
        auth_service=AuthService(registry=registry),
    )
