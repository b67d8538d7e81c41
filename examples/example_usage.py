"""Example: using the validation engine without Flask.

Controllers are a thin layer; every rule lives in the services and the
validation package, so a script can call them directly.
"""

import importlib

from config import get_settings_module

from attendance_console.container import build_container
from attendance_console.core.enums import Role
from attendance_console.validation.snapshot import Snapshot


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    snapshot = Snapshot.from_dict(
        {"students": [{"id": 1, "student_number": "24-0001", "email": "john.doe@example.com"}]}
    )
    result = container.student_service.validate(
        current_role=Role.REGISTRAR,
        payload={"student_number": "24-0001", "email": "john.doe@example.com", "first_name": "John"},
        snapshot=snapshot,
    )
    print(result.to_dict())


if __name__ == "__main__":
    main()
