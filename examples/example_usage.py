"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from leave_management.container import build_container
from leave_management.store.memory_store import InMemoryTableStore


def main():
    container = build_container(store=InMemoryTableStore())

    employee = container.identity_service.login("khushi", "password")
    request = container.leave_service.submit(
        employee_id=employee.id,
        employee_name=employee.name,
        department=employee.department,
        leave_type="casual",
        start_date="2025-05-05",
        end_date="2025-05-06",
        reason="Moving house",
    )

    container.identity_service.login("admin", "1234")
    container.leave_service.approve(request.id)

    print(container.dashboard_service.employee_summary(employee.id))
    print(container.dashboard_service.admin_summary())


if __name__ == "__main__":
    main()
