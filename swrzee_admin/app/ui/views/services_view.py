from __future__ import annotations

from typing import Any

from swrzee_admin.app.ui.collection import CollectionController
from swrzee_admin.app.ui.dialogs import CreateServiceDialog, DeleteDialog
from swrzee_admin.app.ui.listing import ProjectionSpec, Row
from swrzee_admin.sdk.session import ApiSession

SERVICE_COLUMNS = [
    ("serviceName", "Name"),
    ("description", "Description"),
    ("price", "Price"),
    ("duration", "Duration"),
    ("active", "Active"),
]

SERVICES_SPEC = ProjectionSpec(
    search_fields=("serviceName", "description"),
    sortable_fields=("serviceName", "price", "duration"),
)


class ServicesView:
    def __init__(self, session: ApiSession, *, items_per_page: int = 5) -> None:
        self._session = session
        self.controller = CollectionController(
            "services",
            lambda: self._session.services_client().list_services(),
            SERVICES_SPEC,
            items_per_page=items_per_page,
        )

    def load(self) -> bool:
        return self.controller.load()

    def invalidate(self, _result: Any = None) -> bool:
        return self.controller.invalidate()

    def create_dialog(self) -> CreateServiceDialog:
        return CreateServiceDialog(self._session.services_client(), on_success=self.invalidate)

    def delete_dialog(self, service: Row) -> DeleteDialog:
        label = service.get("serviceName") or "this service"
        return DeleteDialog(
            str(service["_id"]),
            self._session.services_client().delete_service,
            on_success=self.invalidate,
            title="Delete Service",
            message=f"Are you sure you want to delete {label}? This action cannot be undone.",
            operation="services.delete",
        )
