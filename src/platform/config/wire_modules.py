"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.dining.app.command import (
    create_reservation_use_case,
    delete_reservation_use_case,
    update_reservation_use_case,
)
from src.service.dining.app.query import (
    get_reservation_use_case,
    list_reservations_use_case,
    restaurant_query_use_case,
    user_query_use_case,
)
from src.service.dining.driving_adapter.http_controller import user_controller
from src.service.dining.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_reservation_use_case,
    update_reservation_use_case,
    delete_reservation_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
    restaurant_query_use_case,
    user_query_use_case,
    user_controller,
    role_auth,
]
