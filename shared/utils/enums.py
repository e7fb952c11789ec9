from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    WAREHOUSE_MANAGER = "warehouse_manager"
    SALES_REP = "sales_rep"


# Roles allowed to create, update or delete inventory
WRITE_ROLES = {UserRole.ADMIN.value, UserRole.WAREHOUSE_MANAGER.value}
