"""
User roles and account status enumerations.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.
    
    Roles:
        SUPER_ADMIN: Platform operator, manages companies and the platform fleet
        COMPANY_ADMIN: Manages one client company and its vehicles
        EMPLOYEE: Member of a client company (default role at signup)
        DRIVER: Drives platform or company vehicles
    """
    SUPER_ADMIN = "SUPER_ADMIN"
    COMPANY_ADMIN = "COMPANY_ADMIN"
    EMPLOYEE = "EMPLOYEE"
    DRIVER = "DRIVER"


class UserStatus(str, enum.Enum):
    """Account status. Only ACTIVE accounts may authenticate."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"
