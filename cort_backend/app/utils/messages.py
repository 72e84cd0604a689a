"""
User-facing response messages.
"""


class AuthMessages:
    SIGNUP_SUCCESS = "Signup successful"
    LOGIN_SUCCESS = "Login successful"
    PROFILE_RETRIEVED = "Profile retrieved successfully"
    
    INVALID_CREDENTIALS = "Invalid email or password"
    USER_NOT_FOUND = "User not found"
    USER_INACTIVE = "User account is inactive"
    EMAIL_ALREADY_EXISTS = "Email already exists"
    PHONE_ALREADY_EXISTS = "Phone number already exists"
    SIGNUP_FAILED = "Failed to create user"
    
    # Authentication gate
    NO_TOKEN = "No token provided"
    TOKEN_INVALID = "Invalid token"
    USER_NOT_IN_DIRECTORY = "User not found in database"
    ACCOUNT_INACTIVE = "Account is inactive"
    AUTHENTICATION_FAILED = "Authentication failed"


class CompanyMessages:
    CREATED = "Company created successfully"
    UPDATED = "Company updated successfully"
    DELETED = "Company deleted successfully"
    RETRIEVED = "Company retrieved successfully"
    LIST_RETRIEVED = "Companies list retrieved successfully"
    
    NOT_FOUND = "Company not found"
    EMAIL_EXISTS = "Company with this email already exists"
    UNAUTHORIZED_ACCESS = "You do not have permission to access this company"
    CANNOT_DELETE_WITH_RELATIONS = "Cannot delete company with active users or related data"


class VehicleMessages:
    CREATED = "Vehicle created successfully"
    UPDATED = "Vehicle updated successfully"
    DELETED = "Vehicle deleted successfully"
    RETRIEVED = "Vehicle retrieved successfully"
    LIST_RETRIEVED = "Vehicles list retrieved successfully"
    
    NOT_FOUND = "Vehicle not found"
    PLATE_EXISTS = "Vehicle with this plate number already exists"
    UNAUTHORIZED_ACCESS = "You do not have permission to access this vehicle"
    CANNOT_DELETE_WITH_RELATIONS = "Cannot delete vehicle because it has associated bookings, routes, or drivers"
    NO_COMPANY = "User does not belong to any company"
    PLATFORM_ONLY_CREATE = (
        "Super Admins can only create platform-managed vehicles (no owner). "
        "Client fleets must be managed by the client."
    )
    PLATFORM_ONLY_UPDATE = "Super Admins cannot modify client-owned vehicles. This data is managed by the client."
    PLATFORM_ONLY_DELETE = "Super Admins cannot delete client-owned vehicles. This data is managed by the client."
