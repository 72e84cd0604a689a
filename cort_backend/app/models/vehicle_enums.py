"""
Vehicle enumerations.
"""

import enum


class VehicleCategory(str, enum.Enum):
    """Body type of a vehicle."""
    SEDAN = "SEDAN"
    SUV = "SUV"
    VAN = "VAN"
    BUS = "BUS"
    COASTER = "COASTER"
    HIACE = "HIACE"


class OwnershipType(str, enum.Enum):
    """
    How the operator holds the vehicle.
    
    OWNED: Bought by the operator
    PARTNER: Supplied by a partner
    """
    OWNED = "OWNED"
    PARTNER = "PARTNER"
