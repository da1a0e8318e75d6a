"""
Roles Configuration
Defines the role names the access-control layer understands.
Used by the RBAC resolver and by the seed script that populates the roles table.
"""

OWNER = "Owner"
ORG_ADMIN = "Organization Admin"
SITE_ADMIN = "Site Admin"
USER = "User"
PENDING_USER = "Pending User"

# Alternate spellings stored by older deployments
ROLE_ALIASES = {
    "Organisation Admin": ORG_ADMIN,
}

ROLES = [
    {
        "name": OWNER,
        "description": "Full access to every building, floor, AP and device"
    },
    {
        "name": ORG_ADMIN,
        "description": "Manages the buildings and the exact floors granted to their groups"
    },
    {
        "name": SITE_ADMIN,
        "description": "Manages every floor of the buildings granted to their groups"
    },
    {
        "name": USER,
        "description": "Dashboard access and self-service device registration"
    },
    {
        "name": PENDING_USER,
        "description": "Registered account awaiting role and group assignment"
    },
]


def normalize_role_name(name):
    """Map a stored role name onto its canonical spelling."""
    if not name:
        return None
    return ROLE_ALIASES.get(name, name)
