"""
Version information for netreport.
"""

MAJOR = 1
MINOR = 0
PATCH = 0
STATUS = "Beta"


def get_version() -> str:
    """Get the full version string."""
    return f"{MAJOR}.{MINOR}.{PATCH}-{STATUS}"

