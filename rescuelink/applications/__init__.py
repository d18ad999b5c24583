"""
RescueLink - Applications Module
Adoption and volunteer application intake.
"""

from rescuelink.applications.intake import (
    AdoptionApplication,
    VolunteerApplication,
    ApplicationStore,
    InMemoryApplicationStore,
)

__all__ = [
    "AdoptionApplication",
    "VolunteerApplication",
    "ApplicationStore",
    "InMemoryApplicationStore",
]
