"""
directory/listing.py -- Seeded professional-profile directory.

The directory is a collaborator of the auth core, not part of it. Each entry
has the same public fields as PublicUserView (username, role, company) plus
an opaque id, so the client can render listing rows and the signed-in user
the same way.

Filtering:
  category -- case-insensitive equality against role. "All" or empty
              disables the filter.
  search   -- case-insensitive substring match against username, role or
              company. Surrounding whitespace is ignored; blank disables it.

Layer rule: no imports from api/, auth/, client/, or core/.
"""

from dataclasses import dataclass
from typing import Optional

ALL_CATEGORIES = "All"
CATEGORIES = ("Designer", "Developer", "Photographer", "Marketer", "Consultant")


@dataclass(frozen=True)
class Profile:
    id: str
    username: str
    role: str
    company: str


SEED_PROFILES: tuple[Profile, ...] = (
    Profile("1", "Satish", "Developer", "Skill"),
    Profile("2", "Sabin", "Designer", "Kavya"),
    Profile("3", "Regan", "Marketer", "Islington"),
    Profile("4", "Subham", "Developer", "TechCorp"),
    Profile("5", "Nabin", "Designer", "DesignStudio"),
    Profile("6", "Dinesh", "Photographer", "CreativeLens"),
    Profile("7", "Aasika", "Consultant", "BusinessPro"),
    Profile("8", "Cristiano", "Marketer", "MarketingPro"),
    Profile("9", "Vini", "Developer", "CodeCraft"),
    Profile("10", "Mbappe", "Designer", "ArtStudio"),
    Profile("11", "Bellingham", "Photographer", "PhotoPro"),
    Profile("12", "Devas", "Consultant", "StrategyCorp"),
)


def _matches_search(profile: Profile, term: str) -> bool:
    return any(term in value.lower() for value in (profile.username, profile.role, profile.company))


def list_profiles(
    search: Optional[str] = None,
    category: Optional[str] = None,
    profiles: tuple[Profile, ...] = SEED_PROFILES,
) -> list[Profile]:
    """Return profiles matching the optional category and search filters, in seed order."""
    results = list(profiles)
    if category and category != ALL_CATEGORIES:
        wanted = category.lower()
        results = [p for p in results if p.role.lower() == wanted]
    term = (search or "").strip().lower()
    if term:
        results = [p for p in results if _matches_search(p, term)]
    return results
