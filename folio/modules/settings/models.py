from typing import Optional

from ...core.models import Record, WritePayload

SETTINGS_FIELDS = (
    'hero_image_url', 'hero_title', 'hero_subtitle', 'bio', 'location',
    'availability', 'email', 'github_url', 'linkedin_url', 'twitter_url',
)


class SiteSettings(Record):
    hero_image_url: Optional[str] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    email: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None


class SiteSettingsWrite(WritePayload):
    hero_image_url: Optional[str] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    email: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None


class Unset:
    """No settings row is known; the next save inserts."""

    def __eq__(self, other):
        return isinstance(other, Unset)

    def __hash__(self):
        return hash(Unset)

    def __repr__(self):
        return 'Unset()'


class Existing:
    """The settings row with this id exists; the next save updates it."""

    def __init__(self, record_id):
        self.id = record_id

    def __eq__(self, other):
        return isinstance(other, Existing) and other.id == self.id

    def __hash__(self):
        return hash((Existing, self.id))

    def __repr__(self):
        return f'Existing({self.id!r})'
