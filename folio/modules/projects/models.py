from typing import List, Optional

from pydantic import Field

from ...core.models import Record, WritePayload


class Project(Record):
    title: str
    description: str
    long_description: Optional[str] = None
    image_url: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    featured: bool = False
    order_index: int = 0


class ProjectWrite(WritePayload):
    """Full-field project write. Title, description and one tech entry are required."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    long_description: Optional[str] = None
    image_url: Optional[str] = None
    tech_stack: List[str] = Field(..., min_length=1)
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    featured: bool = False
    order_index: int = 0
