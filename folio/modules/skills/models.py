from pydantic import Field

from ...core.models import Record, WritePayload


class Skill(Record):
    name: str
    category: str
    proficiency: int = Field(80, ge=0, le=100)
    order_index: int = 0


class SkillWrite(WritePayload):
    """Proficiency outside 0-100 is rejected, never stored."""

    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    proficiency: int = Field(80, ge=0, le=100)
    order_index: int = 0
