"""
Course tree schemas (course -> modules -> topics).
"""

from typing import List, Optional

from pydantic import AliasChoices, Field

from learnhub.schemas.common import RemoteModel


class Topic(RemoteModel):
    """A single playable topic inside a module."""

    id: str = Field(validation_alias=AliasChoices("topicId", "id", "_id"))
    title: str = ""
    description: Optional[str] = None
    order: int = 0
    estimated_time: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("estimatedTime", "estimated_time")
    )
    has_practice: bool = Field(
        default=False, validation_alias=AliasChoices("hasPractice", "has_practice")
    )


class Module(RemoteModel):
    """A course module holding an ordered list of topics."""

    id: str = Field(validation_alias=AliasChoices("moduleId", "id", "_id"))
    title: str = ""
    description: Optional[str] = None
    order: int = 0
    topics: List[Topic] = []

    def first_topic(self) -> Optional[Topic]:
        """Lowest-order topic, ties broken by declared position."""
        if not self.topics:
            return None
        return min(enumerate(self.topics), key=lambda pair: (pair[1].order, pair[0]))[1]


class CourseTree(RemoteModel):
    """Course detail as served by GET /api/courses/{id}."""

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("_id", "id", "courseId"))
    title: str = ""
    is_enrolled: bool = Field(default=False, validation_alias=AliasChoices("isEnrolled", "is_enrolled"))
    modules: List[Module] = []

    def ordered_modules(self) -> List[Module]:
        """Modules sorted by declared order (stable for equal orders)."""
        return sorted(self.modules, key=lambda m: m.order)

    def first_playable(self) -> Optional[tuple[Module, Topic]]:
        """
        First module (lowest order) and that module's first topic.

        Returns None when the lowest-order module has no topics or there are
        no modules at all.
        """
        modules = self.ordered_modules()
        if not modules:
            return None
        first_module = modules[0]
        topic = first_module.first_topic()
        if topic is None:
            return None
        return first_module, topic
