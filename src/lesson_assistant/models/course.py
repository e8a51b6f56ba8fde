"""
Course catalog models.

A Course is an ordered, immutable list of video lessons. Lesson ids are the
video ids of the embedded videos and double as the keys stored in the
learner's completion set.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Lesson(BaseModel):
    """A single video lesson."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Video id of the lesson")
    title: str = Field(..., min_length=1, description="Lesson title shown to learners")


class Course(BaseModel):
    """An ordered set of lessons under one title."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    lessons: tuple[Lesson, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _unique_lesson_ids(self) -> "Course":
        ids = [lesson.id for lesson in self.lessons]
        if len(ids) != len(set(ids)):
            raise ValueError("Lesson ids must be unique within a course")
        return self

    def get_lesson(self, lesson_id: str) -> Lesson | None:
        for lesson in self.lessons:
            if lesson.id == lesson_id:
                return lesson
        return None

    @property
    def lesson_ids(self) -> list[str]:
        return [lesson.id for lesson in self.lessons]


ART_OF_THE_PROMPT = Course(
    title="Art of the Prompt",
    lessons=(
        Lesson(id="vTW2cmN1kkk", title="The Most Expensive Skill in 2025"),
        Lesson(id="HRFLHl58g5M", title="Why Prompt Engineering Matters ?"),
        Lesson(
            id="1IAHBK3nuKs",
            title="The Fundamentals of Good Prompting: Core Principles, Common Mistakes, and How to Avoid Them",
        ),
        Lesson(id="aASZkLfGk5Q", title="Most Effective Prompt Engineering Techniques 2025"),
        Lesson(
            id="6kW0VbJe6ic",
            title="Prompt Engineering That Works Real Use Cases Across Business, Content & More",
        ),
    ),
)
