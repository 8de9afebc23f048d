"""
Pydantic schemas for the preference questionnaire and the stored profile.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from movie_recommender.utils.constants import (
    CONTENT_LEVEL_OPTIONS,
    ERA_OPTIONS,
    GENRE_OPTIONS,
    MOOD_OPTIONS,
    RATING_PREFERENCE_OPTIONS,
    SCORE_PREFERENCE_OPTIONS,
    WATCH_TIME_OPTIONS,
)


# --- Stored profile ---

class PreferenceProfile(BaseModel):
    """
    The user's answers to the questionnaire.

    Every field may be empty: the entity itself does not enforce
    completeness (see PreferenceSubmitRequest for the submission rules).
    """
    model_config = ConfigDict(populate_by_name=True)

    genres: List[str] = Field(default_factory=list, description="Favorite genres")
    era: str = Field("", description="Preferred movie era")
    mood: List[str] = Field(default_factory=list, description="Mood/tone selections")
    content_level: str = Field("", alias="contentLevel", description="Content tolerance")
    watch_time: str = Field("", alias="watchTime", description="Preferred movie length")
    rating_preference: str = Field(
        "",
        alias="ratingPreference",
        description="Quality threshold (highly rated vs hidden gems)"
    )
    score_preference: str = Field(
        "",
        alias="scorePreference",
        description="Critic vs audience trust"
    )


# --- Questionnaire submission ---

def _check_single_choice(value: str, options: List[str], field_name: str) -> str:
    if value not in options:
        raise ValueError(f"{field_name} must be one of: {', '.join(options)}")
    return value


def _check_multiple_choice(values: List[str], options: List[str], field_name: str) -> List[str]:
    if not values:
        raise ValueError(f"Select at least one {field_name} option")
    unknown = [v for v in values if v not in options]
    if unknown:
        raise ValueError(f"Unknown {field_name} option(s): {', '.join(unknown)}")
    # Keep the user's order, drop duplicates
    return list(dict.fromkeys(values))


class PreferenceSubmitRequest(PreferenceProfile):
    """
    Request to save the questionnaire answers.

    All seven steps are required and single-choice answers must come from
    the fixed option sets served by GET /questionnaire.
    """
    # Defaults are validated too, so an omitted step is rejected
    model_config = ConfigDict(populate_by_name=True, validate_default=True)

    @field_validator("genres")
    @classmethod
    def validate_genres(cls, v: List[str]) -> List[str]:
        return _check_multiple_choice(v, GENRE_OPTIONS, "genres")

    @field_validator("mood")
    @classmethod
    def validate_mood(cls, v: List[str]) -> List[str]:
        return _check_multiple_choice(v, MOOD_OPTIONS, "mood")

    @field_validator("era")
    @classmethod
    def validate_era(cls, v: str) -> str:
        return _check_single_choice(v, ERA_OPTIONS, "era")

    @field_validator("content_level")
    @classmethod
    def validate_content_level(cls, v: str) -> str:
        return _check_single_choice(v, CONTENT_LEVEL_OPTIONS, "contentLevel")

    @field_validator("watch_time")
    @classmethod
    def validate_watch_time(cls, v: str) -> str:
        return _check_single_choice(v, WATCH_TIME_OPTIONS, "watchTime")

    @field_validator("rating_preference")
    @classmethod
    def validate_rating_preference(cls, v: str) -> str:
        return _check_single_choice(v, RATING_PREFERENCE_OPTIONS, "ratingPreference")

    @field_validator("score_preference")
    @classmethod
    def validate_score_preference(cls, v: str) -> str:
        return _check_single_choice(v, SCORE_PREFERENCE_OPTIONS, "scorePreference")

    def to_profile(self) -> PreferenceProfile:
        return PreferenceProfile.model_validate(self.model_dump())


class PreferenceSaveResponse(BaseModel):
    """Response after saving the questionnaire answers."""
    status: Literal["SAVED"] = Field("SAVED", description="Indicates the profile was stored")
    preferences: PreferenceProfile = Field(..., description="The stored profile")
    message: str = Field(..., examples=["Preferences saved successfully"])


class PreferenceDeleteResponse(BaseModel):
    """Response after clearing the stored profile."""
    status: Literal["DELETED"] = Field("DELETED", description="Indicates the profile was cleared")
    message: str = Field(..., examples=["Preferences cleared successfully"])


# --- Questionnaire catalog ---

class QuestionnaireStep(BaseModel):
    """A single questionnaire step as rendered by the client."""
    id: str = Field(..., description="Profile field the answer is stored under")
    title: str
    question: str
    type: Literal["multiple", "single"]
    options: List[str]
    required: bool = True


class QuestionnaireResponse(BaseModel):
    """Response for GET /questionnaire."""
    steps: List[QuestionnaireStep]
