"""Public models for the Bangumi SDK."""

from bangumi_sdk.models.enums import (
    UNFILTERED,
    CollectionType,
    EpisodeType,
    LabeledEnum,
    SubjectType,
)

__all__ = ["UNFILTERED", "CollectionType", "EpisodeType", "LabeledEnum", "SubjectType"]
