"""Category enumerations used by the Bangumi API.

The API identifies categories by small integer codes. Each enum keeps the
human-readable labels Bangumi shows in its UI, so callers can pass either a
member or the label string.
"""

from enum import IntEnum

from bangumi_sdk.exceptions import InvalidParameterError

# Code sent when a non-strict filter receives an unknown label
UNFILTERED = 0


class LabeledEnum(IntEnum):
    """IntEnum whose members carry a display label."""

    label: str

    def __new__(cls, code: int, label: str) -> "LabeledEnum":
        member = int.__new__(cls, code)
        member._value_ = code
        member.label = label
        return member

    @classmethod
    def from_label(cls, label: str) -> "LabeledEnum":
        """Look up a member by its display label.

        Raises:
            InvalidParameterError: If no member carries ``label``.
        """
        for member in cls:
            if member.label == label:
                return member
        raise InvalidParameterError(
            f"Unknown {cls.__name__} label: {label!r}",
            parameter=cls.__name__,
            value=label,
        )

    @classmethod
    def labels(cls) -> list[str]:
        return [member.label for member in cls]


class SubjectType(LabeledEnum):
    """Subject (catalogue entry) type."""

    BOOK = (1, "书籍")
    ANIME = (2, "动漫")
    MUSIC = (3, "音乐")
    GAME = (4, "游戏")
    REAL = (6, "三次元")


class CollectionType(LabeledEnum):
    """Collection (watch status) type. Unknown labels mean no status filter."""

    WISH = (1, "想看")
    DONE = (2, "看过")
    DOING = (3, "在看")
    ON_HOLD = (4, "搁置")
    DROPPED = (5, "抛弃")


class EpisodeType(LabeledEnum):
    """Episode type. Unknown labels fall back to MAIN."""

    MAIN = (0, "本篇")
    SPECIAL = (1, "特别篇")
    OP = (2, "OP")
    ED = (3, "ED")
    PROMO = (4, "预告/宣传/广告")
    MAD = (5, "MAD")
    OTHER = (6, "其他")
