"""Pydantic models describing Bangumi endpoints.

Each endpoint is pure data: method, URL template, ordered query parameters,
enum translations and which dispatch primitive answers it. A single
invocation routine in BangumiClient consumes these descriptors.
"""

from collections.abc import Mapping
from string import Formatter
from typing import Any, Literal
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bangumi_sdk._internal.dispatch.models import HttpMethod
from bangumi_sdk.exceptions import InvalidParameterError
from bangumi_sdk.models.enums import LabeledEnum

Shape = Literal["body", "success"]


class EnumParam(BaseModel):
    """Translation of a label parameter into the code the API expects.

    Fields:
        enum: The enumeration whose labels are accepted
        default: Code sent for an unrecognized label. None makes the
            translation strict: unknown labels raise InvalidParameterError.
    """

    model_config = ConfigDict(frozen=True)

    enum: type[LabeledEnum]
    default: int | None = None

    @property
    def strict(self) -> bool:
        return self.default is None

    def translate(self, parameter: str, value: Any) -> int:
        """Map a member, a label or a code onto its integer code.

        Unknown labels and codes map to ``default`` unless the translation is
        strict. Members of another enumeration count as unknown.
        """
        if isinstance(value, self.enum):
            return int(value)
        if isinstance(value, str):
            try:
                return int(self.enum.from_label(value))
            except InvalidParameterError:
                return self._unknown(parameter, value)
        if isinstance(value, int) and not isinstance(value, (bool, LabeledEnum)):
            try:
                return int(self.enum(value))
            except ValueError:
                return self._unknown(parameter, value)
        return self._unknown(parameter, value)

    def _unknown(self, parameter: str, value: Any) -> int:
        if self.strict:
            raise InvalidParameterError(
                f"Unknown {self.enum.__name__} for {parameter}: {value!r} "
                f"(expected one of {', '.join(self.enum.labels())})",
                parameter=parameter,
                value=value,
            )
        return self.default  # type: ignore[return-value]


class Endpoint(BaseModel):
    """Descriptor of one API operation.

    Required fields:
        name: Operation name, matching the BangumiClient method
        method: HTTP method
        path: URL path template with {placeholders}

    Optional fields:
        query: Query parameter names, emitted in this order and always present
        enums: Parameters (path or query) translated through an enum table
        has_body: Whether the operation forwards a caller-supplied body
        shape: "body" returns response bytes, "success" returns True
    """

    model_config = ConfigDict(frozen=True)

    name: str
    method: HttpMethod
    path: str
    query: tuple[str, ...] = ()
    enums: dict[str, EnumParam] = Field(default_factory=dict)
    has_body: bool = False
    shape: Shape = "body"

    @model_validator(mode="after")
    def enums_are_parameters(self) -> "Endpoint":
        known = set(self.path_params) | set(self.query)
        unknown = set(self.enums) - known
        if unknown:
            raise ValueError(f"enum translations for unknown parameters: {sorted(unknown)}")
        return self

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(field for _, field, _, _ in Formatter().parse(self.path) if field)

    @property
    def parameters(self) -> tuple[str, ...]:
        return self.path_params + self.query

    def _value(self, parameter: str, params: Mapping[str, Any]) -> str:
        value = params[parameter]
        if parameter in self.enums:
            return str(self.enums[parameter].translate(parameter, value))
        if value is None:
            return ""
        return str(value)

    def build_url(self, base_url: str, params: Mapping[str, Any]) -> str:
        """Assemble the absolute URL for this endpoint.

        Args:
            base_url: Scheme and host, e.g. "https://api.bgm.tv".
            params: Values for every path and query parameter.

        Returns:
            The percent-encoded URL.

        Raises:
            InvalidParameterError: A parameter is missing or a strict enum
                label is unknown.
        """
        missing = [name for name in self.parameters if name not in params]
        if missing:
            raise InvalidParameterError(
                f"{self.name} requires parameters: {', '.join(missing)}",
                parameter=missing[0],
            )
        path = self.path.format(
            **{name: quote(self._value(name, params), safe="/") for name in self.path_params}
        )
        url = f"{base_url.rstrip('/')}{path}"
        if self.query:
            pairs = [(name, self._value(name, params)) for name in self.query]
            url = f"{url}?{urlencode(pairs)}"
        return url
