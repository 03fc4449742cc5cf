"""Settings models for untis-export."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

DEFAULT_EMPTY_VALUES = ["---", "&nbsp;", "\xa0"]


class ColumnSettings(BaseModel):
    """Zero-based column indices of the Untis substitution table.

    A value of -1 marks a column as not present in the export.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(default=0, ge=-1)
    date: int = Field(default=1, ge=-1)
    lesson: int = Field(default=2, ge=-1)
    grades: int = Field(default=3, ge=-1)
    replacement_grades: int = Field(default=4, ge=-1)
    teachers: int = Field(default=5, ge=-1)
    replacement_teachers: int = Field(default=6, ge=-1)
    subject: int = Field(default=7, ge=-1)
    replacement_subject: int = Field(default=8, ge=-1)
    room: int = Field(default=9, ge=-1)
    replacement_room: int = Field(default=10, ge=-1)
    type: int = Field(default=11, ge=-1)
    remark: int = Field(default=12, ge=-1)


class UntisSettings(BaseModel):
    """Settings describing the Untis export and the transforms applied to it."""

    columns: ColumnSettings = Field(default_factory=ColumnSettings)
    date_time_format: str = Field(
        default="%d.%m.%Y", description="strptime format of dates in the export"
    )
    empty_values: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EMPTY_VALUES),
        description="Cell values treated as empty",
    )
    include_absent_values: bool = Field(
        default=False, description="Keep values Untis marks as absent, e.g. '(Mül)'"
    )
    fix_broken_p_tags: bool = Field(
        default=True, description="Strip unbalanced <p> tags before parsing"
    )
    type_replacements: dict[str, str] = Field(
        default_factory=dict, description="Ordered substring replacements for type labels"
    )
    remove_exams: bool = Field(default=False, description="Drop exam rows (id 0)")

    @field_validator("type_replacements")
    @classmethod
    def validate_type_replacements(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject empty search strings, they would match between every character."""
        if "" in v:
            raise ValueError("type replacement keys must not be empty")
        return v


class EndpointSettings(BaseModel):
    """Remote endpoint the export is uploaded to."""

    legacy: bool = Field(default=False, description="Use legacy ICC field names")
    substitutions: HttpUrl | None = Field(default=None, description="Substitutions URL")
    infotexts: HttpUrl | None = Field(default=None, description="Infotexts URL")
    api_key: str | None = Field(default=None, description="Sent as X-Token header")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")


class Settings(BaseModel):
    """Complete service configuration."""

    debug: bool = False
    enabled: bool = True
    html_path: str = Field(..., description="Directory Untis writes its HTML export to")
    threshold: int = Field(
        default=2, ge=0, description="Seconds to wait for Untis to finish writing"
    )
    encoding: str = Field(default="iso-8859-1", description="Encoding of the export files")
    endpoint: EndpointSettings = Field(default_factory=EndpointSettings)
    untis: UntisSettings = Field(default_factory=UntisSettings)


class ExportSettings(BaseModel):
    """Immutable parser configuration for a single export run."""

    model_config = ConfigDict(frozen=True)

    columns: ColumnSettings
    date_time_format: str
    empty_values: tuple[str, ...] = ()
    include_absent_values: bool = False
    fix_broken_p_tags: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> ExportSettings:
        """Build a snapshot from the current service settings."""
        untis = settings.untis
        return cls(
            columns=untis.columns.model_copy(),
            date_time_format=untis.date_time_format,
            empty_values=tuple(untis.empty_values),
            include_absent_values=untis.include_absent_values,
            fix_broken_p_tags=untis.fix_broken_p_tags,
        )
