from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AssetStatus = Literal["sourced", "pending", "uploading", "processing", "ready", "error"]

READY: AssetStatus = "ready"


class AssetSource(BaseModel):
    model_config = ConfigDict(extra="allow")

    src: str
    type: str | None = None


class Asset(BaseModel):
    """Metadata record of a video file handled by a processing provider.

    The record is open: fields that are not declared here (for example a
    ``thumbnailTime`` added by a client-side transform) are kept as-is and
    written back on every save. They are available through ``extensions``.
    """

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    status: AssetStatus = "pending"
    original_file_path: str
    provider: str
    provider_metadata: dict[str, dict[str, Any]] = Field(default_factory=dict)
    poster: str | None = None
    sources: list[AssetSource] | None = None
    blur_data_url: str | None = Field(default=None, alias="blurDataURL")
    size: int | None = None
    error: Any = None
    created_at: int
    updated_at: int

    # Kept for assets written before provider_metadata existed.
    external_ids: dict[str, str] | None = None

    @property
    def is_ready(self) -> bool:
        return self.status == READY

    @property
    def extensions(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def to_record(self) -> dict[str, Any]:
        """Wire form of the asset: camelCase keys, fields never set are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Asset":
        return cls.model_validate(record)


def to_wire_keys(patch: dict[str, Any]) -> dict[str, Any]:
    """Translate top-level attribute names of a patch to their wire aliases.

    Keys that already use the wire name, and keys of extension fields, pass
    through untouched. Raises ValueError if a field is given under both names.
    """
    out: dict[str, Any] = {}
    for key, value in patch.items():
        field = Asset.model_fields.get(key)
        wire_key = field.alias if field is not None and field.alias else key
        if wire_key in out:
            raise ValueError(f"patch sets {wire_key!r} more than once")
        out[wire_key] = value
    return out
