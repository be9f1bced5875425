"""Schema for buildstamp configuration files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildStampConfigSchema(BaseModel):
	"""Settings read from ``.buildstamp.yml`` and environment overrides."""

	model_config = ConfigDict(extra="forbid")

	package_version: str | None = None
	trusted_branch: str | None = None
	git_binary: str = "git"
	constant_prefix: str = "BUILD"
	source_date_epoch: int | None = Field(default=None, ge=0)

	@field_validator("package_version", "trusted_branch", mode="before")
	@classmethod
	def _blank_to_none(cls, value: object) -> object:
		if isinstance(value, str) and not value.strip():
			return None
		return value

	@field_validator("constant_prefix")
	@classmethod
	def _prefix_is_identifier(cls, value: str) -> str:
		if not value.isidentifier():
			msg = f"constant_prefix must be a valid identifier, got {value!r}"
			raise ValueError(msg)
		return value.upper()
