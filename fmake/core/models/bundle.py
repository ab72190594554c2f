"""
Bundle models — inputs to the manifest generators.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator, model_validator

from fmake.core.models.platform import Platform


class ModuleHeader(BaseModel):
    """The header reference a module map exports.

    Either a single umbrella header file or an umbrella directory.
    """

    kind: Literal["umbrella", "umbrella_dir"]
    path: str

    @classmethod
    def umbrella(cls, path: str) -> ModuleHeader:
        return cls(kind="umbrella", path=path)

    @classmethod
    def umbrella_dir(cls, path: str) -> ModuleHeader:
        return cls(kind="umbrella_dir", path=path)

    def module_code(self) -> str:
        """The clause placed inside the ``module`` block."""
        if self.kind == "umbrella":
            return f'umbrella header "{self.path}"'
        return f'umbrella "{self.path}"'


class BundleDescriptor(BaseModel):
    """Identity of a framework bundle, as written into Info.plist."""

    name: str
    version: str
    identifier: str
    min_sdk_version: str
    platform: Platform

    @field_validator("version", "min_sdk_version", mode="before")
    @classmethod
    def _numbers_as_text(cls, value):
        if isinstance(value, bool):
            return value
        # unquoted YAML 10.10 arrives as the float 10.1
        if isinstance(value, float):
            raise ValueError(f"got number {value!r}; quote version strings in framework.yml")
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("platform", mode="before")
    @classmethod
    def _parse_platform(cls, value):
        if isinstance(value, str) and not isinstance(value, Platform):
            return Platform.parse(value)
        return value


class ToolchainInfo(BaseModel):
    """Resolved SDK and compiler locations for one platform."""

    platform: Platform
    sdk_path: str
    sdk_version: str
    cc: str
    cxx: str


class FrameworkConfig(BundleDescriptor):
    """Contents of framework.yml."""

    headers: ModuleHeader
    binary: str = ""             # defaults to ``name``
    locator: str = "xcrun"

    @model_validator(mode="before")
    @classmethod
    def _headers_shorthand(cls, data):
        # headers: {umbrella: X.h} or {umbrella_dir: include}
        if isinstance(data, dict) and isinstance(data.get("headers"), dict):
            headers = data["headers"]
            if "kind" not in headers and len(headers) == 1:
                kind, path = next(iter(headers.items()))
                data = {**data, "headers": {"kind": kind, "path": path}}
        return data

    @property
    def binary_name(self) -> str:
        return self.binary or self.name

    @property
    def bundle(self) -> BundleDescriptor:
        return BundleDescriptor(
            name=self.name,
            version=self.version,
            identifier=self.identifier,
            min_sdk_version=self.min_sdk_version,
            platform=self.platform,
        )
