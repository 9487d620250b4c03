"""Configuration models for containerdev."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ContainerProfile(BaseModel):
    """A named description of how to run one container."""
    name: str
    image: str
    stdin: bool = False
    as_user: bool = False
    mount_workdir: bool = False
    mounts: List[str] = Field(default_factory=list)
    cmd: List[str] = Field(default_factory=list)

    @field_validator('stdin', 'as_user', 'mount_workdir', 'mounts', 'cmd', mode='before')
    @classmethod
    def blank_to_default(cls, value, info):
        """Treat a key left blank in YAML (null) as unset."""
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class Config(BaseModel):
    """Contents of the user config file."""

    containers: List[ContainerProfile] = Field(default_factory=list)

    @field_validator('containers', mode='before')
    @classmethod
    def blank_to_empty(cls, value):
        """Treat a blank ``containers:`` key as no containers."""
        return [] if value is None else value

    def get_profile(self, name: str) -> Optional[ContainerProfile]:
        """Return the first profile named ``name``, or None."""
        for profile in self.containers:
            if profile.name == name:
                return profile
        return None

    def profile_names(self) -> List[str]:
        """Get list of all profile names in declaration order."""
        return [profile.name for profile in self.containers]

    def duplicate_names(self) -> List[str]:
        """Get names declared more than once.

        Only the first of these is ever reachable through ``get_profile``.
        """
        seen = set()
        duplicates = []
        for name in self.profile_names():
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        return duplicates
