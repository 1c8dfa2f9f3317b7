"""MARC framework policy applied to merged records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_FRAMEWORK_CODE = ""


class FrameworkMode(StrEnum):
    USE_MASTER = "use-master"
    EXPLICIT = "explicit"
    FORCE_DEFAULT = "force-default"


@dataclass(frozen=True, slots=True)
class FrameworkPolicy:
    """Which framework code the merged record should carry."""

    mode: FrameworkMode = FrameworkMode.USE_MASTER
    code: str | None = None

    @classmethod
    def use_master(cls) -> FrameworkPolicy:
        return cls()

    @classmethod
    def explicit(cls, code: str) -> FrameworkPolicy:
        return cls(mode=FrameworkMode.EXPLICIT, code=code)

    @classmethod
    def force_default(cls) -> FrameworkPolicy:
        return cls(mode=FrameworkMode.FORCE_DEFAULT)

    def describe(self) -> str:
        if self.mode is FrameworkMode.FORCE_DEFAULT:
            return "(default framework forced)"
        if self.mode is FrameworkMode.EXPLICIT:
            return display_framework(self.code or DEFAULT_FRAMEWORK_CODE)
        return "(use master record's framework)"


def resolve_framework(policy: FrameworkPolicy, master_code: str | None) -> str:
    """Return the framework code for a group, in precedence order.

    Forcing the default framework wins over everything, then an explicitly
    configured code, and only then the master record's own code.
    """

    if policy.mode is FrameworkMode.FORCE_DEFAULT:
        return DEFAULT_FRAMEWORK_CODE
    if policy.mode is FrameworkMode.EXPLICIT and policy.code is not None:
        return policy.code
    return master_code or DEFAULT_FRAMEWORK_CODE


def display_framework(code: str) -> str:
    return code or "default"
