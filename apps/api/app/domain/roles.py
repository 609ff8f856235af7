"""Role hierarchy and authorization checks.

Known roles form a ladder (viewer < editor < moderator < admin). A requirement
is a non-empty sequence of role specs evaluated with OR semantics. Two kinds of
spec bypass the ladder and demand an exact, case-sensitive match on the
principal's role string:

- ``admin``, so that extending the ladder above it never broadens admin-only
  operations;
- any role name outside the ladder (``UnrecognizedRole``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from app.errors import ConfigurationError
from app.schemas.auth import AuthPrincipal


class Role(str, Enum):
    VIEWER = "viewer"
    EDITOR = "editor"
    MODERATOR = "moderator"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class UnrecognizedRole:
    """Role name that is not part of the ladder."""

    name: str


RoleSpec = Union[Role, UnrecognizedRole]

_ROLE_LEVELS: dict[Role, int] = {
    Role.VIEWER: 1,
    Role.EDITOR: 2,
    Role.MODERATOR: 3,
    Role.ADMIN: 4,
}

_EXACT_MATCH_ROLES: frozenset[Role] = frozenset({Role.ADMIN})


def parse_role(value: str) -> RoleSpec:
    try:
        return Role(value)
    except ValueError:
        return UnrecognizedRole(value)


def role_level(spec: RoleSpec) -> int:
    """Return the ladder level of a role spec; unrecognized roles sit at 0."""
    if isinstance(spec, UnrecognizedRole):
        return 0
    return _ROLE_LEVELS[spec]


def role_name(spec: RoleSpec) -> str:
    if isinstance(spec, UnrecognizedRole):
        return spec.name
    return spec.value


@dataclass(frozen=True, slots=True)
class RoleRequirement:
    """Non-empty ordered set of acceptable role specs, any one of which grants access."""

    specs: tuple[RoleSpec, ...]

    def __post_init__(self) -> None:
        if not self.specs:
            raise ConfigurationError("Role requirement must name at least one role")

    @classmethod
    def of(cls, *roles: str | RoleSpec) -> RoleRequirement:
        return cls(tuple(parse_role(role) if isinstance(role, str) else role for role in roles))

    def names(self) -> list[str]:
        return [role_name(spec) for spec in self.specs]


class DenialKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"


class CheckFailure(str, Enum):
    EXACT_MATCH_REQUIRED = "exact_match_required"
    INSUFFICIENT_LEVEL = "insufficient_level"


@dataclass(frozen=True, slots=True)
class FailedCheck:
    required: RoleSpec
    reason: CheckFailure


@dataclass(frozen=True, slots=True)
class AuthDenial:
    kind: DenialKind
    requirement: RoleRequirement
    actual_role: str | None = None
    failed_checks: tuple[FailedCheck, ...] = ()

    @property
    def reason(self) -> CheckFailure | None:
        """Reason the first acceptable role was refused, if a principal was present."""
        if not self.failed_checks:
            return None
        return self.failed_checks[0].reason

    def to_details(self) -> dict:
        return {
            "required_roles": self.requirement.names(),
            "actual_role": self.actual_role,
            "failed_checks": [
                {"required_role": role_name(check.required), "reason": check.reason.value}
                for check in self.failed_checks
            ],
        }


def _check_spec(actual_role: str, spec: RoleSpec) -> FailedCheck | None:
    if isinstance(spec, UnrecognizedRole) or spec in _EXACT_MATCH_ROLES:
        if actual_role == role_name(spec):
            return None
        return FailedCheck(required=spec, reason=CheckFailure.EXACT_MATCH_REQUIRED)

    if role_level(parse_role(actual_role)) >= role_level(spec):
        return None
    return FailedCheck(required=spec, reason=CheckFailure.INSUFFICIENT_LEVEL)


def check_authorization(principal: AuthPrincipal | None, requirement: RoleRequirement) -> AuthDenial | None:
    """Return ``None`` when the principal satisfies any spec of the requirement, else a denial."""
    if principal is None:
        return AuthDenial(kind=DenialKind.UNAUTHENTICATED, requirement=requirement)

    failures: list[FailedCheck] = []
    for spec in requirement.specs:
        failure = _check_spec(principal.role, spec)
        if failure is None:
            return None
        failures.append(failure)

    return AuthDenial(
        kind=DenialKind.UNAUTHORIZED,
        requirement=requirement,
        actual_role=principal.role,
        failed_checks=tuple(failures),
    )


__all__ = [
    "AuthDenial",
    "CheckFailure",
    "DenialKind",
    "FailedCheck",
    "Role",
    "RoleRequirement",
    "RoleSpec",
    "UnrecognizedRole",
    "check_authorization",
    "parse_role",
    "role_level",
    "role_name",
]
