"""Validation helpers for user-supplied values (bump types, targets, formats)."""

import re
from typing import List

from forgegraph.constants import BumpType, VersionScheme

CALVER_TOKENS = ("2006", "06", "01", "02", "WW")


def is_valid_bump_type(value: str) -> bool:
    return value in {bump.value for bump in BumpType}


def is_valid_version_scheme(value: str) -> bool:
    return value in {scheme.value for scheme in VersionScheme}


def validate_template_syntax(template: str) -> List[str]:
    """Basic check of ``{{ }}`` template placeholders.

    Returns:
        List of error messages, empty if the template looks fine
    """
    errors = []

    if len(re.findall(r"\{\{", template)) != len(re.findall(r"\}\}", template)):
        errors.append("Unmatched template braces {{ }}")

    if "{{}}" in template:
        errors.append("Empty template variable {{ }}")

    return errors


def validate_platform_target(target: str) -> bool:
    """Check a build target is OS/ARCH or OS/ARCH/VARIANT."""
    return len(target.split("/")) in (2, 3)


def validate_calver_format(calver_format: str) -> bool:
    """Check a CalVer format contains at least one Go time token (or WW)."""
    return any(token in calver_format for token in CALVER_TOKENS)
