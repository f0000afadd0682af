"""SPDX license identifier helpers."""

from __future__ import annotations

import re

# idstring per SPDX 2.3 Annex D, with the optional "+" or-later suffix
_LICENSE_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.-]*\+?$")
_LICENSE_REF = re.compile(r"^(DocumentRef-[A-Za-z0-9.-]+:)?LicenseRef-[A-Za-z0-9.-]+$")

# Syntactically valid, but they state that no license can be evaluated
NON_LICENSES = frozenset({"NOASSERTION", "NONE"})


def is_spdx_identifier(value: str) -> bool:
    """Check whether a string is a single SPDX license identifier.

    Compound expressions (``MIT OR Apache-2.0``, ``GPL-2.0 WITH
    Classpath-exception-2.0``) and anything containing whitespace or
    parentheses are rejected.

    Args:
        value: Candidate identifier

    Returns:
        True if the value is one identifier or LicenseRef
    """
    if not value or value != value.strip():
        return False
    return bool(_LICENSE_REF.match(value) or _LICENSE_ID.match(value))


def is_evaluable_license(value: str) -> bool:
    """Check whether a license can be matched against allow/deny lists."""
    return is_spdx_identifier(value) and value not in NON_LICENSES
