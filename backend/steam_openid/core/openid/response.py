"""
Parser for check_authentication responses.

Steam answers the direct verification request with newline-separated
key:value text (OpenID 2.0 key-value form), e.g.:

    ns:http://specs.openid.net/auth/2.0
    is_valid:true

Line positions are significant: line 0 echoes the namespace, line 1 carries
the validity flag.
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class CheckAuthenticationResult:
    namespace_line: str
    validity_line: str
    fields: Dict[str, str] = field(default_factory=dict)
    namespace_ok: bool = False
    is_valid: bool = False


def parse_check_authentication(body: str, namespace: str) -> CheckAuthenticationResult:
    lines = body.split("\n")
    namespace_line = lines[0]
    validity_line = lines[1] if len(lines) > 1 else ""

    fields: Dict[str, str] = {}
    for line in lines:
        key, sep, value = line.partition(":")
        if sep:
            fields.setdefault(key, value)

    return CheckAuthenticationResult(
        namespace_line=namespace_line,
        validity_line=validity_line,
        fields=fields,
        namespace_ok=namespace_line == f"ns:{namespace}",
        # A missing flag line counts as not valid
        is_valid=len(lines) > 1 and not validity_line.endswith("false"),
    )
