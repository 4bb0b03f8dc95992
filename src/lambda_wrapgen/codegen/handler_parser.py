"""Handler reference parsing.

A handler reference is ``<module-path>.<method>``: the module path may
itself contain ``/`` or ``.`` separators, and the method is whatever
follows the last dot. Invalid references are reported as ``None`` so a
single misconfigured function never blocks the rest of the build.
"""

from __future__ import annotations

import re
from typing import Optional

from lambda_wrapgen.models.handler import ParsedReference

_METHOD_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def parse_handler_reference(raw: str) -> Optional[ParsedReference]:
    """Split *raw* into a module path and a method name.

    Args:
        raw: Handler string such as ``mydir/func.myhandler`` or
            ``mydir.func.myhandler``.

    Returns:
        The parsed reference, or ``None`` when *raw* has no module path,
        no method, or a method that is not a valid identifier.
    """
    if not raw:
        return None

    module_path, sep, method = raw.strip().rpartition(".")
    if not sep:
        return None

    if module_path.startswith("./"):
        module_path = module_path[2:]

    if not module_path or not _METHOD_RE.match(method):
        return None

    return ParsedReference(module_path=module_path, method_name=method)
