"""
Regex construction for rename sessions.

Builds the matcher and renamer expressions from user input and converts
replacement strings into templates understood by ``re.sub``. Replacement
strings may use ``$1``, ``${1}``, ``${name}`` and ``$$`` placeholders as
well as Python's own ``\\1`` and ``\\g<name>`` references.
"""

import logging
import re

from ..domain.models import BulkRenameError

logger = logging.getLogger(__name__)

NO_CAPTURE_GROUPS = "You don't have any capture groups for renaming?"
TOO_MANY_CAPTURE_GROUPS = (
    "Sorry, this can only deal with a single capture group at the moment!"
)

_REPLACEMENT_TOKEN = re.compile(
    r"""
    \$\$                               # escaped dollar
    | \$\{(?P<braced>[^}]*)\}          # ${1} or ${name}
    | \$(?P<number>\d+)                # $1
    | \$(?P<name>[A-Za-z_][A-Za-z0-9_]*)  # $name
    | \\\\                             # escaped backslash
    | \\g<[^>]*>                       # python named/numbered reference
    | \\(?P<digits>\d{1,2})            # \1 or \0, rewritten as \g<N>
    | \\                               # any other backslash is literal
    """,
    re.VERBOSE,
)

_TEMPLATE_REFERENCE = re.compile(r"\\g<([^>]*)>|\\(\d{1,2})|\\\\")


class PatternError(BulkRenameError):
    """Raised when a matcher, renamer or replacement cannot be used."""

    pass


def build_matcher_regex(matcher: str) -> re.Pattern[str]:
    """
    Compile the file-matching regex, anchoring it to the end of the path.

    A ``$`` is appended unless the pattern already ends with one, so
    ``\\.jpeg`` only selects paths that end in ``.jpeg``.

    Raises:
        PatternError: If the pattern does not compile
    """
    if not matcher.endswith("$"):
        matcher = f"{matcher}$"

    logger.info(f"Creating regex on {matcher}")
    try:
        return re.compile(matcher)
    except re.error as e:
        raise PatternError(f"Failed to parse matcher regex: {e}") from e


def build_renamer_regex(renamer: str) -> re.Pattern[str]:
    """
    Compile the renamer regex and check it has exactly one capture group.

    Raises:
        PatternError: If the pattern does not compile or has zero or
            several capture groups
    """
    logger.info(f"Creating renamer regex on {renamer}")
    try:
        regex = re.compile(renamer)
    except re.error as e:
        raise PatternError(f"Failed to parse renamer regex: {e}") from e

    if regex.groups == 0:
        raise PatternError(NO_CAPTURE_GROUPS)
    if regex.groups > 1:
        raise PatternError(TOO_MANY_CAPTURE_GROUPS)
    return regex


def expand_replacement(template: str) -> str:
    """Convert a replacement string into an ``re.sub`` template."""

    def _convert(match: re.Match[str]) -> str:
        token = match.group(0)
        if token == "$$":
            return "$"

        # Numbered references always use \g<N>; a bare \0 would be an octal NUL
        digits = match.group("number") or match.group("digits")
        if digits:
            return f"\\g<{int(digits)}>"

        reference = match.group("braced")
        if reference is None:
            reference = match.group("name")
        if reference:
            if reference.isdigit():
                reference = int(reference)
            return f"\\g<{reference}>"
        if match.group("braced") == "":
            return "${}"

        if token == "\\":
            return "\\\\"
        return token

    return _REPLACEMENT_TOKEN.sub(_convert, template)


def validate_replacement(template: str, regex: re.Pattern[str]) -> None:
    """
    Check every group referenced by an expanded template exists in ``regex``.

    Raises:
        PatternError: If the template references an unknown group
    """
    for match in _TEMPLATE_REFERENCE.finditer(template):
        reference = match.group(1) or match.group(2)
        if reference is None:
            continue
        if reference.isdigit():
            if int(reference) > regex.groups:
                raise PatternError(
                    f"Replacement refers to group {reference} but the renamer "
                    f"only has {regex.groups}"
                )
        elif reference not in regex.groupindex:
            raise PatternError(f"Replacement refers to unknown group '{reference}'")
