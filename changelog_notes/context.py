"""Builds the template context for a changelog notes build."""

import structlog

from changelog_notes.constants import DEFAULT_HOST
from changelog_notes.models import BuildContext, BuildOptions

logger = structlog.get_logger(__name__)


def build_context(options: BuildOptions) -> BuildContext:
    """Assemble the read-only render context from build options.

    Compare links are only rendered when a previous tag is known.
    """
    values = {
        "host": options.host or DEFAULT_HOST,
        "owner": options.owner or "",
        "repository": options.repository or "",
        "version": options.version,
        "previous_tag": options.previous_tag,
        "current_tag": options.current_tag,
        "link_compare": bool(options.previous_tag),
    }
    if options.date:
        values["date"] = options.date
    context = BuildContext(**values)
    logger.debug("Built changelog context", **context.model_dump())
    return context
