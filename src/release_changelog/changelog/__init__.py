"""
Changelog generation.

This package resolves release branches, parses the commits unique to a
release and renders them as a Markdown changelog section. See
:mod:`release_changelog.changelog.parser` and
:mod:`release_changelog.changelog.renderer` for details.
"""

from .branches import ReleaseBranchError  # noqa: F401
from .generator import get_changelog_text  # noqa: F401
from .models import CommitRecord  # noqa: F401
