"""
Site-level collaborators that produce and consume results.

These are deliberately thin: they compute URLs and output paths for posts,
look up templates, and fold per-post outcomes into one result with
``run_batch``.
"""

from folio.site.post import Fragment, Post, Tag, Template, build_fragments
from folio.site.project import Project

__all__ = ["Project", "Post", "Tag", "Fragment", "Template", "build_fragments"]
