"""
Blog posts and their conversion into renderable fragments.

A ``Post`` is built from a parsed source document (header, extra fields,
converted HTML). ``Post.to_fragment`` renders it through a named template
and reports problems as results; ``build_fragments`` does that for every
post and aggregates the outcome under ``"building posts"``.

Fields:
    file           Source path
    title          Post title
    date           Post date (formatted with ``Project.date_format``)
    raw_date       Post date as a datetime
    tags           Tags of the post
    url            Absolute URL of the post on the site
    canonical_url  Custom canonical URL, if any
    html           Post contents converted into HTML
    preview        Plain-text preview
    output         Destination path
    extras         Extra header fields
    template       Template name override (defaults to ``"post"``)
"""

from __future__ import annotations

import os
import posixpath
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from folio.core.batch import run_batch
from folio.core.errors import SourceError, TemplateNotFoundError
from folio.core.result import Err, Message, Result, try_result
from folio.site.project import Project

POSTS_LABEL = "building posts"
DEFAULT_TEMPLATE = "post"

# A template takes the page bindings and returns rendered HTML.
Template = Callable[[Mapping[str, Any]], Result[str]]

_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class Tag:
    name: str
    list_url: str

    @classmethod
    def batch_create(cls, names: Iterable[str], project: Project) -> list[Tag]:
        """Tags for ``names`` (duplicates dropped, sorted by name)."""
        return [
            cls(name, posixpath.join(project.base_url, project.tags_path, name))
            for name in sorted(set(names))
        ]


@dataclass(frozen=True, slots=True)
class Fragment:
    """A rendered piece of HTML plus the metadata it was rendered from."""

    file: str
    output: str
    metadata: dict[str, Any]
    html: str


def generate_preview(html: str, length: int) -> str:
    """Plain text of ``html``, whitespace collapsed, cut to ``length`` characters."""
    if length <= 0:
        return ""
    text = _SPACE_RE.sub(" ", _TAG_RE.sub(" ", html)).strip()
    return text[:length].rstrip()


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime(1, 1, 1)


def lookup_template(templates: Mapping[str, Template], name: str) -> Template:
    try:
        return templates[name]
    except KeyError:
        raise TemplateNotFoundError(name) from None


def _post_stem(path: str) -> str:
    # Only the ".md" suffix is dropped; "notes.txt" keeps its extension.
    name = os.path.basename(path)
    return name[: -len(".md")] if name.endswith(".md") else name


def _header_tags(path: str, header: Mapping[str, Any]) -> list[str]:
    tags = header.get("tags") or []
    if isinstance(tags, str) or not isinstance(tags, (list, tuple)):
        raise SourceError(f"tags must be a list of strings, got {type(tags).__name__}", file=path)
    bad = [tag for tag in tags if not isinstance(tag, str)]
    if bad:
        raise SourceError(f"tags must be strings, got {bad[0]!r}", file=path)
    return list(tags)


def url_and_output(basename: str, project: Project) -> tuple[str, str]:
    """URL and destination path for a post with the given file stem."""
    if project.pretty_posts:
        return (
            posixpath.join(project.base_url, project.posts_path, basename),
            os.path.join(project.dest, project.posts_path, basename, "index.html"),
        )
    return (
        posixpath.join(project.base_url, project.posts_path, basename + ".html"),
        os.path.join(project.dest, project.posts_path, basename + ".html"),
    )


@dataclass
class Post:
    file: str
    title: str | None
    date: str
    raw_date: datetime
    tags: list[Tag]
    url: str
    canonical_url: str | None
    html: str
    preview: str
    output: str
    extras: dict[str, Any] = field(default_factory=dict)
    template: str | None = None

    @classmethod
    def new(
        cls,
        path: str,
        header: Mapping[str, Any],
        extras: Mapping[str, Any],
        html: str,
        project: Project,
    ) -> Post:
        """
        Build a post from a parsed document.

        Raises:
            SourceError: ``title`` is not a string or ``tags`` is not a list of strings
        """
        title = header.get("title")
        if title is not None and not isinstance(title, str):
            raise SourceError(f"title must be a string, got {type(title).__name__}", file=path)
        raw_date = _to_datetime(header.get("date"))
        stem = _post_stem(path)
        url, output = url_and_output(stem, project)

        return cls(
            file=path,
            title=title,
            date=raw_date.strftime(project.date_format),
            raw_date=raw_date,
            tags=Tag.batch_create(_header_tags(path, header), project),
            url=url,
            canonical_url=header.get("canonical_url"),
            html=html,
            preview=generate_preview(html, project.preview_length),
            output=output,
            extras=dict(extras),
            template=header.get("template"),
        )

    @classmethod
    def load(
        cls,
        path: str,
        header: Mapping[str, Any],
        extras: Mapping[str, Any],
        html: str,
        project: Project,
    ) -> Result[Post]:
        """Like ``new``, but a malformed header becomes a failure located at ``path``."""
        return try_result(lambda: cls.new(path, header, extras, html, project), file=path)

    def compact(self) -> dict[str, Any]:
        """Template-facing metadata: everything but file, html and output."""
        return {
            "type": "post",
            "title": self.title,
            "date": self.date,
            "raw_date": self.raw_date,
            "tags": list(self.tags),
            "url": self.url,
            "canonical_url": self.canonical_url,
            "preview": self.preview,
            "extras": dict(self.extras),
            "template": self.template,
        }

    def to_fragment(self, templates: Mapping[str, Template]) -> Result[Fragment]:
        """Render this post through its template."""
        try:
            template = lookup_template(templates, self.template or DEFAULT_TEMPLATE)
        except TemplateNotFoundError as e:
            return Err(Message(e.message))

        metadata = self.compact()
        bindings = {"page": metadata, "contents": self.html}
        rendered = try_result(lambda: template(bindings), file=self.file).flat_map(lambda inner: inner)
        return rendered.map(lambda html: Fragment(self.file, self.output, metadata, html))


def build_fragments(
    posts: Iterable[Post],
    templates: Mapping[str, Template],
    *,
    max_workers: int | None = None,
) -> Result[list[Fragment]]:
    """Render every post; failures are aggregated under ``"building posts"``."""
    return run_batch(posts, lambda post: post.to_fragment(templates), POSTS_LABEL, max_workers=max_workers)


__all__ = [
    "POSTS_LABEL",
    "DEFAULT_TEMPLATE",
    "Template",
    "Tag",
    "Fragment",
    "Post",
    "generate_preview",
    "url_and_output",
    "lookup_template",
    "build_fragments",
]
