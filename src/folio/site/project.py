"""Project-wide options that shape post URLs and output paths."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Project(BaseModel):
    """Static site project options.

    Example::

        project = Project(base_url="/blog/", dest="site", pretty_urls="posts")
    """

    # Where pages live
    base_url: str = Field(default="/", description="URL prefix of the published site")
    dest: str = Field(default="site", description="Output directory")
    posts_path: str = Field(default="posts", description="Subdirectory for posts (URL and output)")
    tags_path: str = Field(default="tags", description="Subdirectory for tag listing pages")

    # How pages look
    pretty_urls: bool | Literal["posts"] = Field(
        default=False,
        description="Use directory URLs (posts/name/) instead of posts/name.html",
    )
    date_format: str = Field(default="%Y-%m-%d", description="strftime format for post dates")
    preview_length: int = Field(default=200, ge=0, description="Characters of plain text in previews")

    @property
    def pretty_posts(self) -> bool:
        return self.pretty_urls is True or self.pretty_urls == "posts"
