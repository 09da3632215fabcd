"""HTTP API for the SEO grader."""

from seo_grader.api.app import create_app

__all__ = ["create_app"]
