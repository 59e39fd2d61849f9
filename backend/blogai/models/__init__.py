"""SQLAlchemy ORM models package."""
from blogai.models.generation_job import GenerationJob
from blogai.models.blog_post import BlogPost

__all__ = [
    "GenerationJob",
    "BlogPost",
]
