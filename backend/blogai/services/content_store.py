"""Content Store — persistence for blog posts (the job artifacts)."""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from blogai.models import BlogPost


class ContentStore:

    def __init__(self, db: Session):
        self.db = db

    def create_artifact(self, fields: dict[str, Any], commit: bool = True) -> BlogPost:
        """Insert a post. With ``commit=False`` it is only flushed."""
        post = BlogPost(**fields)
        self.db.add(post)
        if commit:
            self.db.commit()
            self.db.refresh(post)
        else:
            self.db.flush()
        return post

    def find_by_id_for_owner(self, post_id: str, owner_id: str) -> BlogPost | None:
        return (
            self.db.query(BlogPost)
            .filter(BlogPost.id == post_id, BlogPost.user_id == owner_id)
            .first()
        )

    def find_by_job(self, job_id: str) -> BlogPost | None:
        return self.db.query(BlogPost).filter(BlogPost.job_id == job_id).first()
