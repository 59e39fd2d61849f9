"""GenerationJob model — tracks asynchronous blog-post generation requests."""
import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Text, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from blogai.database import Base


class GenerationJob(Base):
    __tablename__ = "generation_jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # Parameters (immutable once created)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    tone: Mapped[str] = mapped_column(String(32), nullable=False, default="professional")
    content_type: Mapped[str] = mapped_column(String(32), nullable=False, default="blog_post")
    length_preference: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    target_audience: Mapped[list] = mapped_column(JSON, nullable=False, default=lambda: ["beginners"])
    sections: Mapped[list] = mapped_column(JSON, nullable=False, default=lambda: ["introduction", "conclusion"])

    # Lifecycle (written by the dispatcher only)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="queued")  # queued | generating | completed | failed
    processing_started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    result: Mapped[str | None] = mapped_column(Text, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    post = relationship("BlogPost", back_populates="job", uselist=False)

    __table_args__ = (
        Index("ix_generation_jobs_user_created", "user_id", "created_at"),
        Index("ix_generation_jobs_status_created", "status", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<GenerationJob {self.id[:8]} ({self.status})>"
