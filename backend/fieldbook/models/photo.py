"""Photo model"""

from sqlalchemy import Column, String, Text, Float, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from fieldbook.models.base import BaseModel


class Photo(BaseModel):
    """
    Photo model representing a site photo attached to a project.
    ``filename`` is the blob store locator of the uploaded bytes.
    """

    __tablename__ = "photos"
    __created_fields__ = ("taken_at", "created_at")

    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    filename = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    taken_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)

    project = relationship("Project", back_populates="photos")

    def __repr__(self):
        return f"<Photo(id={self.id}, filename={self.filename})>"
