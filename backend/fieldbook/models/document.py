"""Document model"""

import enum
from sqlalchemy import Column, String, Integer, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from fieldbook.models.base import BaseModel


class DocumentType(str, enum.Enum):
    """Document classification"""
    DRAWING = "drawing"
    SPECIFICATION = "specification"
    REPORT = "report"
    PERMIT = "permit"
    INVOICE = "invoice"
    OTHER = "other"


class Document(BaseModel):
    """Uploaded project document; ``filename`` is the blob store locator"""

    __tablename__ = "documents"
    __created_fields__ = ("uploaded_at",)

    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False, index=True)
    filename = Column(String(500), nullable=False)
    original_name = Column(String(255), nullable=False)
    type = Column(String(50), default=DocumentType.OTHER.value, nullable=False)
    size = Column(Integer, nullable=False)
    uploaded_at = Column(DateTime, nullable=False)

    project = relationship("Project", back_populates="documents")
