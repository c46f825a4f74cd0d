"""
Notification model
"""

from app.models.base import DocumentModel


class Notification(DocumentModel):
    title: str
    message: str
    user: str
