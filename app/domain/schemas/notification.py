"""Pydantic schemas for outbound notifications."""

from pydantic import BaseModel


class EmailMessage(BaseModel):
    recipient: str
    subject: str
    body: str
