"""Request bodies accepted by the API."""

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class FacultyEventIn(BaseModel):
    """New faculty event; title and event_role are checked by the service."""
    title: str = ''
    type: Optional[str] = None
    event_role: str = ''
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    participants: Optional[Union[int, str]] = None
    remarks: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)


class DepartmentEventIn(BaseModel):
    """New or edited department event."""
    title: str = ''
    type: str = ''
    coordinator_name: str = ''
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    participants: Optional[Union[int, str]] = None
    location: str = ''
    output: Optional[str] = None
    attachments: Optional[str] = None
    certificate_link: Optional[str] = None


class CommentIn(BaseModel):
    """Free-text reason attached to a moderation action."""
    comment: Optional[str] = None


class FlagIn(CommentIn):
    owner_email: Optional[str] = None


class FacultyProfileIn(BaseModel):
    """Editable profile details; an empty profile_pic keeps the current picture."""
    name: str = ''
    gender: Optional[str] = None
    school: Optional[str] = None
    department: Optional[str] = None
    profile_pic: Optional[str] = None
