"""Models for the actors that own or moderate events."""

from typing import Dict, Any
from sqlalchemy import Column, Integer, String, DateTime

from .base import Base, utc_now


class Faculty(Base):
    """
    A faculty member who records workshops attended or organized.

    Fields:
        id: Row identifier (auto-generated)
        faculty_id: Institutional faculty code used to log in
        name: Display name
        email: Contact email
        password: Stored credential (compared verbatim by the login screen)
        school: School the faculty member belongs to (optional)
        department: Department name (optional)
        mobile: Phone number (optional)
        gender: Gender (optional)
        profile_pic: Public URL of the profile picture (optional)
        created_at: When the row was created
    """
    __tablename__ = 'faculty'

    id = Column(Integer, primary_key=True, autoincrement=True)
    faculty_id = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    password = Column(String)
    school = Column(String)
    department = Column(String)
    mobile = Column(String)
    gender = Column(String)
    profile_pic = Column(String)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out the credential."""
        return {
            'id': self.id,
            'faculty_id': self.faculty_id,
            'name': self.name,
            'email': self.email,
            'school': self.school,
            'department': self.department,
            'mobile': self.mobile,
            'gender': self.gender,
            'profile_pic': self.profile_pic,
        }

    def __str__(self) -> str:
        return f"Faculty(id={self.id}, faculty_id={self.faculty_id}, name={self.name})"


class Department(Base):
    """A department that runs its own programs."""
    __tablename__ = 'departments'

    id = Column(Integer, primary_key=True, autoincrement=True)
    department_id = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    password = Column(String)
    school = Column(String)
    head_name = Column(String)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out the credential."""
        return {
            'id': self.id,
            'department_id': self.department_id,
            'name': self.name,
            'email': self.email,
            'school': self.school,
            'head_name': self.head_name,
        }

    def __str__(self) -> str:
        return f"Department(id={self.id}, department_id={self.department_id}, name={self.name})"


class Admin(Base):
    """Portal administrator."""
    __tablename__ = 'admin'

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True)
    password = Column(String)
    name = Column(String)

    def __str__(self) -> str:
        return f"Admin(id={self.id}, username={self.username})"
