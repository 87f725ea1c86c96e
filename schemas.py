"""
Request Schemas - Pydantic models validating everything that enters storage

Create schemas describe a full record, update schemas the same fields with
every one optional. Ownership (user_id), ids, timestamps and the read flag
are never accepted from the client: unknown keys are dropped.
"""

import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.badges import DEFAULT_STATUS

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

ProjectStatus = Literal['draft', 'in progress', 'live', 'archived']
ProjectType = Literal['web', 'mobile', 'design', 'other']
SkillCategory = Literal['frontend', 'backend', 'database', 'tooling']

PROFILE_FIELDS = (
    'name', 'title', 'short_bio', 'bio', 'profile_image', 'email', 'phone',
    'location', 'github', 'linkedin', 'twitter', 'medium'
)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _reject_null(value):
    if value is None:
        raise ValueError('may not be null')
    return value


def _check_email(value):
    if value is not None and not EMAIL_PATTERN.match(value):
        raise ValueError('Please enter a valid email address')
    return value


class Schema(BaseModel):
    """Base for all request schemas"""
    model_config = ConfigDict(str_strip_whitespace=True, extra='ignore')

    def to_record(self):
        """Only the fields the client actually sent"""
        return self.model_dump(exclude_unset=True)


# =============================================================================
# Auth
# =============================================================================

class LoginRequest(Schema):
    username: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6, max_length=255)


class RegisterRequest(Schema):
    username: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6, max_length=255)
    name: str = Field(..., min_length=2, max_length=255)
    title: str = Field(..., min_length=2, max_length=255)
    short_bio: str = Field(default='', max_length=500)
    bio: str = Field(default='', max_length=10000)

    @field_validator('username')
    @classmethod
    def username_characters(cls, v: str) -> str:
        if not re.match(r'^[A-Za-z0-9_.-]+$', v):
            raise ValueError('Username may only contain letters, digits, dots, dashes and underscores')
        return v


# =============================================================================
# Profile
# =============================================================================

class ProfileUpdate(Schema):
    """Partial profile update. username and password cannot change here."""
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    short_bio: Optional[str] = Field(default=None, max_length=500)
    bio: Optional[str] = Field(default=None, max_length=10000)
    profile_image: Optional[str] = Field(default=None, max_length=500)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    location: Optional[str] = Field(default=None, max_length=255)
    github: Optional[str] = Field(default=None, max_length=500)
    linkedin: Optional[str] = Field(default=None, max_length=500)
    twitter: Optional[str] = Field(default=None, max_length=500)
    medium: Optional[str] = Field(default=None, max_length=500)

    @field_validator('name', 'title', 'short_bio', 'bio', mode='before')
    @classmethod
    def required_not_null(cls, v):
        return _reject_null(v)

    @field_validator('profile_image', 'email', 'phone', 'location',
                     'github', 'linkedin', 'twitter', 'medium', mode='before')
    @classmethod
    def optional_blank(cls, v):
        return _blank_to_none(v)

    @field_validator('email')
    @classmethod
    def email_format(cls, v):
        return _check_email(v)


# =============================================================================
# Projects
# =============================================================================

class _ProjectFields(Schema):

    @field_validator('image', 'primary_tag', 'live_link', 'github_link', 'type',
                     mode='before', check_fields=False)
    @classmethod
    def optional_blank(cls, v):
        return _blank_to_none(v)

    @field_validator('type', 'status', mode='before', check_fields=False)
    @classmethod
    def lowercase_choice(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('tags', mode='before', check_fields=False)
    @classmethod
    def split_tags(cls, v):
        # The dashboard form sends tags as one comma-separated string
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(',')
        if isinstance(v, (list, tuple)):
            return [t.strip() for t in v if isinstance(t, str) and t.strip()]
        return v

    @field_validator('featured', mode='before', check_fields=False)
    @classmethod
    def featured_default(cls, v):
        return False if v is None else v


class ProjectCreate(_ProjectFields):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=10000)
    image: Optional[str] = Field(default=None, max_length=500)
    primary_tag: Optional[str] = Field(default=None, max_length=100)
    tags: List[str] = Field(default_factory=list)
    live_link: Optional[str] = Field(default=None, max_length=500)
    github_link: Optional[str] = Field(default=None, max_length=500)
    featured: bool = False
    type: Optional[ProjectType] = None
    status: ProjectStatus = DEFAULT_STATUS

    def to_record(self):
        return self.model_dump()


class ProjectUpdate(_ProjectFields):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1, max_length=10000)
    image: Optional[str] = Field(default=None, max_length=500)
    primary_tag: Optional[str] = Field(default=None, max_length=100)
    tags: Optional[List[str]] = None
    live_link: Optional[str] = Field(default=None, max_length=500)
    github_link: Optional[str] = Field(default=None, max_length=500)
    featured: Optional[bool] = None
    type: Optional[ProjectType] = None
    status: Optional[ProjectStatus] = None

    @field_validator('title', 'description', 'status', mode='before')
    @classmethod
    def required_not_null(cls, v):
        return _reject_null(v)


# =============================================================================
# Skills
# =============================================================================

class _SkillFields(Schema):

    @field_validator('category', mode='before', check_fields=False)
    @classmethod
    def lowercase_category(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class SkillCreate(_SkillFields):
    name: str = Field(..., min_length=1, max_length=100)
    percentage: int = Field(..., ge=0, le=100)
    category: SkillCategory

    def to_record(self):
        return self.model_dump()


class SkillUpdate(_SkillFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    percentage: Optional[int] = Field(default=None, ge=0, le=100)
    category: Optional[SkillCategory] = None

    @field_validator('name', 'percentage', 'category', mode='before')
    @classmethod
    def required_not_null(cls, v):
        return _reject_null(v)


# =============================================================================
# Messages & settings
# =============================================================================

class MessageCreate(Schema):
    name: str = Field(..., min_length=2, max_length=255)
    email: str = Field(..., max_length=255)
    subject: str = Field(..., min_length=3, max_length=255)
    message: str = Field(..., min_length=10, max_length=5000)

    @field_validator('email')
    @classmethod
    def email_format(cls, v):
        return _check_email(v)

    def to_record(self):
        return self.model_dump()


class SettingsUpdate(Schema):
    """Replaces the stored settings object; data must always be sent"""
    data: Dict[str, Any] = Field(...)

    def to_record(self):
        return self.model_dump()


__all__ = [
    'PROFILE_FIELDS',
    'LoginRequest',
    'RegisterRequest',
    'ProfileUpdate',
    'ProjectCreate',
    'ProjectUpdate',
    'SkillCreate',
    'SkillUpdate',
    'MessageCreate',
    'SettingsUpdate'
]
