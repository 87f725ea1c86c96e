from extensions import db
from datetime import datetime, timezone
from sqlalchemy import JSON


def utcnow():
    """Naive UTC timestamp, matching what SQLite hands back"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


# sqlite_autoincrement keeps SQLite from handing out the id of a deleted row again

class User(db.Model):
    __tablename__ = 'users'
    __table_args__ = {'sqlite_autoincrement': True}
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    username = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    short_bio = db.Column(db.Text, nullable=False, default='')
    bio = db.Column(db.Text, nullable=False, default='')
    profile_image = db.Column(db.String(500))
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    location = db.Column(db.String(255))
    github = db.Column(db.String(500))
    linkedin = db.Column(db.String(500))
    twitter = db.Column(db.String(500))
    medium = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    projects = db.relationship('Project', backref='owner', lazy=True, cascade='all, delete-orphan')
    skills = db.relationship('Skill', backref='owner', lazy=True, cascade='all, delete-orphan')
    messages = db.relationship('Message', backref='recipient', lazy=True, cascade='all, delete-orphan')


class Project(db.Model):
    __tablename__ = 'projects'
    __table_args__ = {'sqlite_autoincrement': True}
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(500))
    primary_tag = db.Column(db.String(100))
    tags = db.Column(SafeJSON, default=list)
    live_link = db.Column(db.String(500))
    github_link = db.Column(db.String(500))
    featured = db.Column(db.Boolean, default=False)
    type = db.Column(db.String(50))  # web, mobile, design, other
    status = db.Column(db.String(50), default='draft')  # draft, in progress, live, archived
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))


class Skill(db.Model):
    __tablename__ = 'skills'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'name', name='uq_skill_owner_name'),
        {'sqlite_autoincrement': True},
    )
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    percentage = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(50), nullable=False)  # frontend, backend, database, tooling
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))


class Message(db.Model):
    __tablename__ = 'messages'
    __table_args__ = (
        db.Index('idx_message_user_read', 'user_id', 'read'),
        {'sqlite_autoincrement': True},
    )
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    read = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))


class Settings(db.Model):
    __tablename__ = 'settings'
    __table_args__ = {'sqlite_autoincrement': True}
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    data = db.Column(SafeJSON, default=dict)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True)
