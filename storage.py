"""
Storage Module - Persistence behind a single interface

Two backends implement the same operations:
- MemStorage keeps records in dicts keyed by auto-incrementing integers
- DatabaseStorage keeps them in SQL tables through Flask-SQLAlchemy

Records cross the interface as plain dicts. Callers always receive copies,
so mutating a returned record never touches stored state.
"""

import copy
import threading
from abc import ABC, abstractmethod

from flask import current_app
from sqlalchemy.exc import IntegrityError

from extensions import db
from models import User, Project, Skill, Message, Settings, utcnow

# Fields an update may never overwrite
IMMUTABLE_FIELDS = {'id', 'user_id', 'created_at'}


class StorageError(Exception):
    """Base error raised by storage backends"""


class DuplicateError(StorageError):
    """A uniqueness rule would be violated"""


def _updatable(data):
    return {k: v for k, v in data.items() if k not in IMMUTABLE_FIELDS}


class Storage(ABC):
    """Persistence operations shared by every backend"""

    name = 'abstract'

    # User operations
    @abstractmethod
    def get_user(self, user_id): ...

    @abstractmethod
    def get_user_by_username(self, username): ...

    @abstractmethod
    def create_user(self, data): ...

    @abstractmethod
    def update_user(self, user_id, data): ...

    @abstractmethod
    def count_users(self): ...

    # Project operations
    @abstractmethod
    def get_projects(self, user_id): ...

    @abstractmethod
    def get_project(self, project_id): ...

    @abstractmethod
    def create_project(self, data): ...

    @abstractmethod
    def update_project(self, project_id, data): ...

    @abstractmethod
    def delete_project(self, project_id): ...

    # Skill operations
    @abstractmethod
    def get_skills(self, user_id): ...

    def get_skills_by_category(self, user_id, category):
        return [s for s in self.get_skills(user_id) if s['category'] == category]

    @abstractmethod
    def get_skill(self, skill_id): ...

    @abstractmethod
    def create_skill(self, data): ...

    @abstractmethod
    def update_skill(self, skill_id, data): ...

    @abstractmethod
    def delete_skill(self, skill_id): ...

    # Message operations
    @abstractmethod
    def get_messages(self, user_id): ...

    @abstractmethod
    def get_message(self, message_id): ...

    @abstractmethod
    def create_message(self, data): ...

    @abstractmethod
    def mark_message_as_read(self, message_id): ...

    @abstractmethod
    def delete_message(self, message_id): ...

    # Settings operations
    @abstractmethod
    def get_settings(self, user_id): ...

    @abstractmethod
    def update_settings(self, user_id, data): ...


class MemStorage(Storage):
    """In-process storage. Everything is lost when the process exits."""

    name = 'memory'

    def __init__(self):
        self._lock = threading.RLock()
        self._tables = {
            'users': {},
            'projects': {},
            'skills': {},
            'messages': {},
            'settings': {},
        }
        self._next_ids = {table: 1 for table in self._tables}

    def _insert(self, table, record):
        with self._lock:
            record_id = self._next_ids[table]
            self._next_ids[table] += 1
            record = dict(copy.deepcopy(record), id=record_id)
            self._tables[table][record_id] = record
            return copy.deepcopy(record)

    def _get(self, table, record_id):
        with self._lock:
            record = self._tables[table].get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def _filter(self, table, **criteria):
        with self._lock:
            return [
                copy.deepcopy(r) for _, r in sorted(self._tables[table].items())
                if all(r.get(k) == v for k, v in criteria.items())
            ]

    def _update(self, table, record_id, data):
        with self._lock:
            record = self._tables[table].get(record_id)
            if record is None:
                return None
            record.update(copy.deepcopy(_updatable(data)))
            return copy.deepcopy(record)

    def _delete(self, table, record_id):
        with self._lock:
            return self._tables[table].pop(record_id, None) is not None

    # User operations
    def get_user(self, user_id):
        return self._get('users', user_id)

    def get_user_by_username(self, username):
        matches = self._filter('users', username=username)
        return matches[0] if matches else None

    def create_user(self, data):
        with self._lock:
            if self.get_user_by_username(data.get('username')):
                raise DuplicateError(f"Username {data.get('username')} already exists")
            record = {
                'short_bio': '',
                'bio': '',
                'profile_image': None,
                'email': None,
                'phone': None,
                'location': None,
                'github': None,
                'linkedin': None,
                'twitter': None,
                'medium': None,
            }
            record.update(data)
            record['created_at'] = utcnow()
            return self._insert('users', record)

    def update_user(self, user_id, data):
        with self._lock:
            new_username = data.get('username')
            if new_username:
                existing = self.get_user_by_username(new_username)
                if existing and existing['id'] != user_id:
                    raise DuplicateError(f"Username {new_username} already exists")
            return self._update('users', user_id, data)

    def count_users(self):
        with self._lock:
            return len(self._tables['users'])

    # Project operations
    def get_projects(self, user_id):
        return self._filter('projects', user_id=user_id)

    def get_project(self, project_id):
        return self._get('projects', project_id)

    def create_project(self, data):
        now = utcnow()
        record = {
            'image': None,
            'primary_tag': None,
            'tags': [],
            'live_link': None,
            'github_link': None,
            'featured': False,
            'type': None,
            'status': 'draft',
        }
        record.update(data)
        record.update(created_at=now, updated_at=now)
        return self._insert('projects', record)

    def update_project(self, project_id, data):
        return self._update('projects', project_id, dict(data, updated_at=utcnow()))

    def delete_project(self, project_id):
        return self._delete('projects', project_id)

    # Skill operations
    def _skill_name_taken(self, user_id, name, exclude_id=None):
        return any(
            s['name'] == name and s['id'] != exclude_id
            for s in self._filter('skills', user_id=user_id)
        )

    def get_skills(self, user_id):
        return self._filter('skills', user_id=user_id)

    def get_skill(self, skill_id):
        return self._get('skills', skill_id)

    def create_skill(self, data):
        with self._lock:
            if self._skill_name_taken(data.get('user_id'), data['name']):
                raise DuplicateError(f"Skill {data['name']} already exists")
            return self._insert('skills', data)

    def update_skill(self, skill_id, data):
        with self._lock:
            skill = self._tables['skills'].get(skill_id)
            if skill is None:
                return None
            if data.get('name') and self._skill_name_taken(skill['user_id'], data['name'], exclude_id=skill_id):
                raise DuplicateError(f"Skill {data['name']} already exists")
            return self._update('skills', skill_id, data)

    def delete_skill(self, skill_id):
        return self._delete('skills', skill_id)

    # Message operations
    def get_messages(self, user_id):
        return self._filter('messages', user_id=user_id)

    def get_message(self, message_id):
        return self._get('messages', message_id)

    def create_message(self, data):
        record = dict(data, read=False, created_at=utcnow())
        return self._insert('messages', record)

    def mark_message_as_read(self, message_id):
        return self._update('messages', message_id, {'read': True})

    def delete_message(self, message_id):
        return self._delete('messages', message_id)

    # Settings operations
    def get_settings(self, user_id):
        matches = self._filter('settings', user_id=user_id)
        return matches[0] if matches else None

    def update_settings(self, user_id, data):
        with self._lock:
            settings = self.get_settings(user_id)
            if settings is None:
                settings = self._insert('settings', {'user_id': user_id, 'data': {}})
            return self._update('settings', settings['id'], data)


def model_to_dict(instance):
    """Convert a model instance to a detached dict of its columns"""
    return {
        column.name: copy.deepcopy(getattr(instance, column.name))
        for column in instance.__table__.columns
    }


class DatabaseStorage(Storage):
    """SQL storage through Flask-SQLAlchemy. Needs an application context."""

    name = 'database'

    def _all(self, model, **criteria):
        rows = model.query.filter_by(**criteria).order_by(model.id.asc()).all()
        return [model_to_dict(row) for row in rows]

    def _get(self, model, record_id):
        row = db.session.get(model, record_id)
        return model_to_dict(row) if row is not None else None

    def _commit(self, duplicate_message):
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.warning(f"Integrity error: {str(e.orig)}")
            raise DuplicateError(duplicate_message) from e

    def _insert(self, model, data, duplicate_message='Record already exists'):
        row = model(**data)
        db.session.add(row)
        self._commit(duplicate_message)
        return model_to_dict(row)

    def _update(self, model, record_id, data, duplicate_message='Record already exists'):
        row = db.session.get(model, record_id)
        if row is None:
            return None
        for key, value in _updatable(data).items():
            setattr(row, key, copy.deepcopy(value))
        self._commit(duplicate_message)
        return model_to_dict(row)

    def _delete(self, model, record_id):
        row = db.session.get(model, record_id)
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        return True

    # User operations
    def get_user(self, user_id):
        return self._get(User, user_id)

    def get_user_by_username(self, username):
        row = User.query.filter_by(username=username).first()
        return model_to_dict(row) if row is not None else None

    def create_user(self, data):
        return self._insert(User, dict(data, created_at=utcnow()),
                            f"Username {data.get('username')} already exists")

    def update_user(self, user_id, data):
        return self._update(User, user_id, data, f"Username {data.get('username')} already exists")

    def count_users(self):
        return User.query.count()

    # Project operations
    def get_projects(self, user_id):
        return self._all(Project, user_id=user_id)

    def get_project(self, project_id):
        return self._get(Project, project_id)

    def create_project(self, data):
        now = utcnow()
        return self._insert(Project, dict(data, created_at=now, updated_at=now))

    def update_project(self, project_id, data):
        return self._update(Project, project_id, dict(data, updated_at=utcnow()))

    def delete_project(self, project_id):
        return self._delete(Project, project_id)

    # Skill operations
    def get_skills(self, user_id):
        return self._all(Skill, user_id=user_id)

    def get_skills_by_category(self, user_id, category):
        return self._all(Skill, user_id=user_id, category=category)

    def get_skill(self, skill_id):
        return self._get(Skill, skill_id)

    def create_skill(self, data):
        return self._insert(Skill, data, f"Skill {data.get('name')} already exists")

    def update_skill(self, skill_id, data):
        return self._update(Skill, skill_id, data, f"Skill {data.get('name')} already exists")

    def delete_skill(self, skill_id):
        return self._delete(Skill, skill_id)

    # Message operations
    def get_messages(self, user_id):
        return self._all(Message, user_id=user_id)

    def get_message(self, message_id):
        return self._get(Message, message_id)

    def create_message(self, data):
        return self._insert(Message, dict(data, read=False, created_at=utcnow()))

    def mark_message_as_read(self, message_id):
        return self._update(Message, message_id, {'read': True})

    def delete_message(self, message_id):
        return self._delete(Message, message_id)

    # Settings operations
    def get_settings(self, user_id):
        row = Settings.query.filter_by(user_id=user_id).first()
        return model_to_dict(row) if row is not None else None

    def update_settings(self, user_id, data):
        row = Settings.query.filter_by(user_id=user_id).first()
        if row is None:
            row = Settings(user_id=user_id, data={})
            db.session.add(row)
            db.session.flush()
        for key, value in _updatable(data).items():
            setattr(row, key, copy.deepcopy(value))
        self._commit('Settings already exist for this user')
        return model_to_dict(row)


BACKENDS = {
    'memory': MemStorage,
    'database': DatabaseStorage,
}


def init_storage(app):
    """Create the configured backend and attach it to the app"""
    backend = app.config.get('STORAGE_BACKEND', 'memory')
    if backend not in BACKENDS:
        raise ValueError(f"Unknown STORAGE_BACKEND '{backend}', expected one of {sorted(BACKENDS)}")

    if backend == 'database':
        db.init_app(app)
        with app.app_context():
            db.create_all()
        app.logger.info(f"✓ Database storage initialized ({app.config['SQLALCHEMY_DATABASE_URI'].split('://')[0]})")
    else:
        app.logger.info("✓ In-memory storage initialized")

    storage = BACKENDS[backend]()
    app.extensions['storage'] = storage
    return storage


def get_storage():
    """Storage backend of the current application"""
    return current_app.extensions['storage']


__all__ = [
    'Storage',
    'MemStorage',
    'DatabaseStorage',
    'StorageError',
    'DuplicateError',
    'init_storage',
    'get_storage',
    'model_to_dict'
]
