"""
SQLAlchemy models for users, chirps and refresh tokens.

There is no module-level storage instance: api.create_app() builds a
DBStorage per application (see api.get_storage()).
"""
from models.base_model import Base
from models.user import User
from models.chirp import Chirp
from models.refresh_token import RefreshToken
