"""
RefreshToken model: opaque refresh tokens kept server side so they can be revoked.
Fields:
- token (primary key) - 64 hex chars
- user_id (String(36)) - FK to users.id
- created_at, updated_at, expires_at
- revoked_at (null while active)
"""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import Base, TimestampMixin


class RefreshToken(TimestampMixin, Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(64), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="refresh_tokens")

    def __repr__(self):
        # never print the token itself
        return f"<RefreshToken user={self.user_id} expires_at={self.expires_at}>"
