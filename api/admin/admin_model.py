import uuid
from sqlalchemy import Column, String
from config.database import Base, UTCDateTime


class Admin(Base):
    __tablename__ = "admins"

    id         = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    email      = Column(String(255), nullable=False, unique=True, index=True)
    # passlib hash, never the plain password
    password   = Column(String(255), nullable=False)
    created_at = Column(UTCDateTime(), nullable=False)

    def __repr__(self):
        return f"<Admin(id={self.id}, email='{self.email}')>"
