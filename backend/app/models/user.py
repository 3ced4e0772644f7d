from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from app.db import Base
from app.utils.clock import utcnow


class User(Base):
    __tablename__ = "users"

    # issued by the identity provider, not generated here
    id = Column(String(128), primary_key=True)
    email = Column(String(255), unique=True, nullable=True)
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    profile_image_url = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    orders = relationship("Order", back_populates="user")

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
