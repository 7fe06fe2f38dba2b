# website_users/models/website_user.py
from sqlalchemy import Column, Integer, String
from website_users.core.db import Base

class WebsiteUser(Base):
    __tablename__ = "website_users"
    # ids of deleted rows must never be handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True, index=True)
    email = Column(String, nullable=True)

    def __repr__(self):
        return f"WebsiteUser(id={self.id!r}, name={self.name!r}, email={self.email!r})"
