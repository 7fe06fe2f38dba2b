from website_users.models.website_user import WebsiteUser

__all__ = ["WebsiteUser"]
