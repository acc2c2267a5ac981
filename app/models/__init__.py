from app.models.country import Country  # noqa: F401
from app.models.user import User  # noqa: F401
