# Users and their activity logs
from app.models.users.user_models import User
from app.models.support.log_models import Log
