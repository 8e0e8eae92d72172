from .users import Users, UserRole
from .user_login_session import UserLoginSession, LoginPlatform
