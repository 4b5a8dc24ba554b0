"""
Extension handles shared by the application factory, models and services.

They are bound to an app in create_app() via init_app(), so importing them
never requires an application.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()  # session tokens, cookie or Bearer header
cors = CORS()
