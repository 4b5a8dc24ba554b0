"""
Routes Package - API Blueprints

This package contains all Flask blueprints for the API endpoints.
"""

from adrevolution.routes.auth import auth_bp
from adrevolution.routes.users import users_bp
from adrevolution.routes.account import account_bp
from adrevolution.routes.company import company_bp
from adrevolution.routes.business_hours import business_hours_bp
from adrevolution.routes.communications import communications_bp
from adrevolution.routes.permissions import permissions_bp
from adrevolution.routes.labour_cost import labour_cost_bp
from adrevolution.routes.resources import resources_bp

__all__ = [
    'auth_bp',
    'users_bp',
    'account_bp',
    'company_bp',
    'business_hours_bp',
    'communications_bp',
    'permissions_bp',
    'labour_cost_bp',
    'resources_bp',
]
