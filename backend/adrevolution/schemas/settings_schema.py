"""
Per-user and per-owner settings schemas.

Account, business hours, notification settings, labour cost, permission and
position payloads are small flat objects; responses for them use the models'
to_dict().
"""

import json

from marshmallow import Schema, fields, validate, validates, ValidationError

from adrevolution.models.labour_cost import LabourCost
from adrevolution.models.user_position import UserPosition


class AccountUpdateSchema(Schema):
    is_blocking_enabled = fields.Boolean(required=True)


def validate_day_hours(value):
    """
    A business day is a JSON object string: {"start", "end", "enabled"}.

    start and end are HH:MM and end must not be before start.
    """
    try:
        day = json.loads(value)
    except (TypeError, ValueError):
        raise ValidationError("Business hours must be a JSON object")

    if not isinstance(day, dict):
        raise ValidationError("Business hours must be a JSON object")

    missing = [key for key in ('start', 'end', 'enabled') if key not in day]
    if missing:
        raise ValidationError(f"Missing keys: {', '.join(missing)}")

    time_format = validate.Regexp(r'^([01]\d|2[0-3]):[0-5]\d$', error="Time must be HH:MM")
    time_format(str(day['start']))
    time_format(str(day['end']))

    if day['end'] < day['start']:
        raise ValidationError("End time must not be before start time")

    if not isinstance(day['enabled'], bool):
        raise ValidationError("enabled must be a boolean")


class BusinessHoursUpdateSchema(Schema):
    """Used for PATCH /business-hours. Each day is optional."""
    monday = fields.Str(validate=validate_day_hours)
    tuesday = fields.Str(validate=validate_day_hours)
    wednesday = fields.Str(validate=validate_day_hours)
    thursday = fields.Str(validate=validate_day_hours)
    friday = fields.Str(validate=validate_day_hours)
    saturday = fields.Str(validate=validate_day_hours)
    sunday = fields.Str(validate=validate_day_hours)


class CommunicationUpdateSchema(Schema):
    surveys = fields.Boolean()
    error_messages = fields.Boolean()


class LabourCostUpdateSchema(Schema):
    labour_cost = fields.Float(validate=[
        validate.Range(min=0, error="Labour cost cannot be negative"),
        validate.Range(max=LabourCost.MAX_LABOUR_COST, error="Labour cost is too large"),
    ])
    cost_unit = fields.Str(validate=validate.OneOf(LabourCost.VALID_UNITS))


class PermissionUpdateSchema(Schema):
    is_admin = fields.Boolean(required=True)


class PositionUpdateSchema(Schema):
    name = fields.Str(required=True, validate=validate.OneOf(UserPosition.VALID_NAMES))

    @validates('name')
    def validate_not_owner(self, value, **kwargs):
        if value == UserPosition.COMPANY_OWNER:
            raise ValidationError("The company owner position cannot be assigned")


account_update_schema = AccountUpdateSchema()
business_hours_update_schema = BusinessHoursUpdateSchema()
communication_update_schema = CommunicationUpdateSchema()
labour_cost_update_schema = LabourCostUpdateSchema()
permission_update_schema = PermissionUpdateSchema()
position_update_schema = PositionUpdateSchema()
