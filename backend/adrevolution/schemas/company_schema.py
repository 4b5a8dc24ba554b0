"""
Company Schemas for Data Validation and Serialization

Schemas:
- CompanyUpdateSchema: Partial updates of company profile, address and locale
- CompanyDetailsUpdateSchema: Onboarding answers plus the business hours display flag
- CompanyResponseSchema: For API responses
"""

from marshmallow import Schema, fields, validate, validates, ValidationError


WEEKDAYS = ['MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', 'SATURDAY', 'SUNDAY']


class CompanyUpdateSchema(Schema):
    """
    Schema for updating a company.

    Used for PATCH /company. All fields are optional.
    """
    company_name = fields.Str(validate=validate.Length(min=1, max=255))
    phone_number = fields.Str(validate=validate.Length(max=50))
    website_url = fields.Str(validate=validate.Length(max=255))
    company_email = fields.Email(validate=validate.Length(max=255))
    street1 = fields.Str(validate=validate.Length(max=255))
    city = fields.Str(validate=validate.Length(max=100))
    state = fields.Str(validate=validate.Length(max=100))
    post_code = fields.Str(validate=validate.Length(max=20))
    country = fields.Str(validate=validate.Length(max=100))
    timezone = fields.Str(validate=validate.Length(max=64))
    date_format = fields.Str(validate=validate.Length(max=32))
    time_format = fields.Str(validate=validate.Length(max=32))
    first_day_of_week = fields.Str(validate=validate.OneOf(WEEKDAYS))
    display_business_hours = fields.Boolean()

    @validates('company_name')
    def validate_company_name(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("Company name cannot be blank")


class CompanyDetailsUpdateSchema(Schema):
    """Used for PATCH /company-details."""
    team_size = fields.Str(validate=validate.Length(max=50))
    estimated_annual_revenue = fields.Str(validate=validate.Length(max=50))
    top_priority = fields.Str(validate=validate.Length(max=255))
    industry = fields.Str(validate=validate.Length(max=100))
    heard_about_us = fields.Str(validate=validate.Length(max=255))
    display_business_hours = fields.Boolean()


class CompanyResponseSchema(Schema):
    id = fields.UUID(dump_only=True)
    owner_id = fields.UUID(dump_only=True)
    company_details_id = fields.UUID(dump_only=True)
    company_name = fields.Str(dump_only=True)
    phone_number = fields.Str(dump_only=True)
    website_url = fields.Str(dump_only=True)
    company_email = fields.Str(dump_only=True)
    street1 = fields.Str(dump_only=True)
    city = fields.Str(dump_only=True)
    state = fields.Str(dump_only=True)
    post_code = fields.Str(dump_only=True)
    country = fields.Str(dump_only=True)
    timezone = fields.Str(dump_only=True)
    date_format = fields.Str(dump_only=True)
    time_format = fields.Str(dump_only=True)
    first_day_of_week = fields.Str(dump_only=True)
    display_business_hours = fields.Boolean(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


company_update_schema = CompanyUpdateSchema()
company_details_update_schema = CompanyDetailsUpdateSchema()
company_response_schema = CompanyResponseSchema()
