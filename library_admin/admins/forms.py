# library_admin/admins/forms.py
from flask import current_app
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SelectField, SubmitField
from wtforms.validators import DataRequired, Email, EqualTo, Length, Optional, Regexp, ValidationError

from library_admin.extensions import db
from library_admin.models import User
from library_admin.services.password_policy import PasswordPolicy

LIBRARY_ID_REGEX = r'^\d{1,10}$'

SEX_CHOICES = [('m', 'Male'), ('f', 'Female')]


def _strip(value):
    return value.strip() if isinstance(value, str) else value


# --- Custom Validators ---
class Lowercase:
    """Validator that rejects values containing uppercase characters."""

    def __init__(self, message=None):
        self.message = message or 'The email field must be lowercase.'

    def __call__(self, form, field):
        if field.data and field.data != field.data.lower():
            raise ValidationError(self.message)


class StrongPassword:
    """Validator applying the configured PasswordPolicy; one error per failed rule."""

    def __init__(self, policy=None):
        self.policy = policy

    def __call__(self, form, field):
        policy = self.policy or PasswordPolicy.from_config(current_app.config)
        messages = policy.violations(field.data)
        if messages:
            # Keep every rule message, not just the first
            field.errors.extend(messages[:-1])
            raise ValidationError(messages[-1])


# --- Forms ---
class CreateAdminForm(FlaskForm):
    library_id = StringField('Library ID', filters=[_strip], validators=[
        DataRequired(message='The library id field is required.'),
        Regexp(LIBRARY_ID_REGEX, message='The library id field must be between 1 and 10 digits.'),
    ])
    first_name = StringField('First Name', filters=[_strip], validators=[
        DataRequired(message='The first name field is required.'),
        Length(max=50, message='The first name field must not be greater than 50 characters.'),
    ])
    middle_initial = StringField('Middle Initial', filters=[_strip], validators=[
        Optional(),
        Length(max=1, message='The middle initial field must not be greater than 1 characters.'),
    ])
    last_name = StringField('Last Name', filters=[_strip], validators=[
        DataRequired(message='The last name field is required.'),
        Length(max=50, message='The last name field must not be greater than 50 characters.'),
    ])
    sex = SelectField('Sex', choices=SEX_CHOICES, validate_choice=True, validators=[
        DataRequired(message='The sex field is required.'),
    ])
    contact_number = StringField('Contact Number', filters=[_strip], validators=[
        Optional(),
        Length(max=30, message='The contact number field must not be greater than 30 characters.'),
    ])
    role_title = StringField('Role Title', filters=[_strip], validators=[
        DataRequired(message='The role title field is required.'),
        Length(max=100, message='The role title field must not be greater than 100 characters.'),
    ])
    email = StringField('Email', filters=[_strip], validators=[
        DataRequired(message='The email field is required.'),
        Lowercase(),
        Email(message='The email field must be a valid email address.', check_deliverability=False),
        Length(max=255, message='The email field must not be greater than 255 characters.'),
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='The password field is required.'),
        EqualTo('password_confirmation', message='The password field confirmation does not match.'),
        StrongPassword(),
    ])
    password_confirmation = PasswordField('Confirm Password')
    submit = SubmitField('Create Admin')

    def validate_library_id(self, library_id):
        # Soft-deleted users still hold their library id
        if not library_id.data or not library_id.data.isdigit():
            return
        existing = db.session.scalar(
            db.select(User.id).where(User.library_id == int(library_id.data))
        )
        if existing is not None:
            raise ValidationError('The library id has already been taken.')

    def validate_email(self, email):
        if not email.data:
            return
        existing = db.session.scalar(db.select(User.id).where(User.email == email.data))
        if existing is not None:
            raise ValidationError('The email has already been taken.')

    def admin_data(self):
        """Validated values for AdminService.create_admin."""
        return {
            'library_id': self.library_id.data,
            'first_name': self.first_name.data,
            'middle_initial': self.middle_initial.data or None,
            'last_name': self.last_name.data,
            'sex': self.sex.data,
            'contact_number': self.contact_number.data or None,
            'role_title': self.role_title.data,
            'email': self.email.data,
            'password': self.password.data,
        }
