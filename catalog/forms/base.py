import uuid

from flask import request
from flask_wtf import FlaskForm
from werkzeug.exceptions import BadRequest
from wtforms import StringField
from wtforms.validators import StopValidation, ValidationError


class JSONForm(FlaskForm):
    """Base for forms filled from a JSON request body.

    Flask-WTF reads ``request.get_json()`` on submitted requests. The API holds
    no session state, so CSRF tokens are not used.
    """

    class Meta:
        csrf = False

        def wrap_formdata(self, form, formdata):
            # Flask-WTF can only unpack a JSON object into form data.
            if (
                form.is_submitted()
                and request.is_json
                and not isinstance(request.get_json(), dict)
            ):
                raise BadRequest("Request body must be a JSON object.")
            return super().wrap_formdata(form, formdata)

    def provided(self, field_name: str) -> bool:
        """True when the request carried the field, even as ``null``."""
        return bool(self[field_name].raw_data)


class JSONStringField(StringField):
    """A string field that rejects JSON numbers, lists and objects."""

    def process_formdata(self, valuelist):
        # A JSON list arrives as several values.
        if len(valuelist) > 1 or (
            valuelist and valuelist[0] is not None and not isinstance(valuelist[0], str)
        ):
            self.data = None
            raise ValueError(self.gettext("Not a valid string."))
        super().process_formdata(valuelist)


def present_if_provided(form, field):
    """The field may be omitted, but not sent as null or blank."""
    if not field.raw_data:
        raise StopValidation()
    if field.data is None or not field.data.strip():
        raise StopValidation(field.gettext("This field cannot be empty."))


def uuid_or_null(form, field):
    if field.data is None:
        return
    try:
        uuid.UUID(field.data)
    except ValueError as exc:
        raise ValidationError(field.gettext("Invalid UUID.")) from exc
