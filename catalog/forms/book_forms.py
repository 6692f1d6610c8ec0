from flask import current_app
from wtforms import IntegerField
from wtforms.validators import UUID, DataRequired, Length, NumberRange, Optional, ValidationError

from catalog.forms.base import JSONForm, JSONStringField, present_if_provided


class BookForm(JSONForm):
    name = JSONStringField("Name", validators=[DataRequired(), Length(max=255)])
    category_id = JSONStringField(
        "Category", name="categoryId", validators=[DataRequired(), UUID()]
    )


class BookUpdateForm(JSONForm):
    name = JSONStringField("Name", validators=[present_if_provided, Length(max=255)])
    category_id = JSONStringField(
        "Category", name="categoryId", validators=[present_if_provided, UUID()]
    )


class PaginationForm(JSONForm):
    """Query-string paging: ``?page=2&limit=25``. Bind with ``formdata=request.args``."""

    page = IntegerField("Page", default=1, validators=[Optional(), NumberRange(min=1)])
    limit = IntegerField("Limit", validators=[Optional()])

    def validate_limit(self, field):
        if field.data is None:
            return
        maximum = current_app.config["MAX_PAGE_LIMIT"]
        if not 1 <= field.data <= maximum:
            raise ValidationError(f"Limit must be between 1 and {maximum}.")
