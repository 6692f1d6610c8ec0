from wtforms.validators import DataRequired, Length

from catalog.forms.base import (
    JSONForm,
    JSONStringField,
    present_if_provided,
    uuid_or_null,
)


class CategoryForm(JSONForm):
    name = JSONStringField("Name", validators=[DataRequired(), Length(max=255)])
    parent_id = JSONStringField("Parent", name="parentId", validators=[uuid_or_null])


class CategoryUpdateForm(JSONForm):
    name = JSONStringField("Name", validators=[present_if_provided, Length(max=255)])
    parent_id = JSONStringField("Parent", name="parentId", validators=[uuid_or_null])
