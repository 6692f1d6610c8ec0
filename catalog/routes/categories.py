from flask import Blueprint, jsonify

from catalog.forms.category_forms import CategoryForm, CategoryUpdateForm
from catalog.routes import serializers
from catalog.routes.errors import validated
from catalog.services import category_service
from catalog.services.category_service import UNSET

bp = Blueprint("categories", __name__)


@bp.route("", methods=["POST"])
def create_category():
    form = validated(CategoryForm())
    category = category_service.create_category(
        form.name.data, parent_id=form.parent_id.data
    )
    return jsonify(serializers.category_to_dict(category)), 201


@bp.route("", methods=["GET"])
def list_categories():
    categories = category_service.get_categories()
    return jsonify([serializers.category_to_dict(c) for c in categories])


@bp.route("/tree", methods=["GET"])
def category_tree():
    roots = category_service.get_category_tree()
    return jsonify([serializers.tree_node(node) for node in roots])


@bp.route("/<uuid:category_id>", methods=["GET"])
def get_category(category_id):
    category = category_service.get_category(str(category_id))
    return jsonify(serializers.category_detail(category))


@bp.route("/<uuid:category_id>", methods=["PATCH"])
def update_category(category_id):
    form = validated(CategoryUpdateForm())
    category = category_service.update_category(
        str(category_id),
        name=form.name.data if form.provided("name") else UNSET,
        parent_id=form.parent_id.data if form.provided("parent_id") else UNSET,
    )
    return jsonify(serializers.category_to_dict(category))


@bp.route("/<uuid:category_id>", methods=["DELETE"])
def delete_category(category_id):
    category_service.delete_category(str(category_id))
    return "", 204


@bp.route("/<uuid:category_id>/subcategories", methods=["GET"])
def list_subcategories(category_id):
    subcategories = category_service.get_all_subcategories(str(category_id))
    return jsonify([serializers.category_summary(c) for c in subcategories])


@bp.route("/<uuid:category_id>/path", methods=["GET"])
def category_path(category_id):
    path = category_service.get_full_category_path(str(category_id))
    return jsonify([serializers.category_summary(c) for c in path])
