from flask import Blueprint, jsonify, request

from catalog.forms.book_forms import BookForm, BookUpdateForm, PaginationForm
from catalog.routes import serializers
from catalog.routes.errors import validated
from catalog.services import book_service
from catalog.services.category_service import UNSET

bp = Blueprint("books", __name__)


def _page_args():
    form = validated(PaginationForm(formdata=request.args))
    return form.page.data or 1, form.limit.data


@bp.route("", methods=["POST"])
def create_book():
    form = validated(BookForm())
    book = book_service.create_book(form.name.data, form.category_id.data)
    return jsonify(serializers.book_to_dict(book)), 201


@bp.route("", methods=["GET"])
def list_books():
    page, limit = _page_args()
    pagination = book_service.get_books(page, limit)
    return jsonify(serializers.page_to_dict(pagination, serializers.book_to_dict))


@bp.route("/by-category/<uuid:category_id>", methods=["GET"])
def list_books_by_category(category_id):
    page, limit = _page_args()
    pagination = book_service.get_books_by_category_page(str(category_id), page, limit)
    return jsonify(serializers.page_to_dict(pagination, serializers.book_to_dict))


@bp.route("/<uuid:book_id>", methods=["GET"])
def get_book(book_id):
    book = book_service.get_book(str(book_id))
    breadcrumb = book_service.get_breadcrumb(book)
    return jsonify(serializers.book_to_dict(book, breadcrumb=breadcrumb))


@bp.route("/<uuid:book_id>", methods=["PATCH"])
def update_book(book_id):
    form = validated(BookUpdateForm())
    book = book_service.update_book(
        str(book_id),
        name=form.name.data if form.provided("name") else UNSET,
        category_id=form.category_id.data if form.provided("category_id") else UNSET,
    )
    return jsonify(serializers.book_to_dict(book))


@bp.route("/<uuid:book_id>", methods=["DELETE"])
def delete_book(book_id):
    book_service.delete_book(str(book_id))
    return "", 204
