"""JSON shapes returned by the API. Field names are camelCase."""


def _timestamp(value):
    return value.isoformat() if value is not None else None


def category_summary(category) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "parentId": category.parent_id,
        "createdAt": _timestamp(category.created_at),
        "updatedAt": _timestamp(category.updated_at),
    }


def category_to_dict(category) -> dict:
    data = category_summary(category)
    data["parent"] = category_summary(category.parent) if category.parent else None
    data["children"] = [category_summary(c) for c in category.children]
    return data


def category_detail(category) -> dict:
    data = category_to_dict(category)
    data["ancestors"] = [category_summary(a) for a in category.ancestors]
    return data


def tree_node(node) -> dict:
    data = category_summary(node.category)
    data["children"] = [tree_node(child) for child in node.children]
    return data


def book_to_dict(book, *, breadcrumb: str | None = None) -> dict:
    data = {
        "id": book.id,
        "name": book.name,
        "categoryId": book.category_id,
        "category": category_summary(book.category),
        "createdAt": _timestamp(book.created_at),
        "updatedAt": _timestamp(book.updated_at),
    }
    if breadcrumb is not None:
        data["breadcrumb"] = breadcrumb
    return data


def page_to_dict(pagination, serialize) -> dict:
    return {
        "items": [serialize(item) for item in pagination.items],
        "meta": {
            "page": pagination.page,
            "limit": pagination.per_page,
            "total": pagination.total,
            "pageCount": pagination.pages,
        },
    }
