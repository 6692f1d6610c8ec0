from catalog.routes.main import bp as main_bp
from catalog.routes.categories import bp as categories_bp
from catalog.routes.books import bp as books_bp
from catalog.routes.errors import register_error_handlers


def register_blueprints(app):
    app.register_blueprint(main_bp)
    app.register_blueprint(categories_bp, url_prefix="/api/categories")
    app.register_blueprint(books_bp, url_prefix="/api/books")
    register_error_handlers(app)
