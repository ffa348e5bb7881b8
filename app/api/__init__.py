# app/api/__init__.py
# fabryka aplikacji jest w app.main.create_app
