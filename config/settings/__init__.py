# config/settings/__init__.py
"""
Settings package.
Point DJANGO_SETTINGS_MODULE at config.settings.development or
config.settings.production; manage.py and the ASGI/WSGI entry points
choose one from the DEBUG environment variable.
"""
