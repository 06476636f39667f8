# module indieevent.app
"""
Instance FastAPI unique, construite par la factory (collaborateurs choisis selon la configuration).
"""
from indieevent.app_setup.factory import create_app

app = create_app()
