"""Benefit Designer service routers."""

from apogee.api.v1.benefit_designer import categories, templates

routers = [
    categories.router,
    templates.router,
]
