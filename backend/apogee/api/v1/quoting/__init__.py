"""Quoting service routers."""

from apogee.api.v1.quoting import applicants, employee_classes, groups, quote_benefits, quotes, templates

routers = [
    quotes.router,
    applicants.router,
    groups.router,
    employee_classes.router,
    quote_benefits.router,
    templates.router,
]
