"""HTTP clients for calling the other portal services."""

from apogee.clients.benefit_designer import BenefitDesignerClient
from apogee.clients.quoting import QuotingClient

__all__ = ["BenefitDesignerClient", "QuotingClient"]
