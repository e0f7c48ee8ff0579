"""Domain services built on the authenticated sender."""

from .organizations import Organization, OrganizationService, parse_organization

__all__ = ["Organization", "OrganizationService", "parse_organization"]
