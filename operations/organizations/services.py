import logging

from django.db import transaction

from .models import Organization

logger = logging.getLogger(__name__)


class OrganizationService:

    @staticmethod
    def list_organizations(query_params):
        """
        Organizations filtered by ?search= and ?is_active=.
        """
        return (
            Organization.objects.all()
            .filter_by_search_params(query_params)
            .filter_by_active_param(query_params)
            .order_by('organization_name')
        )

    @staticmethod
    @transaction.atomic
    def create(user, data):
        organization = Organization(**data)
        organization.full_clean()
        organization.save()
        logger.info("Organization %s created by %s", organization.organization_code, user.email)
        return organization

    @staticmethod
    @transaction.atomic
    def update(user, organization, data):
        for key, value in data.items():
            setattr(organization, key, value)
        organization.full_clean()
        organization.save()
        logger.info("Organization %s updated by %s", organization.organization_code, user.email)
        return organization

    @staticmethod
    def toggle(user, organization):
        is_active = organization.toggle_status()
        logger.info(
            "Organization %s %s by %s",
            organization.organization_code, 'activated' if is_active else 'deactivated', user.email
        )
        return organization

    @staticmethod
    def delete(user, organization):
        """Raises ValidationError while the organization still has ports."""
        code = organization.organization_code
        organization.delete()
        logger.info("Organization %s deleted by %s", code, user.email)
