"""
Business logic for the clinic's service catalogue (X-Ray, consultations,
lab tests and so on).  Records are free-form; ids are sequential.
"""

from .collection_service import CollectionService


class ServiceCatalogService(CollectionService):
    collection = "services"
    label = "Service"
